from __future__ import annotations

import threading
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from typing import Callable, Optional, Sequence

from netscope.builders import GraphBuild, build_network_graph
from netscope.ir.tensor import Tensor, TensorShape
from netscope.model.api import decode_model
from netscope.preview.filters import preview_filters

ResultFn = Callable[[object], None]
ErrorFn = Callable[[BaseException], None]


@dataclass
class WorkerConfig:
    thread_name_prefix: str = "netscope"


def import_network(data: bytes) -> GraphBuild:
    return build_network_graph(decode_model(data))


class BackgroundWorker:
    """Runs imports and previews one at a time off the caller's thread.

    Submitting a new job discards the pending one. A discarded job may still
    run to completion, but its result is never handed to ``on_done``.
    """

    def __init__(
        self,
        config: Optional[WorkerConfig] = None,
        *,
        on_done: Optional[ResultFn] = None,
        on_error: Optional[ErrorFn] = None,
    ) -> None:
        self.config = config or WorkerConfig()
        self.on_done = on_done
        self.on_error = on_error
        self._executor = ThreadPoolExecutor(
            max_workers=1, thread_name_prefix=self.config.thread_name_prefix
        )
        self._lock = threading.Lock()
        self._generation = 0
        self._pending: Optional[Future] = None

    @property
    def busy(self) -> bool:
        with self._lock:
            return self._pending is not None and not self._pending.done()

    def submit_import(self, data: bytes) -> Future:
        return self._submit(import_network, data)

    def submit_preview(
        self, filters: Sequence[Tensor], unit_shape: TensorShape, image: Tensor
    ) -> Future:
        return self._submit(preview_filters, list(filters), unit_shape, image)

    def discard(self) -> None:
        with self._lock:
            stale = self._release_locked()
        if stale is not None:
            stale.cancel()

    def shutdown(self, wait: bool = True) -> None:
        self.discard()
        self._executor.shutdown(wait=wait)

    def __enter__(self) -> "BackgroundWorker":
        return self

    def __exit__(self, *exc_info) -> None:
        self.shutdown()

    def _release_locked(self) -> Optional[Future]:
        # cancel() runs done callbacks inline, so callers cancel after releasing the lock
        stale = self._pending
        self._pending = None
        self._generation += 1
        return stale

    def _submit(self, fn: Callable, *args) -> Future:
        with self._lock:
            stale = self._release_locked()
            generation = self._generation
            future = self._executor.submit(fn, *args)
            self._pending = future
        if stale is not None:
            stale.cancel()
        future.add_done_callback(lambda f: self._publish(generation, f))
        return future

    def _publish(self, generation: int, future: Future) -> None:
        with self._lock:
            current = generation == self._generation and self._pending is future
            if current:
                self._pending = None
        if not current or future.cancelled():
            print(f"[netscope] discarded background job {generation}", flush=True)
            return
        error = future.exception()
        if error is not None:
            if self.on_error is not None:
                self.on_error(error)
            else:
                print(f"[netscope] background job {generation} failed: {error}", flush=True)
            return
        if self.on_done is not None:
            self.on_done(future.result())
