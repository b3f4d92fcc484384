from __future__ import annotations

from typing import List, Optional


class NetscopeError(Exception):
    """Base class for every error raised by netscope."""


class ShapeMismatchError(NetscopeError, ValueError):
    pass


class DepthIndexError(NetscopeError, IndexError):
    pass


class DecodeError(NetscopeError):
    pass


class LayerDefinitionError(NetscopeError, ValueError):
    pass


class CycleDetectedError(NetscopeError):
    def __init__(self, message: str, path: Optional[List[str]] = None) -> None:
        super().__init__(message)
        self.path = path or []
