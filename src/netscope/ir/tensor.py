from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Sequence, Union

import torch

from netscope.errors import DepthIndexError, ShapeMismatchError

EMPTY_PLACEHOLDER = "—"


@dataclass(frozen=True)
class TensorShape:
    rows: int = 0
    columns: int = 0
    depth: int = 1

    def __post_init__(self) -> None:
        for name in ("rows", "columns", "depth"):
            value = getattr(self, name)
            if not isinstance(value, int) or value < 0:
                raise ShapeMismatchError(f"TensorShape.{name} must be a non-negative int, got {value!r}")

    @classmethod
    def empty(cls) -> "TensorShape":
        return cls(0, 0, 0)

    @classmethod
    def from_array(cls, dims: Sequence[int]) -> "TensorShape":
        """Build a shape from ``[rows, columns, depth]``; missing trailing dims are 1."""
        dims = list(dims)
        if not dims:
            return cls.empty()
        if len(dims) > 3:
            raise ShapeMismatchError(f"Expected at most 3 dimensions, got {len(dims)}")
        padded = dims + [1] * (3 - len(dims))
        return cls(int(padded[0]), int(padded[1]), int(padded[2]))

    @property
    def size(self) -> int:
        return self.rows * self.columns * self.depth

    @property
    def is_empty(self) -> bool:
        return self.rows == 0 and self.columns == 0 and self.depth == 0

    def as_tuple(self) -> tuple[int, int, int]:
        return (self.rows, self.columns, self.depth)

    def format(self) -> str:
        if self.is_empty:
            return EMPTY_PLACEHOLDER
        if self.columns == 1 and self.depth == 1:
            return str(self.rows)
        return "×".join(str(d) for d in self.as_tuple())

    def __str__(self) -> str:
        return self.format()


class Tensor:
    """Flat float32 buffer laid out depth-major: ``(d, r, c) -> d*R*C + r*C + c``."""

    __slots__ = ("storage", "shape")

    def __init__(self, values: Union[Iterable[float], torch.Tensor], shape: TensorShape) -> None:
        if isinstance(values, torch.Tensor):
            storage = values.detach().to(torch.float32).reshape(-1).clone()
        else:
            storage = torch.tensor(list(values), dtype=torch.float32)
        if storage.numel() != shape.size:
            raise ShapeMismatchError(
                f"Buffer of length {storage.numel()} does not fit shape {shape.as_tuple()}"
            )
        self.storage = storage
        self.shape = shape

    @classmethod
    def empty(cls, rows: int, columns: int) -> "Tensor":
        return cls(torch.empty(0), TensorShape(rows, columns, 0))

    @classmethod
    def from_plane(cls, plane: torch.Tensor) -> "Tensor":
        if plane.dim() != 2:
            raise ShapeMismatchError(f"Expected a 2-D plane, got {plane.dim()} dims")
        rows, columns = plane.shape
        return cls(plane, TensorShape(int(rows), int(columns), 1))

    @classmethod
    def from_planes(cls, planes: torch.Tensor) -> "Tensor":
        if planes.dim() != 3:
            raise ShapeMismatchError(f"Expected (depth, rows, columns) planes, got {planes.dim()} dims")
        depth, rows, columns = planes.shape
        return cls(planes, TensorShape(int(rows), int(columns), int(depth)))

    @classmethod
    def from_nested(cls, values: Sequence) -> "Tensor":
        """Accepts ``[rows][columns]`` or ``[depth][rows][columns]`` nested lists."""
        data = torch.tensor(values, dtype=torch.float32)
        if data.dim() == 2:
            return cls.from_plane(data)
        return cls.from_planes(data)

    @property
    def rows(self) -> int:
        return self.shape.rows

    @property
    def columns(self) -> int:
        return self.shape.columns

    @property
    def depth(self) -> int:
        return self.shape.depth

    def to_planes(self) -> torch.Tensor:
        return self.storage.view(self.depth, self.rows, self.columns)

    def depth_slice(self, index: int) -> torch.Tensor:
        if not 0 <= index < self.depth:
            raise DepthIndexError(f"Depth index {index} out of range for depth {self.depth}")
        plane = self.rows * self.columns
        start = index * plane
        return self.storage[start : start + plane].view(self.rows, self.columns).clone()

    def concat(self, other: "Tensor") -> "Tensor":
        if self.rows != other.rows or self.columns != other.columns:
            raise ShapeMismatchError(
                f"Cannot concatenate {self.shape.as_tuple()} with {other.shape.as_tuple()} along depth"
            )
        shape = TensorShape(self.rows, self.columns, self.depth + other.depth)
        return Tensor(torch.cat([self.storage, other.storage]), shape)

    def tolist(self) -> List[float]:
        return self.storage.tolist()

    def __len__(self) -> int:
        return self.storage.numel()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Tensor):
            return NotImplemented
        return self.shape == other.shape and torch.equal(self.storage, other.storage)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Tensor(shape={self.shape.as_tuple()})"
