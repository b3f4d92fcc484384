"""Import neural-network descriptions, lay them out as rows and preview conv filters."""

from .errors import (
    CycleDetectedError,
    DecodeError,
    DepthIndexError,
    LayerDefinitionError,
    NetscopeError,
    ShapeMismatchError,
)

__all__ = [
    "NetscopeError",
    "ShapeMismatchError",
    "DepthIndexError",
    "DecodeError",
    "LayerDefinitionError",
    "CycleDetectedError",
]
