from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field, FiniteFloat

from netscope.ir.tensor import Tensor, TensorShape
from netscope.ir.types import LayerKind


class WeightTensor(BaseModel):
    size: List[int] = Field(..., min_length=1, max_length=3)
    values: List[FiniteFloat] = Field(default_factory=list)


class LayerDescriptor(BaseModel):
    name: Optional[str] = None
    kind: LayerKind
    input_size: List[int] = Field(default_factory=list, max_length=3)
    output_size: List[int] = Field(default_factory=list, max_length=3)
    parameters: Optional[int] = None
    details: str = ""
    filter_size: Optional[List[int]] = Field(default=None, min_length=2, max_length=2)
    filter_count: Optional[int] = Field(default=None, ge=1)
    inputs: Optional[List[str]] = None
    weights: List[WeightTensor] = Field(default_factory=list)

    def export_weights(self) -> List[Tensor]:
        """Materialize the stored weight blobs; raises ShapeMismatchError on a bad blob."""
        return [Tensor(w.values, TensorShape.from_array(w.size)) for w in self.weights]


class ModelDescription(BaseModel):
    name: Optional[str] = None
    layers: List[LayerDescriptor]

    @property
    def is_branched(self) -> bool:
        return any(layer.inputs for layer in self.layers)

    def layer(self, ref: str) -> LayerDescriptor:
        """Look a layer up by name, or by position when ``ref`` is an integer string."""
        for layer in self.layers:
            if layer.name == ref:
                return layer
        if ref.lstrip("-").isdigit():
            return self.layers[int(ref)]
        raise KeyError(f"No layer named '{ref}'")
