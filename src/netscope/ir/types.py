from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, List, Optional, Tuple

from netscope.errors import LayerDefinitionError, ShapeMismatchError

from .tensor import Tensor, TensorShape

if TYPE_CHECKING:
    from netscope.model.models import LayerDescriptor


class LayerKind(str, Enum):
    NONE = "none"
    INPUT = "input"
    DENSE = "dense"
    CONV2D = "conv2d"
    TRANS_CONV2D = "transConv2d"
    RELU = "relu"
    LEAKY_RELU = "leakyRelu"
    SIGMOID = "sigmoid"
    TANH = "tanh"
    SWISH = "swish"
    SELU = "selu"
    SOFTMAX = "softmax"
    GELU = "gelu"
    BATCH_NORMALIZE = "batchNormalize"
    LAYER_NORMALIZE = "layerNormalize"
    DROPOUT = "dropout"
    FLATTEN = "flatten"
    MAX_POOL = "maxPool"
    AVG_POOL = "avgPool"
    GLOBAL_AVG_POOL = "globalAvgPool"
    RESHAPE = "reshape"
    LSTM = "lstm"
    EMBEDDING = "embedding"
    RES_NET = "resNet"

    @property
    def is_activation(self) -> bool:
        return self in _ACTIVATIONS

    @property
    def is_convolution(self) -> bool:
        return self in (LayerKind.CONV2D, LayerKind.TRANS_CONV2D)

    @property
    def category(self) -> str:
        return _CATEGORIES.get(self, "Layer")


_ACTIVATIONS = frozenset(
    {
        LayerKind.RELU,
        LayerKind.LEAKY_RELU,
        LayerKind.SIGMOID,
        LayerKind.TANH,
        LayerKind.SWISH,
        LayerKind.SELU,
        LayerKind.SOFTMAX,
        LayerKind.GELU,
    }
)

_CATEGORIES = {
    LayerKind.INPUT: "Data Entry Point",
    LayerKind.DENSE: "Fully Connected",
    LayerKind.CONV2D: "Convolution",
    LayerKind.TRANS_CONV2D: "Convolution",
    LayerKind.BATCH_NORMALIZE: "Normalization",
    LayerKind.LAYER_NORMALIZE: "Normalization",
    LayerKind.DROPOUT: "Regularization",
    LayerKind.FLATTEN: "Reshape",
    LayerKind.RESHAPE: "Reshape",
    LayerKind.MAX_POOL: "Pooling",
    LayerKind.AVG_POOL: "Pooling",
    LayerKind.GLOBAL_AVG_POOL: "Pooling",
    LayerKind.LSTM: "Recurrent",
    LayerKind.EMBEDDING: "Embedding",
    LayerKind.RES_NET: "Residual",
}
_CATEGORIES.update({kind: "Activation" for kind in _ACTIVATIONS})


@dataclass
class LayerRecord:
    kind: LayerKind
    input_shape: TensorShape = field(default_factory=TensorShape.empty)
    output_shape: TensorShape = field(default_factory=TensorShape.empty)
    parameters: int = 0
    details: str = ""
    weights: List[Tensor] = field(default_factory=list)
    weights_size: TensorShape = field(default_factory=TensorShape.empty)
    name: str = ""

    def __post_init__(self) -> None:
        if self.parameters < 0:
            raise LayerDefinitionError(f"Layer '{self.name}' has negative parameter count {self.parameters}")

    @classmethod
    def from_descriptor(cls, desc: "LayerDescriptor") -> "LayerRecord":
        try:
            weights = desc.export_weights()
        except ShapeMismatchError as err:
            print(f"[netscope] layer '{desc.name}' weights unavailable: {err}", flush=True)
            weights = []

        parameters = desc.parameters
        if parameters is None:
            parameters = sum(len(w) for w in weights)

        kind = LayerKind(desc.kind)
        if kind.is_convolution and desc.filter_size is not None:
            weights_size = TensorShape(
                desc.filter_size[0], desc.filter_size[1], desc.filter_count or 0
            )
        else:
            weights_size = TensorShape.empty()

        return cls(
            kind=kind,
            input_shape=TensorShape.from_array(desc.input_size),
            output_shape=TensorShape.from_array(desc.output_size),
            parameters=parameters,
            details=desc.details,
            weights=weights,
            weights_size=weights_size,
            name=desc.name or "",
        )


@dataclass(eq=False)
class GraphNode:
    record: LayerRecord
    connections: List["GraphNode"] = field(default_factory=list)
    id: str = field(default_factory=lambda: uuid.uuid4().hex)
    # advisory, assigned by whatever renders the graph
    position: Optional[Tuple[float, float]] = None

    @property
    def kind(self) -> LayerKind:
        return self.record.kind

    @property
    def name(self) -> str:
        return self.record.name

    def connect(self, *children: "GraphNode") -> "GraphNode":
        self.connections.extend(children)
        return self

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GraphNode):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __repr__(self) -> str:
        label = self.name or self.kind.value
        return f"GraphNode({label!r}, connections={len(self.connections)})"
