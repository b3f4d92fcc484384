from .tensor import Tensor, TensorShape
from .types import GraphNode, LayerKind, LayerRecord

__all__ = ["Tensor", "TensorShape", "GraphNode", "LayerKind", "LayerRecord"]
