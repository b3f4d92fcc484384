from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from netscope.builders.utils import format_count
from netscope.ir.types import GraphNode, LayerKind

DEFAULT_COLOR = "#808080"

_PALETTE = {
    LayerKind.BATCH_NORMALIZE: "#9980cc",
    LayerKind.LAYER_NORMALIZE: "#9980cc",
    LayerKind.CONV2D: "#0080cc",
    LayerKind.TRANS_CONV2D: "#0080cc",
    LayerKind.DENSE: "#cc6666",
    LayerKind.DROPOUT: "#b31ab3",
    LayerKind.FLATTEN: "#b366cc",
    LayerKind.MAX_POOL: "#e69933",
    LayerKind.AVG_POOL: "#e69933",
    LayerKind.RESHAPE: "#cc99cc",
    LayerKind.LSTM: "#9966cc",
    LayerKind.EMBEDDING: "#9966cc",
    LayerKind.GLOBAL_AVG_POOL: "#e64d4d",
    LayerKind.RES_NET: "#4db34d",
    LayerKind.INPUT: "#4db380",
}

ACTIVATION_COLOR = "#339933"


def layer_color(kind: LayerKind) -> str:
    if kind.is_activation:
        return ACTIVATION_COLOR
    return _PALETTE.get(kind, DEFAULT_COLOR)


def _title(kind: LayerKind) -> str:
    return kind.value[:1].upper() + kind.value[1:]


@dataclass(frozen=True)
class InputCard:
    title: str
    color: str
    shape: str


@dataclass(frozen=True)
class ActivationPill:
    title: str
    color: str


@dataclass(frozen=True)
class LayerCard:
    title: str
    color: str
    category: str
    input_shape: str
    output_shape: str
    parameters: Optional[str]
    details: str


@dataclass(frozen=True)
class FilterCard:
    card: LayerCard
    filter_shape: str
    gallery_size: int


NodeCard = Union[InputCard, ActivationPill, LayerCard, FilterCard]


def _layer_card(node: GraphNode) -> LayerCard:
    record = node.record
    return LayerCard(
        title=_title(record.kind),
        color=layer_color(record.kind),
        category=record.kind.category,
        input_shape=record.input_shape.format(),
        output_shape=record.output_shape.format(),
        parameters=format_count(record.parameters) if record.parameters else None,
        details=record.details,
    )


def describe_node(node: GraphNode) -> NodeCard:
    """Pick the presentation variant for ``node`` from its layer kind."""
    kind = node.kind
    if kind == LayerKind.INPUT:
        return InputCard(
            title="Input Layer",
            color=layer_color(kind),
            shape=node.record.input_shape.format(),
        )
    if kind.is_activation:
        return ActivationPill(title=_title(kind), color=layer_color(kind))
    if kind.is_convolution:
        record = node.record
        return FilterCard(
            card=_layer_card(node),
            filter_shape=record.weights_size.format(),
            gallery_size=sum(w.depth for w in record.weights),
        )
    return _layer_card(node)
