from __future__ import annotations

from pathlib import Path

from netscope.builders import build_network_graph
from netscope.ir.types import LayerKind
from netscope.layout.presentation import (
    ActivationPill,
    FilterCard,
    InputCard,
    LayerCard,
    describe_node,
    layer_color,
)
from netscope.model.api import load_model_file


def test_cards_follow_layer_kind(examples_dir: Path) -> None:
    build = build_network_graph(load_model_file(examples_dir / "tiny_cnn.yaml"))
    cards = {node.name: describe_node(node) for row in build.rows for node in row}

    assert isinstance(cards["input"], InputCard)
    assert cards["input"].shape == "8×8×3"

    conv = cards["conv1"]
    assert isinstance(conv, FilterCard)
    assert conv.gallery_size == 6
    assert conv.filter_shape == "3×3×2"
    assert conv.card.category == "Convolution"
    assert conv.card.parameters == "54"

    relu = cards["relu_1"]
    assert isinstance(relu, ActivationPill)
    assert relu.title == "Relu"

    dense = cards["classifier"]
    assert isinstance(dense, LayerCard)
    assert dense.category == "Fully Connected"
    assert dense.parameters == "330"
    assert dense.input_shape == "32"

    assert cards["flatten_3"].parameters is None


def test_palette() -> None:
    assert layer_color(LayerKind.SOFTMAX) == "#339933"
    assert layer_color(LayerKind.CONV2D) == "#0080cc"
    assert layer_color(LayerKind.LSTM) == "#9966cc"
    assert layer_color(LayerKind.NONE) == "#808080"
