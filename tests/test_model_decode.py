from __future__ import annotations

from pathlib import Path

import pytest

from netscope.errors import DecodeError, NetscopeError
from netscope.ir.tensor import TensorShape
from netscope.ir.types import LayerKind, LayerRecord
from netscope.model.api import decode_model, dump_schema, load_model_file


EXAMPLES = ["tiny_cnn.yaml", "mlp.json", "residual.yaml"]


@pytest.mark.parametrize("name", EXAMPLES)
def test_examples_decode(examples_dir: Path, name: str) -> None:
    desc = load_model_file(examples_dir / name)
    assert desc.layers
    assert all(layer.name for layer in desc.layers)


def test_default_names_use_kind_and_index(examples_dir: Path) -> None:
    desc = load_model_file(examples_dir / "tiny_cnn.yaml")
    assert [layer.name for layer in desc.layers] == [
        "conv1",
        "relu_1",
        "pool1",
        "flatten_3",
        "classifier",
        "softmax_5",
    ]
    assert desc.layer("2").name == "pool1"
    with pytest.raises(KeyError):
        desc.layer("missing")


def test_missing_layers_fails() -> None:
    with pytest.raises(DecodeError):
        decode_model(b"name: nothing\n")


def test_empty_document_fails() -> None:
    with pytest.raises(DecodeError):
        decode_model(b"")


def test_malformed_yaml_fails() -> None:
    with pytest.raises(DecodeError):
        decode_model(b"layers: [unclosed")


def test_non_utf8_fails() -> None:
    with pytest.raises(DecodeError):
        decode_model(b"\xff\xfe\x00garbage")


def test_unknown_kind_fails() -> None:
    with pytest.raises(DecodeError):
        decode_model(b"layers:\n  - kind: teleport\n")


def test_duplicate_names_fail() -> None:
    doc = b"""
layers:
  - { name: a, kind: dense }
  - { name: a, kind: relu }
"""
    with pytest.raises(DecodeError):
        decode_model(doc)


def test_default_name_skips_names_already_taken() -> None:
    doc = b"""
layers:
  - { name: relu_1, kind: dense }
  - { kind: relu }
"""
    desc = decode_model(doc)
    names = [layer.name for layer in desc.layers]
    assert names[0] == "relu_1"
    assert names[1] != "relu_1"
    assert names[1].startswith("relu_1")


def test_conv_requires_filter_shape() -> None:
    doc = b"""
layers:
  - { name: conv, kind: conv2d, input_size: [8, 8, 3], output_size: [8, 8, 4] }
"""
    with pytest.raises(DecodeError):
        decode_model(doc)


def test_dense_cannot_declare_filters() -> None:
    doc = b"""
layers:
  - { name: fc, kind: dense, filter_size: [3, 3], filter_count: 2 }
"""
    with pytest.raises(DecodeError):
        decode_model(doc)


def test_inputs_must_reference_earlier_layers() -> None:
    doc = b"""
layers:
  - { name: a, kind: dense, inputs: [b] }
  - { name: b, kind: dense }
"""
    with pytest.raises(DecodeError):
        decode_model(doc)


def test_negative_parameters_fail() -> None:
    with pytest.raises(DecodeError):
        decode_model(b"layers:\n  - { kind: dense, parameters: -4 }\n")


@pytest.mark.parametrize("value", [".nan", ".inf", "-.inf"])
def test_non_finite_weights_fail(value: str) -> None:
    doc = f"""
layers:
  - name: conv
    kind: conv2d
    filter_size: [1, 1]
    filter_count: 1
    weights:
      - {{ size: [1, 1, 1], values: [{value}] }}
""".encode()
    with pytest.raises(DecodeError):
        decode_model(doc)


def test_hand_built_record_rejects_negative_parameters() -> None:
    with pytest.raises(NetscopeError):
        LayerRecord(kind=LayerKind.DENSE, name="fc", parameters=-1)


def test_bad_weight_blob_means_no_weights(capsys) -> None:
    doc = b"""
layers:
  - name: conv
    kind: conv2d
    filter_size: [2, 2]
    filter_count: 1
    weights:
      - { size: [2, 2, 1], values: [1, 2, 3] }
"""
    desc = decode_model(doc)
    record = LayerRecord.from_descriptor(desc.layers[0])
    assert record.weights == []
    assert record.parameters == 0
    assert record.weights_size == TensorShape(2, 2, 1)
    assert "weights unavailable" in capsys.readouterr().out


def test_record_counts_parameters_from_weights(examples_dir: Path) -> None:
    desc = load_model_file(examples_dir / "tiny_cnn.yaml")
    conv = LayerRecord.from_descriptor(desc.layers[0])
    assert conv.kind == LayerKind.CONV2D
    assert conv.parameters == 54
    assert conv.weights_size == TensorShape(3, 3, 2)
    assert conv.input_shape == TensorShape(8, 8, 3)
    dense = LayerRecord.from_descriptor(desc.layer("classifier"))
    assert dense.parameters == 330
    assert dense.weights == []
    assert dense.weights_size.is_empty


def test_dump_schema(tmp_path: Path) -> None:
    out = tmp_path / "schema.json"
    dump_schema(out)
    assert '"layers"' in out.read_text()
