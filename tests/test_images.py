from __future__ import annotations

from pathlib import Path

import pytest
import torch
from PIL import Image

from netscope.errors import DecodeError, ShapeMismatchError
from netscope.ir.tensor import Tensor, TensorShape
from netscope.preview.images import decode_image, encode_image, save_image


def test_decode_png(tmp_path: Path) -> None:
    img = Image.new("RGB", (2, 3), color=(0, 0, 0))
    img.putpixel((1, 0), (255, 0, 0))
    img.putpixel((0, 2), (0, 0, 255))
    path = tmp_path / "img.png"
    img.save(path)

    tensor = decode_image(path)
    assert tensor.shape == TensorShape(3, 2, 3)
    planes = tensor.to_planes()
    assert planes[0, 0, 1] == 1.0
    assert planes[2, 2, 0] == 1.0
    assert float(planes.sum()) == 2.0

    from_bytes = decode_image(path.read_bytes())
    assert from_bytes == tensor


def test_decode_closes_source_image(tmp_path: Path, monkeypatch) -> None:
    path = tmp_path / "img.png"
    Image.new("RGB", (2, 2)).save(path)
    closed = []
    original_exit = Image.Image.__exit__

    def recording_exit(self, *args):
        closed.append(self)
        return original_exit(self, *args)

    monkeypatch.setattr(Image.Image, "__exit__", recording_exit)
    decode_image(path)
    assert len(closed) == 1


def test_decode_garbage_fails() -> None:
    with pytest.raises(DecodeError):
        decode_image(b"definitely not an image")


def test_encode_modes() -> None:
    rgb = Tensor(torch.linspace(0, 1, 12), TensorShape(2, 2, 3))
    assert encode_image(rgb).mode == "RGB"
    grey = Tensor([0.0, 0.5, 1.0, 1.0], TensorShape(2, 2, 1))
    img = encode_image(grey)
    assert img.mode == "L"
    assert img.size == (2, 2)
    assert img.getpixel((0, 0)) == 0
    assert img.getpixel((1, 1)) == 255


def test_encode_rejects_other_depths() -> None:
    with pytest.raises(ShapeMismatchError):
        encode_image(Tensor([0.0] * 8, TensorShape(2, 2, 2)))


def test_round_trip_through_png(tmp_path: Path) -> None:
    img = Image.new("RGB", (4, 2), color=(255, 128, 0))
    src = tmp_path / "src.png"
    img.save(src)
    out = tmp_path / "nested" / "out.png"
    save_image(decode_image(src), out)
    assert Image.open(out).getpixel((3, 1)) == (255, 128, 0)
