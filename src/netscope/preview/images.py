from __future__ import annotations

import io
from pathlib import Path
from typing import Union

import torch
from PIL import Image

from netscope.errors import DecodeError, ShapeMismatchError
from netscope.ir.tensor import Tensor

ImageSource = Union[bytes, bytearray, str, Path]


def decode_image(source: ImageSource) -> Tensor:
    """Decode image bytes or a file into an RGB tensor with values in 0..1."""
    if isinstance(source, (bytes, bytearray)):
        source = io.BytesIO(source)
    try:
        with Image.open(source) as opened:
            img = opened.convert("RGB")
    except OSError as exc:
        raise DecodeError(f"Could not decode image: {exc}") from exc
    width, height = img.size
    raw = torch.frombuffer(bytearray(img.tobytes()), dtype=torch.uint8)
    planes = raw.view(height, width, 3).permute(2, 0, 1).to(torch.float32) / 255.0
    return Tensor.from_planes(planes)


def encode_image(tensor: Tensor) -> Image.Image:
    """Turn a normalized tensor into a bitmap; depth 3 is RGB, depth 1 greyscale."""
    if tensor.depth == 3:
        mode = "RGB"
    elif tensor.depth == 1:
        mode = "L"
    else:
        raise ShapeMismatchError(f"Cannot encode a tensor of depth {tensor.depth} as an image")
    planes = tensor.to_planes().clamp(0.0, 1.0).mul(255.0).round().to(torch.uint8)
    pixels = planes.permute(1, 2, 0).contiguous().reshape(-1)
    return Image.frombytes(mode, (tensor.columns, tensor.rows), bytes(pixels.tolist()))


def save_image(tensor: Tensor, path: Path) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    encode_image(tensor).save(path)
