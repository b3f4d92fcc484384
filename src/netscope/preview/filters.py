from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Sequence, TypeVar

import torch
import torch.nn.functional as F

from netscope.errors import ShapeMismatchError
from netscope.ir.tensor import Tensor, TensorShape
from netscope.ir.types import LayerRecord

from .normalize import MID_VALUE, normalize_for_display

T = TypeVar("T")


@dataclass
class PreviewConfig:
    constant_value: float = MID_VALUE
    gallery_columns: int = 3


def _check_filters(filters: Sequence[Tensor], unit_shape: TensorShape, image: Tensor) -> None:
    if image.rows == 0 or image.columns == 0 or image.depth == 0:
        raise ShapeMismatchError(f"Cannot preview filters on an empty image {image.shape.as_tuple()}")
    for idx, filt in enumerate(filters):
        if filt.depth != image.depth:
            raise ShapeMismatchError(
                f"Filter {idx} has depth {filt.depth} but the image has {image.depth} channels"
            )
        if filt.rows != unit_shape.rows or filt.columns != unit_shape.columns:
            raise ShapeMismatchError(
                f"Filter {idx} is {filt.rows}x{filt.columns}, expected "
                f"{unit_shape.rows}x{unit_shape.columns}"
            )


def cross_correlate_same(signal: torch.Tensor, kernel: torch.Tensor) -> torch.Tensor:
    """2-D cross-correlation with zero padding so the output matches ``signal``.

    Stride 1, no dilation, no bias. For even kernels the extra padding goes
    after (bottom/right), as torch does for ``padding="same"``.
    """
    out = F.conv2d(signal[None, None], kernel[None, None], padding="same")
    return out[0, 0]


@torch.no_grad()
def preview_filters(
    filters: Sequence[Tensor], unit_shape: TensorShape, image: Tensor
) -> List[Tensor]:
    """Run every filter over ``image`` channel by channel.

    Channels are kept apart and stacked along depth rather than summed, so
    each returned tensor has the image's own (rows, columns, depth).
    """
    _check_filters(filters, unit_shape, image)
    results: List[Tensor] = []
    for filt in filters:
        accumulator = Tensor.empty(image.rows, image.columns)
        for d in range(image.depth):
            plane = cross_correlate_same(image.depth_slice(d), filt.depth_slice(d))
            accumulator = accumulator.concat(Tensor.from_plane(plane))
        results.append(accumulator)
    return results


def filter_gallery(record: LayerRecord) -> List[Tensor]:
    """Split every stored filter into its single-channel kernels."""
    gallery: List[Tensor] = []
    for weight in record.weights:
        for d in range(weight.depth):
            gallery.append(Tensor.from_plane(weight.depth_slice(d)))
    return gallery


def batched(items: Sequence[T], size: int = 3) -> List[List[T]]:
    if size < 1:
        raise ValueError("batch size must be >= 1")
    return [list(items[i : i + size]) for i in range(0, len(items), size)]


@dataclass
class FilterPreview:
    """Gallery state for one convolution node: raw filters until an image is dropped."""

    record: LayerRecord
    config: PreviewConfig = field(default_factory=PreviewConfig)
    images: List[Tensor] = field(default_factory=list)
    image_size: TensorShape = field(default_factory=TensorShape.empty)
    has_image: bool = False

    def __post_init__(self) -> None:
        self.clear()

    def preview(self, image: Tensor) -> List[Tensor]:
        results = preview_filters(self.record.weights, self.record.weights_size, image)
        self.images = results
        self.image_size = image.shape
        self.has_image = True
        return results

    def clear(self) -> None:
        self.images = filter_gallery(self.record)
        self.image_size = self.record.weights_size
        self.has_image = False

    def rendered(self) -> List[Tensor]:
        return [normalize_for_display(t, self.config.constant_value) for t in self.images]

    def rows(self) -> List[List[Tensor]]:
        return batched(self.rendered(), self.config.gallery_columns)
