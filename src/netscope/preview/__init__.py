"""Filter preview: per-channel same-padded cross-correlation and display normalization."""

from .filters import (
    FilterPreview,
    PreviewConfig,
    batched,
    cross_correlate_same,
    filter_gallery,
    preview_filters,
)
from .normalize import normalize_for_display

__all__ = [
    "FilterPreview",
    "PreviewConfig",
    "batched",
    "cross_correlate_same",
    "filter_gallery",
    "preview_filters",
    "normalize_for_display",
]
