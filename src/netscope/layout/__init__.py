"""Row layering for graph layout; presentation cards live in ``netscope.layout.presentation``."""

from .layering import assign_layers, find_cycle, flatten_rows, iter_edges

__all__ = ["assign_layers", "find_cycle", "flatten_rows", "iter_edges"]
