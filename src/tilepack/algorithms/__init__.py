"""Packing engine: free-space tracking, redundancy removal and orderings."""

from .merge import merge_rects
from .packer import DEFAULT_EPSILON, Packer
from .sorters import SortDirection, resolve_sort_key

__all__ = [
    "Packer",
    "DEFAULT_EPSILON",
    "merge_rects",
    "SortDirection",
    "resolve_sort_key",
]
