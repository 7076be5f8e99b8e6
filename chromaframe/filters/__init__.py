"""
Pixel filters for Frame.apply_filter.

A pixel filter is any callable ``(x, y, rgba) -> rgba``. Filters with
configuration subclass ``PixelFilter``.
"""

from chromaframe.filters.base import PixelFilter, PixelFilterFn, invert_filter
from chromaframe.filters.quantize import QuantizeFilter, quantize_filter

__all__ = [
    "PixelFilter",
    "PixelFilterFn",
    "invert_filter",
    "QuantizeFilter",
    "quantize_filter",
]
