"""
Palette quantization filter.

Maps each pixel to the closest color of a fixed palette, optionally leaving
pixels untouched when no palette color is close enough.
"""

import math
from typing import List, Optional, Sequence, Tuple

from chromaframe.color import RgbaVector, RgbVector, color_distance
from chromaframe.filters.base import PixelFilter


class QuantizeFilter(PixelFilter):
    """
    Filter that snaps pixels to the nearest palette color.

    Distances are Euclidean over RGB. The palette is scanned in order and the
    first entry reaching the minimum distance wins ties. The input pixel's
    alpha is always preserved.

    Attributes:
        palette: Palette colors, in the order they are scanned
        threshold: Maximum distance for a pixel to be remapped. None means
                   every pixel is remapped.

    Example:
        >>> quantize = QuantizeFilter([(0, 0, 0), (255, 255, 255)], threshold=50)
        >>> quantize(0, 0, RgbaVector(10, 10, 10, 128))
        RgbaVector(r=0, g=0, b=0, a=128)
    """

    def __init__(
        self,
        palette: Sequence[Sequence[int]],
        threshold: Optional[float] = None,
    ):
        """
        Args:
            palette: Non-empty sequence of RGB colors (extra channels ignored)
            threshold: Optional non-negative maximum match distance

        Raises:
            ValueError: If the palette is empty or the threshold is negative
        """
        if not palette:
            raise ValueError("palette must contain at least one color")
        if threshold is not None and threshold < 0:
            raise ValueError(f"threshold must be non-negative, got {threshold}")

        self.palette: List[RgbVector] = [
            RgbVector(int(c[0]), int(c[1]), int(c[2])) for c in palette
        ]
        self.threshold = threshold

    def nearest(self, rgb: Sequence[int]) -> Tuple[RgbVector, float]:
        """Return the closest palette color and its distance to ``rgb``."""
        min_dist = math.inf
        closest = self.palette[0]
        for color in self.palette:
            dist = color_distance(rgb, color)
            if dist < min_dist:
                min_dist = dist
                closest = color
        return closest, min_dist

    def process_pixel(self, x: int, y: int, rgba: RgbaVector) -> RgbaVector:
        closest, min_dist = self.nearest(rgba)
        if self.threshold is not None and min_dist > self.threshold:
            return RgbaVector(*rgba[:4])
        return RgbaVector(closest.r, closest.g, closest.b, rgba[3])

    def __repr__(self) -> str:
        return f"QuantizeFilter(palette={self.palette!r}, threshold={self.threshold!r})"


def quantize_filter(
    palette: Sequence[Sequence[int]], threshold: Optional[float] = None
) -> QuantizeFilter:
    """
    Build a pixel filter mapping each pixel to its closest palette color.

    Args:
        palette: Palette colors, scanned in order
        threshold: Maximum match distance; pixels farther than this from every
                   palette color are returned unchanged

    Returns:
        A callable ``(x, y, rgba) -> RgbaVector`` for ``Frame.apply_filter``
    """
    return QuantizeFilter(palette, threshold)
