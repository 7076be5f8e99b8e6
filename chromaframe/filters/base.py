from abc import ABC, abstractmethod
from typing import Callable, Sequence

from chromaframe.color import RgbaVector

PixelFilterFn = Callable[[int, int, RgbaVector], Sequence[int]]


class PixelFilter(ABC):
    """
    Abstract base class for configurable pixel filters.

    Subclasses implement ``process_pixel``. Instances are callable so they
    can be passed anywhere a plain ``(x, y, rgba)`` function is accepted,
    most notably ``Frame.apply_filter``.
    """

    @abstractmethod
    def process_pixel(self, x: int, y: int, rgba: RgbaVector) -> RgbaVector:
        """
        Compute the output color of one pixel.

        Args:
            x: Column of the pixel
            y: Row of the pixel
            rgba: Current color of the pixel

        Returns:
            The color to write at (x, y)
        """
        pass

    def __call__(self, x: int, y: int, rgba: RgbaVector) -> RgbaVector:
        return self.process_pixel(x, y, rgba)


def invert_filter(x: int, y: int, rgba: RgbaVector) -> RgbaVector:
    """Invert the RGB channels of a pixel, keeping its alpha."""
    return RgbaVector(255 - rgba[0], 255 - rgba[1], 255 - rgba[2], rgba[3])
