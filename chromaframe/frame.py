"""
Single decoded video frame with per-pixel color access.

A Frame owns a flat ``numpy.uint8`` buffer of ``width * height * 4`` bytes,
row-major, pixels interleaved as R, G, B, A. Every pixel accessor checks its
coordinates and raises ``BoundsError`` when they fall outside the frame.
"""

from typing import Any, Optional, Sequence, Tuple

import numpy as np
from loguru import logger

from chromaframe.color import (
    HslaVector,
    HslVector,
    RgbaVector,
    RgbVector,
    hsl_to_rgb,
    rgb_to_hsl,
)
from chromaframe.exceptions import BoundsError
from chromaframe.filters.base import PixelFilterFn

CHANNELS = 4


def _clamp_channel(value: float) -> int:
    # Same write semantics as a clamped byte array: round, then saturate.
    return min(255, max(0, int(round(value))))


def _coerce_pixel_data(data: Any) -> np.ndarray:
    """Copy caller-supplied pixel bytes into a new flat uint8 array."""
    if isinstance(data, (bytes, bytearray, memoryview)):
        return np.frombuffer(data, dtype=np.uint8).copy()
    array = np.asarray(data)
    if array.dtype != np.uint8:
        array = np.clip(np.rint(array), 0, 255)
    return array.astype(np.uint8).reshape(-1)


class Frame:
    """
    Wraps one decoded image and exposes color-space aware pixel access.

    Attributes:
        width: Frame width in pixels (read-only)
        height: Frame height in pixels (read-only)
        data: Flat RGBA byte buffer owned by this frame

    Example:
        >>> frame = Frame.filled(8, 8, BLACK)
        >>> frame.set_pixel_rgb(0, 0, (10, 20, 30))
        >>> frame.get_rgba_pixel(0, 0)
        RgbaVector(r=10, g=20, b=30, a=255)
    """

    def __init__(self, width: int, height: int, data: Optional[Any] = None):
        """
        Create a frame from raw RGBA bytes.

        Args:
            width: Width in pixels, must be positive
            height: Height in pixels, must be positive
            data: Optional bytes-like object or array of exactly
                  ``width * height * 4`` values. It is copied. When omitted
                  the frame starts fully transparent black.

        Raises:
            ValueError: If dimensions are not positive or the data length
                        does not match them
        """
        if width <= 0 or height <= 0:
            raise ValueError(
                f"Frame dimensions must be positive, got {width}x{height}"
            )

        expected = width * height * CHANNELS
        if data is None:
            buffer = np.zeros(expected, dtype=np.uint8)
        else:
            buffer = _coerce_pixel_data(data)
            if buffer.size != expected:
                raise ValueError(
                    f"Frame data length {buffer.size} does not match "
                    f"{width}x{height}x{CHANNELS} = {expected}"
                )

        self._width = int(width)
        self._height = int(height)
        self._data = buffer

    @classmethod
    def filled(cls, width: int, height: int, rgba: Sequence[int]) -> "Frame":
        """Create a frame with every pixel set to ``rgba``."""
        pixel = np.array([_clamp_channel(c) for c in rgba[:CHANNELS]], dtype=np.uint8)
        return cls(width, height, np.tile(pixel, width * height))

    @classmethod
    def from_image_data(cls, image_data: Any) -> "Frame":
        """
        Create a frame from any decoded-image object.

        The object must expose ``width``, ``height`` and ``data`` where
        ``data`` holds ``width * height * 4`` RGBA bytes in row-major order.
        """
        return cls(image_data.width, image_data.height, image_data.data)

    @classmethod
    def from_array(cls, array: np.ndarray) -> "Frame":
        """
        Create a frame from an HWC uint8 array.

        Accepts 4-channel (RGBA) or 3-channel (RGB) arrays. RGB input is
        given a fully opaque alpha channel.

        Raises:
            ValueError: If the array is not HxWx3 or HxWx4
        """
        if array.ndim != 3 or array.shape[2] not in (3, 4):
            raise ValueError(
                f"Expected an HxWx3 or HxWx4 array, got shape {array.shape}"
            )
        height, width = array.shape[:2]
        if array.shape[2] == 3:
            alpha = np.full((height, width, 1), 255, dtype=np.uint8)
            array = np.concatenate([array.astype(np.uint8), alpha], axis=2)
        return cls(width, height, array)

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def size(self) -> Tuple[int, int]:
        """(width, height) of the frame."""
        return self._width, self._height

    @property
    def data(self) -> np.ndarray:
        return self._data

    @property
    def pixels(self) -> np.ndarray:
        """HxWx4 view sharing storage with ``data``."""
        return self._data.reshape(self._height, self._width, CHANNELS)

    def to_array(self) -> np.ndarray:
        """Independent HxWx4 copy of the pixel data."""
        return self.pixels.copy()

    def get_rgb_pixel(self, x: int, y: int) -> RgbVector:
        """Get the RGB value at pixel position (x, y)."""
        idx = self._offset(x, y)
        d = self._data
        return RgbVector(int(d[idx]), int(d[idx + 1]), int(d[idx + 2]))

    def get_rgba_pixel(self, x: int, y: int) -> RgbaVector:
        """Get the RGBA value at pixel position (x, y)."""
        idx = self._offset(x, y)
        d = self._data
        return RgbaVector(
            int(d[idx]), int(d[idx + 1]), int(d[idx + 2]), int(d[idx + 3])
        )

    def get_hsl_pixel(self, x: int, y: int) -> HslVector:
        """Get the HSL value at pixel position (x, y)."""
        return rgb_to_hsl(self.get_rgb_pixel(x, y))

    def get_hsla_pixel(self, x: int, y: int) -> HslaVector:
        """Get the HSLA value at pixel position (x, y)."""
        rgba = self.get_rgba_pixel(x, y)
        h, s, l = rgb_to_hsl(rgba)  # noqa: E741
        return HslaVector(h, s, l, rgba.a)

    def set_pixel_rgb(self, x: int, y: int, rgb: Sequence[int]) -> None:
        """Write the RGB channels of pixel (x, y). Alpha is left unchanged."""
        idx = self._offset(x, y)
        d = self._data
        d[idx] = _clamp_channel(rgb[0])
        d[idx + 1] = _clamp_channel(rgb[1])
        d[idx + 2] = _clamp_channel(rgb[2])

    def set_pixel_rgba(self, x: int, y: int, rgba: Sequence[int]) -> None:
        """Write all four channels of pixel (x, y)."""
        idx = self._offset(x, y)
        d = self._data
        d[idx] = _clamp_channel(rgba[0])
        d[idx + 1] = _clamp_channel(rgba[1])
        d[idx + 2] = _clamp_channel(rgba[2])
        d[idx + 3] = _clamp_channel(rgba[3])

    def set_pixel_hsl(self, x: int, y: int, hsl: Sequence[float]) -> None:
        """Write pixel (x, y) from an HSL color. Alpha is left unchanged."""
        self.set_pixel_rgb(x, y, hsl_to_rgb(hsl))

    def set_pixel_hsla(self, x: int, y: int, hsla: Sequence[float]) -> None:
        """Write pixel (x, y) from an HSLA color, including its alpha."""
        r, g, b = hsl_to_rgb(hsla)
        self.set_pixel_rgba(x, y, (r, g, b, hsla[3]))

    def clone(self) -> "Frame":
        """Create an independent copy of this frame."""
        return Frame(self._width, self._height, self._data)

    def apply_filter(self, pixel_filter: PixelFilterFn) -> "Frame":
        """
        Apply a pixel filter and return the result as a new Frame.

        The filter is called as ``pixel_filter(x, y, rgba)`` for every pixel
        in row-major order, with ``rgba`` read from this frame. Its return
        value is written into a clone. This frame is never modified.

        Args:
            pixel_filter: Callable returning the new RGBA value of a pixel

        Returns:
            The filtered copy
        """
        out = self.clone()
        for y in range(self._height):
            for x in range(self._width):
                out.set_pixel_rgba(x, y, pixel_filter(x, y, self.get_rgba_pixel(x, y)))

        logger.debug(
            f"Applied pixel filter to {self._width}x{self._height} frame",
            extra={
                "component_name": self.__class__.__name__,
                "operation": "apply_filter",
                "outcome": "success",
                "relevant_metadata": {
                    "filter": getattr(pixel_filter, "__name__", repr(pixel_filter)),
                    "pixels": self._width * self._height,
                },
            },
        )
        return out

    def _offset(self, x: int, y: int) -> int:
        if x < 0 or x >= self._width or y < 0 or y >= self._height:
            raise BoundsError(x, y, self._width, self._height)
        return (y * self._width + x) * CHANNELS

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Frame):
            return NotImplemented
        return self.size == other.size and np.array_equal(self._data, other._data)

    __hash__ = None  # mutable

    def __repr__(self) -> str:
        return f"Frame(width={self._width}, height={self._height})"
