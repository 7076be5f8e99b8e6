"""
Color model: vector types, color-space conversion and color distance.

All functions are pure. Channel values are plain Python ints:

- RGB(A): each channel in [0, 255]
- HSL(A): hue in degrees [0, 360), saturation and lightness in percent
  [0, 100], alpha in [0, 255] and never touched by the conversion

Hue values outside [0, 360) wrap modulo 360 on input.
"""

import math
from typing import NamedTuple, Sequence, Union


class RgbVector(NamedTuple):
    r: int
    g: int
    b: int


class RgbaVector(NamedTuple):
    r: int
    g: int
    b: int
    a: int


class HslVector(NamedTuple):
    """
    Hue/saturation/lightness color.

    - h: around 0 and 360 are reds, 120 greens, 240 blues
    - s: 0 is grayscale, 100 is fully saturated
    - l: 0 is black, 100 is white, 50 is the pure hue
    """

    h: int
    s: int
    l: int  # noqa: E741


class HslaVector(NamedTuple):
    h: int
    s: int
    l: int  # noqa: E741
    a: int


ColorLike = Union[RgbVector, RgbaVector, Sequence[int]]


BLACK = RgbaVector(0, 0, 0, 255)
WHITE = RgbaVector(255, 255, 255, 255)
RED = RgbaVector(255, 0, 0, 255)
GREEN = RgbaVector(0, 255, 0, 255)
BLUE = RgbaVector(0, 0, 255, 255)
GRAY = RgbaVector(128, 128, 128, 255)
YELLOW = RgbaVector(255, 255, 0, 255)
MAGENTA = RgbaVector(255, 0, 255, 255)
CYAN = RgbaVector(0, 255, 255, 255)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves towards positive infinity."""
    return int(math.floor(value + 0.5))


def rgb_css_color(rgb: ColorLike) -> str:
    """CSS representation of an RGB color, e.g. ``rgb(255,0,0)``."""
    return "rgb({},{},{})".format(*rgb[:3])


def rgba_css_color(rgba: ColorLike) -> str:
    """CSS representation of an RGBA color, e.g. ``rgba(255,0,0,255)``."""
    return "rgba({},{},{},{})".format(*rgba[:4])


def rgb_to_hsl(rgb: ColorLike) -> HslVector:
    """
    Convert an RGB color to HSL.

    A 4-element input is accepted and its alpha ignored.

    Args:
        rgb: (r, g, b) with channels in [0, 255]

    Returns:
        HslVector with integer hue in [0, 360) and integer percentages
    """
    r, g, b = (channel / 255 for channel in rgb[:3])

    max_c = max(r, g, b)
    min_c = min(r, g, b)

    h = 0.0
    s = 0.0
    l = (max_c + min_c) / 2  # noqa: E741

    if max_c != min_c:
        d = max_c - min_c
        s = d / (2 - max_c - min_c) if l > 0.5 else d / (max_c + min_c)
        if max_c == r:
            h = (g - b) / d + (6 if g < b else 0)
        elif max_c == g:
            h = (b - r) / d + 2
        else:
            h = (r - g) / d + 4
        h /= 6

    return HslVector(
        round_half_up(h * 360) % 360,
        round_half_up(s * 100),
        round_half_up(l * 100),
    )


def hsl_to_rgb(hsl: Union[HslVector, HslaVector, Sequence[float]]) -> RgbVector:
    """
    Convert an HSL color to RGB.

    A 4-element input is accepted and its alpha ignored.

    Args:
        hsl: (h, s, l) with hue in degrees and s/l in percent

    Returns:
        RgbVector with integer channels in [0, 255]
    """
    hue, sat, light = hsl[:3]
    sat /= 100
    light /= 100

    def k(n: int) -> float:
        return (n + hue / 30) % 12

    a = sat * min(light, 1 - light)

    def f(n: int) -> float:
        return light - a * max(-1, min(k(n) - 3, 9 - k(n), 1))

    return RgbVector(
        round_half_up(255 * f(0)),
        round_half_up(255 * f(8)),
        round_half_up(255 * f(4)),
    )


def rgba_to_hsla(rgba: ColorLike) -> HslaVector:
    """Convert RGBA to HSLA, passing alpha through."""
    h, s, l = rgb_to_hsl(rgba)  # noqa: E741
    return HslaVector(h, s, l, rgba[3])


def hsla_to_rgba(hsla: Union[HslaVector, Sequence[float]]) -> RgbaVector:
    """Convert HSLA to RGBA, passing alpha through."""
    r, g, b = hsl_to_rgb(hsla)
    return RgbaVector(r, g, b, hsla[3])


def color_distance(a: ColorLike, b: ColorLike) -> float:
    """
    Euclidean distance between two colors over their RGB channels.

    Ranges from 0 (identical) to ~441.67 (black vs white). Alpha is ignored.
    """
    return math.sqrt(
        (a[0] - b[0]) ** 2 + (a[1] - b[1]) ** 2 + (a[2] - b[2]) ** 2
    )
