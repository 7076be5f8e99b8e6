"""
Chromaframe: in-memory frame buffer with per-pixel color analysis

Chromaframe keeps a rolling window of decoded video frames, gives
bounds-checked pixel access in RGB(A) and HSL(A) space, and scores
per-pixel motion across the buffered history.

Quick Start:
    >>> from chromaframe import Frame, FrameBuffer, BLACK, WHITE
    >>> buffer = FrameBuffer(8, 8, capacity=3)
    >>> buffer.add_frames(Frame.filled(8, 8, BLACK), Frame.filled(8, 8, WHITE))
    >>> buffer.detect_motion(4, 4, threshold=10)
    100
"""

__version__ = "0.1.0"
__license__ = "MIT"

# Color model
from .color import (
    BLACK,
    BLUE,
    CYAN,
    GRAY,
    GREEN,
    MAGENTA,
    RED,
    WHITE,
    YELLOW,
    HslaVector,
    HslVector,
    RgbaVector,
    RgbVector,
    color_distance,
    hsl_to_rgb,
    hsla_to_rgba,
    rgb_css_color,
    rgb_to_hsl,
    rgba_css_color,
    rgba_to_hsla,
)

# Frames
from .frame import Frame
from .frame_buffer import FrameBuffer

# Pixel filters
from .filters import PixelFilter, QuantizeFilter, invert_filter, quantize_filter

# Configuration
from .config import build_frame_buffer, build_quantize_filter
from .logging_config import setup_logging

# Exceptions
from .exceptions import (
    BoundsError,
    ChromaframeError,
    ConfigurationError,
    ErrorKind,
    FrameSizeMismatchError,
    IndexOutOfRangeError,
)

__all__ = [
    # Color model
    "RgbVector",
    "RgbaVector",
    "HslVector",
    "HslaVector",
    "BLACK",
    "WHITE",
    "RED",
    "GREEN",
    "BLUE",
    "GRAY",
    "YELLOW",
    "MAGENTA",
    "CYAN",
    "rgb_to_hsl",
    "hsl_to_rgb",
    "rgba_to_hsla",
    "hsla_to_rgba",
    "color_distance",
    "rgb_css_color",
    "rgba_css_color",

    # Frames
    "Frame",
    "FrameBuffer",

    # Pixel filters
    "PixelFilter",
    "QuantizeFilter",
    "quantize_filter",
    "invert_filter",

    # Configuration
    "build_frame_buffer",
    "build_quantize_filter",
    "setup_logging",

    # Exceptions
    "ChromaframeError",
    "ErrorKind",
    "BoundsError",
    "FrameSizeMismatchError",
    "IndexOutOfRangeError",
    "ConfigurationError",
]
