"""
Exceptions raised by chromaframe components.

Every error is a synchronous caller-contract violation. Each concrete
exception carries an ``ErrorKind`` so callers can branch on the failure
kind without string matching:

    >>> try:
    ...     buffer.get_frame(10)
    ... except ChromaframeError as exc:
    ...     if exc.kind is ErrorKind.INDEX_OUT_OF_RANGE:
    ...         ...
"""

from enum import Enum
from typing import Optional, Tuple


class ErrorKind(str, Enum):
    """Discriminant carried by every ChromaframeError."""

    BOUNDS = "BOUNDS"
    FRAME_SIZE_MISMATCH = "FRAME_SIZE_MISMATCH"
    INDEX_OUT_OF_RANGE = "INDEX_OUT_OF_RANGE"
    CONFIGURATION = "CONFIGURATION"


class ChromaframeError(Exception):
    """Base class for all chromaframe errors."""

    kind: Optional[ErrorKind] = None

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class BoundsError(ChromaframeError, IndexError):
    """A pixel coordinate lies outside a frame."""

    kind = ErrorKind.BOUNDS

    def __init__(self, x: int, y: int, width: int, height: int):
        super().__init__(
            f"Pixel coordinates ({x}, {y}) out of bounds for frame size {width}x{height}"
        )
        self.x = x
        self.y = y
        self.width = width
        self.height = height


class FrameSizeMismatchError(ChromaframeError, ValueError):
    """A frame pushed into a FrameBuffer has the wrong dimensions."""

    kind = ErrorKind.FRAME_SIZE_MISMATCH

    def __init__(self, expected: Tuple[int, int], actual: Tuple[int, int]):
        super().__init__(
            f"Frame size mismatch: expected {expected[0]}x{expected[1]}, "
            f"got {actual[0]}x{actual[1]}"
        )
        self.expected = expected
        self.actual = actual


class IndexOutOfRangeError(ChromaframeError, IndexError):
    """A logical frame index is negative or not below the buffer length."""

    kind = ErrorKind.INDEX_OUT_OF_RANGE

    def __init__(self, index: int, length: int):
        super().__init__(f"Frame index {index} out of bounds (length={length})")
        self.index = index
        self.length = length


class ConfigurationError(ChromaframeError, ValueError):
    """A component configuration dictionary is invalid."""

    kind = ErrorKind.CONFIGURATION
