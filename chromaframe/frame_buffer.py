"""
Fixed-capacity circular buffer of same-sized frames.

The buffer keeps the ``capacity`` most recent frames. Logical index 0 is
always the oldest frame and ``length - 1`` the newest. Once full, every new
frame evicts the oldest one. On top of the storage the buffer answers
per-pixel temporal queries, most notably a motion score that measures how
often a pixel changes color across the buffered history.
"""

import uuid
from typing import Callable, Iterator, List, Optional, Sequence, Union

import numpy as np
from loguru import logger

from chromaframe.color import (
    HslaVector,
    HslVector,
    RgbaVector,
    RgbVector,
    color_distance,
    round_half_up,
)
from chromaframe.exceptions import FrameSizeMismatchError, IndexOutOfRangeError
from chromaframe.frame import Frame


class FrameBuffer:
    """
    Cyclic FIFO buffer of Frame objects with temporal pixel queries.

    Storage is a fixed list of ``capacity`` slots plus two cursors: ``first``
    (physical slot of the oldest frame) and ``length`` (occupied slots). No
    resizing ever happens. Every stored frame has the buffer's dimensions.

    Attributes:
        width: Required frame width
        height: Required frame height
        capacity: Number of frames kept
        session_id: Identifier used in log records

    Example:
        >>> buffer = FrameBuffer(640, 480, capacity=5)
        >>> for frame in decoded_frames:
        ...     buffer.add_frame(frame)
        ...     if buffer.is_ready:
        ...         score = buffer.detect_motion(320, 240, threshold=10)
    """

    def __init__(
        self,
        width: int,
        height: int,
        capacity: int,
        session_id: str = "default_session",
    ):
        """
        Instantiate an empty buffer for ``capacity`` frames of width x height.

        Raises:
            ValueError: If any dimension or the capacity is not positive
        """
        if width <= 0 or height <= 0:
            raise ValueError(
                f"Buffer dimensions must be positive, got {width}x{height}"
            )
        if capacity <= 0:
            raise ValueError(f"capacity must be positive, got {capacity}")

        self._width = width
        self._height = height
        self._capacity = capacity
        self.session_id = session_id

        self._slots: List[Optional[Frame]] = [None] * capacity
        self._first = 0
        self._length = 0

        logger.info(
            f"FrameBuffer initialized for {capacity} frames of {width}x{height}",
            extra={
                "component_name": self.__class__.__name__,
                "operation": "init",
                "session_id": self.session_id,
                "relevant_metadata": {
                    "width": width,
                    "height": height,
                    "capacity": capacity,
                },
            },
        )

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def length(self) -> int:
        """Number of frames currently stored."""
        return self._length

    @property
    def is_ready(self) -> bool:
        """True once the buffer holds ``capacity`` frames."""
        return self._length == self._capacity

    def add_frame(self, frame: Frame) -> None:
        """
        Append a frame as the newest one, evicting the oldest when full.

        Args:
            frame: Frame with the buffer's dimensions. The buffer takes
                   ownership of it.

        Raises:
            FrameSizeMismatchError: If the frame dimensions differ. The
                                    buffer is left untouched.
        """
        if frame.width != self._width or frame.height != self._height:
            logger.warning(
                f"Rejected {frame.width}x{frame.height} frame for {self._width}x{self._height} buffer",
                extra={
                    "component_name": self.__class__.__name__,
                    "operation": "add_frame",
                    "outcome": "size_mismatch",
                    "session_id": self.session_id,
                    "event_id": str(uuid.uuid4()),
                    "relevant_metadata": {
                        "expected": [self._width, self._height],
                        "actual": [frame.width, frame.height],
                    },
                },
            )
            raise FrameSizeMismatchError(
                (self._width, self._height), (frame.width, frame.height)
            )

        self._slots[(self._first + self._length) % self._capacity] = frame
        if self._length < self._capacity:
            self._length += 1
            outcome = "appended"
        else:
            # The oldest slot was just overwritten
            self._first = (self._first + 1) % self._capacity
            outcome = "evicted_oldest"

        logger.debug(
            f"Frame added to buffer. Length: {self._length}/{self._capacity}",
            extra={
                "component_name": self.__class__.__name__,
                "operation": "add_frame",
                "outcome": outcome,
                "session_id": self.session_id,
                "relevant_metadata": {
                    "first": self._first,
                    "length": self._length,
                },
            },
        )

    def add_frames(self, *frames: Union[Frame, Sequence[Frame]]) -> None:
        """
        Add several frames, oldest first.

        Accepts frames as separate arguments, as lists/tuples of frames, or
        a mix of both. Frames are added one by one; if one is rejected the
        frames before it stay in the buffer.
        """
        for item in frames:
            if isinstance(item, Frame):
                self.add_frame(item)
            else:
                for frame in item:
                    self.add_frame(frame)

    def get_frame(self, index: int) -> Frame:
        """
        Get the frame at a logical index (0 = oldest, length - 1 = newest).

        Raises:
            IndexOutOfRangeError: If index < 0 or index >= length
        """
        if index < 0 or index >= self._length:
            logger.warning(
                f"Frame index {index} requested from buffer of length {self._length}",
                extra={
                    "component_name": self.__class__.__name__,
                    "operation": "get_frame",
                    "outcome": "index_out_of_range",
                    "session_id": self.session_id,
                    "relevant_metadata": {"index": index, "length": self._length},
                },
            )
            raise IndexOutOfRangeError(index, self._length)
        return self._slots[(self._first + index) % self._capacity]

    def get_window(self) -> List[Frame]:
        """Stored frames, oldest first, as a new list."""
        return [self.get_frame(i) for i in range(self._length)]

    def clear(self) -> None:
        """Remove all frames and reset the buffer to its empty state."""
        cleared = self._length
        for i in range(self._capacity):
            self._slots[i] = None
        self._first = 0
        self._length = 0

        logger.debug(
            f"Frame buffer cleared. Dropped {cleared} frames.",
            extra={
                "component_name": self.__class__.__name__,
                "operation": "clear",
                "session_id": self.session_id,
                "relevant_metadata": {"cleared_frames": cleared},
            },
        )

    def get_rgb_pixel(self, x: int, y: int, z: int) -> RgbVector:
        """Get the RGB value of pixel (x, y) in frame z."""
        return self.get_frame(z).get_rgb_pixel(x, y)

    def get_rgba_pixel(self, x: int, y: int, z: int) -> RgbaVector:
        return self.get_frame(z).get_rgba_pixel(x, y)

    def get_hsl_pixel(self, x: int, y: int, z: int) -> HslVector:
        return self.get_frame(z).get_hsl_pixel(x, y)

    def get_hsla_pixel(self, x: int, y: int, z: int) -> HslaVector:
        return self.get_frame(z).get_hsla_pixel(x, y)

    def for_each(self, callback: Callable[[Frame, int], None]) -> None:
        """
        Call ``callback(frame, index)`` for every stored frame, oldest first.

        The buffer must not be modified from inside the callback.
        """
        for i in range(self._length):
            callback(self.get_frame(i), i)

    def detect_motion(self, x: int, y: int, threshold: float) -> int:
        """
        Score how often pixel (x, y) changes color across the buffered frames.

        Walks consecutive frame pairs starting from the oldest. Every pair
        whose color distance is at least ``threshold`` adds
        ``100 / (length - 1)`` to the score. A pixel that never changes
        scores 0, one that changes on every pair scores 100. The magnitude of
        a change does not matter, only whether it reaches the threshold.

        Args:
            x: Column of the pixel
            y: Row of the pixel
            threshold: Minimal RGB distance from the previous color that
                       counts as a change

        Returns:
            Integer score in [0, 100]; 0 when fewer than 2 frames are stored
        """
        if self._length < 2:
            return 0

        score = 0.0
        step = 100 / (self._length - 1)
        prev = self.get_rgb_pixel(x, y, 0)
        for i in range(1, self._length):
            curr = self.get_rgb_pixel(x, y, i)
            if color_distance(prev, curr) >= threshold:
                score += step
            prev = curr
        return round_half_up(score)

    def motion_map(self, threshold: float) -> np.ndarray:
        """
        Compute ``detect_motion`` for every pixel at once.

        Returns:
            HxW int array of scores in [0, 100], identical pixel by pixel to
            ``detect_motion(x, y, threshold)``
        """
        scores = np.zeros((self._height, self._width), dtype=np.float64)
        if self._length < 2:
            return scores.astype(np.int64)

        step = 100 / (self._length - 1)
        prev = self.get_frame(0).pixels[:, :, :3].astype(np.int64)
        for i in range(1, self._length):
            curr = self.get_frame(i).pixels[:, :, :3].astype(np.int64)
            distances = np.sqrt(np.sum((prev - curr) ** 2, axis=2).astype(np.float64))
            # Accumulated pair by pair to match detect_motion's float sums
            scores[distances >= threshold] += step
            prev = curr

        logger.debug(
            f"Motion map computed over {self._length} frames",
            extra={
                "component_name": self.__class__.__name__,
                "operation": "motion_map",
                "session_id": self.session_id,
                "relevant_metadata": {
                    "threshold": threshold,
                    "frames": self._length,
                    "moving_pixels": int(np.count_nonzero(scores)),
                },
            },
        )
        return np.floor(scores + 0.5).astype(np.int64)

    def __len__(self) -> int:
        return self._length

    def __iter__(self) -> Iterator[Frame]:
        for i in range(self._length):
            yield self.get_frame(i)

    def __repr__(self) -> str:
        return (
            f"FrameBuffer(width={self._width}, height={self._height}, "
            f"capacity={self._capacity}, length={self._length})"
        )
