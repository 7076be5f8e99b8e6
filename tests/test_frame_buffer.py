import numpy as np
import pytest

from chromaframe.color import BLACK, BLUE, CYAN, GRAY, GREEN, RED, WHITE, YELLOW
from chromaframe.exceptions import (
    BoundsError,
    ErrorKind,
    FrameSizeMismatchError,
    IndexOutOfRangeError,
)
from chromaframe.frame import Frame
from chromaframe.frame_buffer import FrameBuffer

W, H, SIZE = 8, 8, 3
X, Y = 4, 4


class TestFrameBuffer:
    @pytest.fixture
    def buffer(self):
        return FrameBuffer(W, H, SIZE)

    def test_initial_state(self, buffer):
        assert buffer.length == 0
        assert len(buffer) == 0
        assert not buffer
        assert buffer.is_ready is False
        assert (buffer.width, buffer.height, buffer.capacity) == (W, H, SIZE)

    @pytest.mark.parametrize(
        "width, height, capacity", [(0, 8, 3), (8, 0, 3), (8, 8, 0), (8, 8, -2)]
    )
    def test_invalid_construction(self, width, height, capacity):
        with pytest.raises(ValueError):
            FrameBuffer(width, height, capacity)

    def test_add_frame_evicts_oldest_when_full(self, buffer, create_solid_color_frame):
        buffer.add_frame(create_solid_color_frame(RED))
        assert buffer.length == 1
        assert buffer.get_frame(0).get_rgba_pixel(X, Y) == RED

        buffer.add_frame(create_solid_color_frame(GREEN))
        assert buffer.length == 2
        assert buffer.get_frame(0).get_rgba_pixel(X, Y) == RED
        assert buffer.get_frame(1).get_rgba_pixel(X, Y) == GREEN

        buffer.add_frame(create_solid_color_frame(BLUE))
        assert buffer.length == 3
        assert buffer.is_ready
        assert [buffer.get_rgba_pixel(X, Y, z) for z in range(3)] == [RED, GREEN, BLUE]

        buffer.add_frame(create_solid_color_frame(WHITE))
        assert buffer.length == 3
        assert [buffer.get_rgba_pixel(X, Y, z) for z in range(3)] == [GREEN, BLUE, WHITE]

    def test_ring_wraps_several_times(self, buffer):
        for i in range(7):
            buffer.add_frame(Frame.filled(W, H, (i, i, i, 255)))

        assert buffer.length == SIZE
        assert [buffer.get_rgb_pixel(0, 0, z).r for z in range(SIZE)] == [4, 5, 6]

    def test_add_frame_keeps_the_same_instance(self, buffer, create_solid_color_frame):
        frame = create_solid_color_frame(RED)
        buffer.add_frame(frame)
        assert buffer.get_frame(0) is frame

    def test_size_mismatch(self, buffer, create_solid_color_frame):
        buffer.add_frame(create_solid_color_frame(RED))

        with pytest.raises(FrameSizeMismatchError) as exc_info:
            buffer.add_frame(create_solid_color_frame(BLACK, width=W + 1))

        assert exc_info.value.kind is ErrorKind.FRAME_SIZE_MISMATCH
        assert exc_info.value.expected == (W, H)
        assert exc_info.value.actual == (W + 1, H)
        assert buffer.length == 1
        assert buffer.get_frame(0).get_rgba_pixel(X, Y) == RED

    def test_get_frame_out_of_range(self, buffer, create_solid_color_frame):
        buffer.add_frame(create_solid_color_frame(BLACK))

        with pytest.raises(IndexOutOfRangeError):
            buffer.get_frame(-1)
        with pytest.raises(IndexOutOfRangeError) as exc_info:
            buffer.get_frame(1)

        assert exc_info.value.kind is ErrorKind.INDEX_OUT_OF_RANGE
        assert (exc_info.value.index, exc_info.value.length) == (1, 1)
        assert isinstance(exc_info.value, IndexError)

    def test_add_frames_variadic_and_list(self, buffer, create_frame_sequence):
        buffer.add_frames(*create_frame_sequence([RED, GREEN, BLUE]))
        assert [buffer.get_rgba_pixel(X, Y, z) for z in range(3)] == [RED, GREEN, BLUE]

        buffer.clear()
        buffer.add_frames(create_frame_sequence([RED, GREEN, BLUE]))
        assert [buffer.get_rgba_pixel(X, Y, z) for z in range(3)] == [RED, GREEN, BLUE]

        buffer.clear()
        red, green, blue = create_frame_sequence([RED, GREEN, BLUE])
        buffer.add_frames(red, [green, blue])
        assert [buffer.get_rgba_pixel(X, Y, z) for z in range(3)] == [RED, GREEN, BLUE]

    def test_add_frames_stops_at_first_invalid(self, buffer, create_solid_color_frame):
        good = create_solid_color_frame(RED)
        bad = create_solid_color_frame(GREEN, height=H + 1)
        never_added = create_solid_color_frame(BLUE)

        with pytest.raises(FrameSizeMismatchError):
            buffer.add_frames(good, bad, never_added)

        assert buffer.length == 1
        assert buffer.get_frame(0) is good

    def test_clear(self, buffer, create_frame_sequence):
        buffer.add_frames(create_frame_sequence([RED, GREEN, BLUE, WHITE]))
        assert buffer.length == 3

        buffer.clear()
        assert buffer.length == 0
        assert buffer.is_ready is False
        with pytest.raises(IndexOutOfRangeError):
            buffer.get_frame(0)

        buffer.add_frame(Frame.filled(W, H, YELLOW))
        assert buffer.get_rgba_pixel(X, Y, 0) == YELLOW

    def test_pixel_accessors(self, buffer, create_frame_sequence):
        buffer.add_frames(create_frame_sequence([RED, GREEN]))

        assert buffer.get_rgb_pixel(X, Y, 0) == (255, 0, 0)
        assert buffer.get_rgb_pixel(X, Y, 1) == (0, 255, 0)
        assert buffer.get_rgba_pixel(X, Y, 1) == GREEN
        assert buffer.get_hsl_pixel(X, Y, 0).h == 0
        assert buffer.get_hsl_pixel(X, Y, 1).h == 120
        assert buffer.get_hsla_pixel(X, Y, 1) == (120, 100, 50, 255)

    def test_pixel_accessor_errors_propagate(self, buffer, create_solid_color_frame):
        buffer.add_frame(create_solid_color_frame(RED))

        with pytest.raises(BoundsError):
            buffer.get_rgb_pixel(W, 0, 0)
        with pytest.raises(IndexOutOfRangeError):
            buffer.get_hsl_pixel(0, 0, 1)

    def test_for_each_in_order(self, buffer, create_frame_sequence):
        colors = [GRAY, YELLOW, CYAN]
        buffer.add_frames(create_frame_sequence(colors))

        seen = []
        buffer.for_each(lambda frame, idx: seen.append((idx, frame.get_rgba_pixel(X, Y))))

        assert seen == list(enumerate(colors))

    def test_iteration_and_window(self, buffer, create_frame_sequence):
        frames = create_frame_sequence([RED, GREEN, BLUE, WHITE])
        buffer.add_frames(frames)

        assert list(buffer) == frames[1:]
        window = buffer.get_window()
        assert window == frames[1:]
        window.clear()
        assert buffer.length == 3


class TestDetectMotion:
    def test_one_change_out_of_two(self, create_frame_sequence):
        buffer = FrameBuffer(W, H, SIZE)
        buffer.add_frames(create_frame_sequence([BLACK, BLACK, WHITE]))
        assert buffer.detect_motion(X, Y, 10) == 50

    def test_every_transition_changes(self, create_frame_sequence):
        buffer = FrameBuffer(W, H, SIZE)
        buffer.add_frames(create_frame_sequence([BLACK, WHITE, GRAY]))
        assert buffer.detect_motion(X, Y, 10) == 100

    def test_no_change(self, create_frame_sequence):
        buffer = FrameBuffer(W, H, SIZE)
        buffer.add_frames(create_frame_sequence([BLACK, BLACK, BLACK]))
        assert buffer.detect_motion(X, Y, 10) == 0

    @pytest.mark.parametrize("threshold", [0, 10, 1000])
    def test_fewer_than_two_frames(self, create_solid_color_frame, threshold):
        buffer = FrameBuffer(1, 1, SIZE)
        assert buffer.detect_motion(0, 0, threshold) == 0

        buffer.add_frame(create_solid_color_frame(BLACK, width=1, height=1))
        assert buffer.detect_motion(0, 0, threshold) == 0

    def test_threshold_is_inclusive(self):
        buffer = FrameBuffer(1, 1, 2)
        buffer.add_frames(Frame.filled(1, 1, BLACK), Frame.filled(1, 1, (10, 0, 0, 255)))
        assert buffer.detect_motion(0, 0, 10) == 100
        assert buffer.detect_motion(0, 0, 10.01) == 0

    def test_score_counts_transitions_not_magnitude(self):
        buffer = FrameBuffer(1, 1, 4)
        buffer.add_frames(
            Frame.filled(1, 1, BLACK),
            Frame.filled(1, 1, (20, 0, 0, 255)),
            Frame.filled(1, 1, (20, 0, 0, 255)),
            Frame.filled(1, 1, WHITE),
        )
        assert buffer.detect_motion(0, 0, 10) == 67

    def test_half_scores_round_up(self):
        buffer = FrameBuffer(1, 1, 9)
        buffer.add_frames([Frame.filled(1, 1, BLACK) for _ in range(8)])
        buffer.add_frame(Frame.filled(1, 1, WHITE))
        assert buffer.detect_motion(0, 0, 10) == 13

    def test_uses_logical_order_after_eviction(self):
        buffer = FrameBuffer(1, 1, 2)
        buffer.add_frames(
            Frame.filled(1, 1, WHITE),
            Frame.filled(1, 1, BLACK),
            Frame.filled(1, 1, BLACK),
        )
        assert buffer.detect_motion(0, 0, 10) == 0

    def test_only_the_requested_pixel_counts(self):
        buffer = FrameBuffer(2, 1, 2)
        moving = Frame.filled(2, 1, BLACK)
        moving.set_pixel_rgb(1, 0, (255, 255, 255))
        buffer.add_frames(Frame.filled(2, 1, BLACK), moving)

        assert buffer.detect_motion(0, 0, 10) == 0
        assert buffer.detect_motion(1, 0, 10) == 100

    def test_out_of_bounds_pixel(self, create_frame_sequence):
        buffer = FrameBuffer(W, H, SIZE)
        buffer.add_frames(create_frame_sequence([BLACK, WHITE]))
        with pytest.raises(BoundsError):
            buffer.detect_motion(W, 0, 10)


class TestMotionMap:
    def test_matches_detect_motion(self):
        rng = np.random.default_rng(0)
        buffer = FrameBuffer(5, 4, 4)
        for _ in range(6):
            buffer.add_frame(Frame.from_array(rng.integers(0, 256, (4, 5, 4), dtype=np.uint8)))

        scores = buffer.motion_map(150)

        assert scores.shape == (4, 5)
        for y in range(4):
            for x in range(5):
                assert scores[y, x] == buffer.detect_motion(x, y, 150)

    def test_empty_history(self):
        buffer = FrameBuffer(3, 2, 4)
        buffer.add_frame(Frame(3, 2))
        scores = buffer.motion_map(10)
        assert scores.shape == (2, 3)
        assert not scores.any()

    def test_half_scores_round_up(self):
        buffer = FrameBuffer(1, 1, 9)
        buffer.add_frames([Frame.filled(1, 1, BLACK) for _ in range(8)])
        buffer.add_frame(Frame.filled(1, 1, WHITE))
        assert buffer.motion_map(10)[0, 0] == 13
