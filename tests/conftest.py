import sys

import pytest
from loguru import logger

from chromaframe import Frame

FRAME_WIDTH = 8
FRAME_HEIGHT = 8


@pytest.fixture
def create_solid_color_frame():
    """Factory for frames with every pixel set to one RGBA color."""

    def _create(rgba, width=FRAME_WIDTH, height=FRAME_HEIGHT):
        return Frame.filled(width, height, rgba)

    return _create


@pytest.fixture
def create_frame_sequence(create_solid_color_frame):
    """Factory for a list of solid frames, one per color."""

    def _create(colors, width=FRAME_WIDTH, height=FRAME_HEIGHT):
        return [create_solid_color_frame(c, width, height) for c in colors]

    return _create


@pytest.fixture
def restore_logger():
    """Put loguru back to its default stderr sink after a test reconfigures it."""
    yield logger
    logger.remove()
    logger.add(sys.stderr)
