"""
Builders turning component configuration dictionaries into objects.

Configurations share one shape::

    {
        "enabled": True,
        "type": "FrameBuffer",
        "settings": {"width": 640, "height": 480, "capacity": 5},
    }

A missing or false ``enabled`` flag means the component is not built and
the builder returns None.
"""

from typing import Any, Dict, Optional

from loguru import logger

from chromaframe.exceptions import ConfigurationError
from chromaframe.filters.quantize import QuantizeFilter
from chromaframe.frame_buffer import FrameBuffer

DEFAULT_CAPACITY = 5


def _settings(config: Dict[str, Any], expected_type: str) -> Optional[Dict[str, Any]]:
    if not config or not config.get("enabled", False):
        return None

    component_type = config.get("type", expected_type)
    if component_type != expected_type:
        raise ConfigurationError(
            f"Unknown component type '{component_type}', expected '{expected_type}'"
        )

    settings = config.get("settings", {})
    if not isinstance(settings, dict):
        raise ConfigurationError(
            f"settings for {expected_type} must be a dict, got {type(settings).__name__}"
        )
    return settings


def build_frame_buffer(
    buffer_config: Optional[Dict[str, Any]],
    session_id: str = "default_session",
) -> Optional[FrameBuffer]:
    """
    Build a FrameBuffer from a component configuration.

    Settings:
        width (required), height (required), capacity (default 5)

    Raises:
        ConfigurationError: On an unknown type, missing dimensions or
                            invalid values
    """
    settings = _settings(buffer_config, "FrameBuffer")
    if settings is None:
        logger.info("FrameBuffer disabled by configuration")
        return None

    missing = [key for key in ("width", "height") if key not in settings]
    if missing:
        raise ConfigurationError(f"FrameBuffer settings missing: {', '.join(missing)}")

    try:
        return FrameBuffer(
            width=int(settings["width"]),
            height=int(settings["height"]),
            capacity=int(settings.get("capacity", DEFAULT_CAPACITY)),
            session_id=session_id,
        )
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Invalid FrameBuffer settings: {e}") from e


def build_quantize_filter(
    filter_config: Optional[Dict[str, Any]],
) -> Optional[QuantizeFilter]:
    """
    Build a QuantizeFilter from a component configuration.

    Settings:
        palette (required, list of RGB triples), threshold (optional)

    Raises:
        ConfigurationError: On an unknown type, missing palette or invalid
                            values
    """
    settings = _settings(filter_config, "QuantizeFilter")
    if settings is None:
        logger.info("QuantizeFilter disabled by configuration")
        return None

    if "palette" not in settings:
        raise ConfigurationError("QuantizeFilter settings missing: palette")

    try:
        return QuantizeFilter(
            palette=settings["palette"],
            threshold=settings.get("threshold"),
        )
    except (TypeError, ValueError, IndexError) as e:
        raise ConfigurationError(f"Invalid QuantizeFilter settings: {e}") from e
