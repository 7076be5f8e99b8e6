"""
Loguru configuration shared by chromaframe components.

Components log through ``loguru.logger`` and attach structured context as an
``extra`` keyword::

    logger.debug("Frame added", extra={
        "component_name": "FrameBuffer",
        "operation": "add_frame",
        "outcome": "appended",
        "session_id": session_id,
        "relevant_metadata": {...},
    })

``setup_logging`` installs one sink rendering those records as a readable
console line and, optionally, as JSON lines in a file.
"""

import datetime
import json
import sys
from typing import Any, Dict, Optional

import numpy as np
from loguru import logger

CONSOLE_METADATA_LIMIT = 100

# Fields every JSON record starts with; extras never overwrite them
BASE_FIELDS = ("timestamp", "level", "message", "logger", "file", "line", "function")


class NumpySafeJsonEncoder(json.JSONEncoder):
    """JSON encoder accepting NumPy scalars and arrays; anything else falls back to str()"""

    def default(self, obj):
        if isinstance(obj, np.bool_):
            return bool(obj)
        if isinstance(obj, np.integer):
            return int(obj)
        if isinstance(obj, np.floating):
            return float(obj)
        if isinstance(obj, np.ndarray):
            return obj.tolist()
        if isinstance(obj, (datetime.datetime, datetime.date)):
            return obj.isoformat()
        try:
            return super().default(obj)
        except TypeError:
            return str(obj)


def flatten_extra(extra: Dict[str, Any]) -> Dict[str, Any]:
    """
    Merge nested ``extra`` dictionaries into one level.

    Loguru captures keyword arguments into ``record["extra"]``, so an
    ``extra={...}`` argument arrives nested one level down.
    """
    if not isinstance(extra, dict):
        return extra

    flattened = {}
    for key, value in extra.items():
        if key == "extra" and isinstance(value, dict):
            flattened.update(flatten_extra(value))
        else:
            flattened[key] = value
    return flattened


def build_log_entry(record) -> Dict[str, Any]:
    """Turn a loguru record into a flat dict ready for JSON encoding."""
    entry = {
        "timestamp": record["time"].strftime("%Y-%m-%dT%H:%M:%S.%fZ"),
        "level": record["level"].name,
        "message": record["message"],
        "logger": record["name"],
        "file": record["file"].name,
        "line": record["line"],
        "function": record["function"],
    }
    for key, value in flatten_extra(record["extra"]).items():
        if key not in BASE_FIELDS:
            entry[key] = value
    if record["exception"]:
        entry["exception"] = str(record["exception"])
    return entry


def format_console_line(entry: Dict[str, Any]) -> str:
    """
    Render a log entry as ``<time> - <LEVEL> - <component>.<operation> (<outcome>) - <message>``.

    The component part is omitted when the entry has no ``component_name``;
    ``relevant_metadata`` is appended, truncated to a readable length.
    """
    parts = [entry["timestamp"], entry["level"]]

    component = entry.get("component_name")
    if component:
        label = component
        if entry.get("operation"):
            label += f".{entry['operation']}"
        if entry.get("outcome"):
            label += f" ({entry['outcome']})"
        parts.append(label)

    parts.append(entry["message"])

    if "relevant_metadata" in entry:
        metadata = str(entry["relevant_metadata"])
        if len(metadata) > CONSOLE_METADATA_LIMIT:
            metadata = metadata[: CONSOLE_METADATA_LIMIT - 3] + "..."
        parts.append(f"Meta: {metadata}")

    return " - ".join(parts)


def setup_logging(
    logger_name: Optional[str] = None,
    default_level: str = "INFO",
    log_file: Optional[str] = None,
):
    """
    Configure the loguru logger used by every chromaframe component.

    Removes existing handlers and adds a single sink that prints a console
    line to stderr and, when ``log_file`` is given, appends the JSON form of
    the record to that file.

    Args:
        logger_name: If set, return a logger bound to this name
        default_level: Minimum level to emit
        log_file: Optional path of a JSON-lines log file

    Returns:
        The configured (optionally bound) loguru logger
    """
    logger.remove()

    def sink(message):
        entry = build_log_entry(message.record)
        print(format_console_line(entry), file=sys.stderr)
        if log_file:
            with open(log_file, "a") as f:
                f.write(json.dumps(entry, cls=NumpySafeJsonEncoder) + "\n")

    logger.add(sink, level=default_level, format="{message}")

    if logger_name:
        return logger.bind(name=logger_name)
    return logger
