from __future__ import annotations

import logging
from logging import Handler
from pathlib import Path
from typing import TextIO

from .formatters import JSONFormatter, HumanReadableFormatter


def build_json_file_handler(path: Path, level: int = logging.INFO) -> Handler:
    """Create a JSONL handler for one run log.

    Reruns under the same run name append to the existing file.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(path, encoding="utf-8", mode="a")
    handler.setLevel(level)
    handler.setFormatter(JSONFormatter())
    return handler


def build_human_console_handler(level: int = logging.INFO, stream: TextIO | None = None) -> Handler:
    """Create a console handler with human-readable formatting.

    Args:
        level: Logging level
        stream: Target stream; stderr when None so stdout stays free for command output
    """
    handler = logging.StreamHandler(stream)
    handler.setLevel(level)
    handler.setFormatter(HumanReadableFormatter())
    return handler
