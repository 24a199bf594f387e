from __future__ import annotations

import logging
from pathlib import Path
from logging import Handler

from .formatters import JSONFormatter, HumanReadableFormatter


def build_json_file_handler(path: Path, level: int = logging.INFO) -> Handler:
    """Create a file handler writing one JSON object per line.

    Args:
        path: Path to log file (.jsonl)
        level: Logging level
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    h = logging.FileHandler(path, encoding="utf-8", mode="a")
    h.setLevel(level)
    h.setFormatter(JSONFormatter())
    return h


def build_console_handler(level: int = logging.INFO, *, json_output: bool = False) -> Handler:
    """Create a stderr handler, human-readable unless ``json_output`` is set."""
    h = logging.StreamHandler()
    h.setLevel(level)
    h.setFormatter(JSONFormatter() if json_output else HumanReadableFormatter())
    return h
