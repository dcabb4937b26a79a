"""Utility helpers shared across okxdex core modules."""

from __future__ import annotations

import json
import logging
from typing import Any, Mapping, Optional


def get_logger(name: str = "okxdex") -> logging.Logger:
    """Return a configured logger that prints to stdout."""
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter("%(asctime)s | %(levelname)s | %(name)s | %(message)s")
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.setLevel(logging.INFO)
    return logger


def pretty_json(data: Any) -> str:
    """Render ``data`` as indented JSON, falling back to ``str`` for unknown types."""
    return json.dumps(data, indent=2, default=str)


def first_present(data: Mapping[str, Any], *keys: str, default: Optional[Any] = None) -> Any:
    """Return the value of the first key in ``keys`` that is set in ``data``."""
    for key in keys:
        value = data.get(key)
        if value not in (None, ""):
            return value
    return default


__all__ = ["first_present", "get_logger", "pretty_json"]
