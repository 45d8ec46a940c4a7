"""Helpers for compact debug logging.

Mount options routinely carry component objects, render functions and
large fixture payloads. This module renders them as short, stable
summaries before they reach DEBUG logs.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any


def summarize_for_log(value: Any, *, max_string: int = 120, _depth: int = 0) -> Any:
    """Return a log-friendly copy of *value*."""
    if _depth > 8:
        return "<max-depth>"

    if value is None:
        return None

    if isinstance(value, str):
        if len(value) > max_string:
            return f"{value[:max_string]}…<truncated>"
        return value

    if isinstance(value, (int, float, bool)):
        return value

    if isinstance(value, bytes):
        return f"<bytes:{len(value)}b>"

    if isinstance(value, Mapping):
        return {
            str(k): summarize_for_log(v, max_string=max_string, _depth=_depth + 1) for k, v in value.items()
        }

    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        return [summarize_for_log(v, max_string=max_string, _depth=_depth + 1) for v in value]

    if callable(value):
        name = getattr(value, "__qualname__", None) or type(value).__name__
        return f"<callable:{name}>"

    # Components and handles: name the type without dumping internals.
    return f"<{type(value).__name__}>"
