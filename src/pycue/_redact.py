"""Helpers for compact debug logging.

Probe sources and fetched images are frequently ``data:`` URLs several
kilobytes long. This module shortens such values before they reach DEBUG
logs.
"""

from __future__ import annotations


def redact_for_log(value: str | bytes, *, max_string: int = 256) -> str:
    """Return a shortened form of *value* suitable for debug logs."""
    if isinstance(value, bytes | bytearray):
        return f"<bytes:{len(value)}b>"
    if value.startswith("data:"):
        header, sep, payload = value.partition(",")
        if sep:
            return f"{header},<{len(payload)} chars>"
    if len(value) > max_string:
        return f"{value[:max_string]}…<truncated>"
    return value
