"""Helpers for frame debug logging.

Frames are binary and can be large, so debug logs show a bounded hex
rendering instead of the raw ``bytes`` repr.
"""

from __future__ import annotations

DEFAULT_MAX_BYTES = 64


def hex_for_log(data: bytes | bytearray | memoryview | None, *, max_bytes: int = DEFAULT_MAX_BYTES) -> str:
    """Return a hex string of *data* suitable for debug logs."""
    if data is None:
        return "<none>"
    raw = bytes(data)
    if max_bytes < 0:
        max_bytes = 0
    if len(raw) > max_bytes:
        return f"{raw[:max_bytes].hex()}…<truncated {len(raw)}b>"
    return raw.hex()


def printable_ascii(raw: bytes) -> str:
    """Decode *raw* as ASCII keeping only printable characters (0x20-0x7E)."""
    return "".join(chr(b) for b in raw if 0x20 <= b <= 0x7E)
