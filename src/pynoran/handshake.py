"""Handshake acknowledgment."""

from __future__ import annotations

import struct

from pynoran._constants import (
    HANDSHAKE_MARKER,
    HANDSHAKE_REPLY_SIZE,
    HANDSHAKE_STATUS_OK,
    HANDSHAKE_TERMINATOR,
    MSG_SHAKE_HAND_RESPONSE,
)


def build_handshake_reply() -> bytes:
    """Return the 13-byte reply that admits a device onto the session.

    Layout: ``"\\r\\n*KW"``, ``0x00``, total length (``uint16`` LE),
    ``SHAKE_HAND_RESPONSE`` (``uint16`` LE), status ``1``, ``"\\r\\n"``.
    Nothing from the incoming handshake frame is echoed.
    """
    return b"".join(
        (
            HANDSHAKE_MARKER,
            b"\x00",
            struct.pack("<HHB", HANDSHAKE_REPLY_SIZE, MSG_SHAKE_HAND_RESPONSE, HANDSHAKE_STATUS_OK),
            HANDSHAKE_TERMINATOR,
        )
    )


HANDSHAKE_REPLY = build_handshake_reply()
