"""Custom exception hierarchy for pynoran."""

from __future__ import annotations


class NoranError(Exception):
    """Base exception for all pynoran errors."""


class NoranConfigError(NoranError):
    """Invalid or missing configuration."""


class NoranDecodeError(NoranError):
    """A frame could not be turned into a result.

    Unknown devices and unsupported message types are *not* decode
    errors; they simply produce no record.
    """


class NoranFramingError(NoranDecodeError):
    """Frame ended before a header or field could be read."""

    def __init__(
        self,
        message: str,
        *,
        offset: int = 0,
        needed: int = 0,
        available: int = 0,
    ) -> None:
        self.offset = offset
        self.needed = needed
        self.available = available
        super().__init__(message)


class NoranTimestampError(NoranDecodeError):
    """Extended-layout ASCII timestamp did not match ``yy-MM-dd HH:mm:ss``."""

    def __init__(self, message: str, *, raw: bytes = b"") -> None:
        self.raw = raw
        super().__init__(message)
