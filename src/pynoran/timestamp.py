"""Timestamp decoding for both payload layouts.

Legacy frames carry a bit-packed ``uint32``::

    bits 26-31  year - 2000
    bits 22-25  month
    bits 17-21  day
    bits 12-16  hour
    bits  6-11  minute
    bits  0-5   second

Extended frames carry 17 ASCII characters ``yy-MM-dd HH:mm:ss``.

Neither form states a time zone; both are returned as UTC.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import NamedTuple

from pynoran._constants import BASE_YEAR, EXTENDED_TIME_FORMAT
from pynoran.exceptions import NoranTimestampError


class PackedTimeFields(NamedTuple):
    """Raw fields of a bit-packed legacy timestamp, not range checked."""

    year: int
    month: int
    day: int
    hour: int
    minute: int
    second: int


def _bits(value: int, start: int, end: int) -> int:
    return (value >> start) & ((1 << (end - start)) - 1)


def unpack_fields(value: int) -> PackedTimeFields:
    """Split a packed ``uint32`` into its calendar fields."""
    value &= 0xFFFFFFFF
    return PackedTimeFields(
        year=BASE_YEAR + _bits(value, 26, 32),
        month=_bits(value, 22, 26),
        day=_bits(value, 17, 22),
        hour=_bits(value, 12, 17),
        minute=_bits(value, 6, 12),
        second=_bits(value, 0, 6),
    )


def pack_fields(year: int, month: int, day: int, hour: int, minute: int, second: int) -> int:
    """Inverse of :func:`unpack_fields`; out-of-width values are masked."""
    return (
        ((year - BASE_YEAR) & 0x3F) << 26
        | (month & 0x0F) << 22
        | (day & 0x1F) << 17
        | (hour & 0x1F) << 12
        | (minute & 0x3F) << 6
        | (second & 0x3F)
    )


def unpack_packed_time(value: int) -> datetime:
    """Decode a legacy bit-packed timestamp into a UTC datetime.

    Fields are applied leniently: a month of 0 or 13-15, a day of 0 or
    past the end of the month, an hour above 23 and minutes or seconds
    above 59 roll into the neighbouring unit instead of raising.  Every
    32-bit input therefore yields a datetime.
    """
    fields = unpack_fields(value)
    year, month_index = divmod(fields.year * 12 + fields.month - 1, 12)
    start = datetime(year, month_index + 1, 1, tzinfo=UTC)
    return start + timedelta(
        days=fields.day - 1,
        hours=fields.hour,
        minutes=fields.minute,
        seconds=fields.second,
    )


def parse_ascii_time(raw: bytes) -> datetime:
    """Parse the extended layout's ``yy-MM-dd HH:mm:ss`` field as UTC.

    Raises
    ------
    NoranTimestampError
        If *raw* is not ASCII or does not match the pattern.
    """
    try:
        text = raw.decode("ascii")
        parsed = datetime.strptime(text, EXTENDED_TIME_FORMAT)
    except (UnicodeDecodeError, ValueError) as exc:
        raise NoranTimestampError(f"Malformed timestamp {raw!r}: {exc}", raw=raw) from exc
    return parsed.replace(tzinfo=UTC)
