"""Base enum and timestamp helpers shared by pynoran models.

Wire enums inherit from :class:`NoranEnum`, which adds an ``UNKNOWN``
member at ``-1`` and a ``_missing_`` hook returning ``UNKNOWN`` for any
code without a mapped member, so unrecognised codes never raise.
"""

from __future__ import annotations

import enum
from datetime import UTC, datetime


class NoranEnum(enum.IntEnum):
    """Base for wire-code enums.

    Every subclass **must** define ``UNKNOWN = -1``.
    """

    @classmethod
    def _missing_(cls, value: object) -> NoranEnum:
        # pylint: disable=no-member
        if hasattr(cls, "UNKNOWN"):
            unknown: NoranEnum = cls.UNKNOWN  # type: ignore[attr-defined]
            return unknown
        return next(iter(cls))


def ensure_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes; aware values are returned unchanged."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value
