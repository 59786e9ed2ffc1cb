"""Frame decoding.

A frame is ``uint16`` declared length, ``uint16`` message type, then a
type-specific payload, all little-endian.  Handshakes are answered with
a fixed reply; the four position-bearing types are decoded into a
:class:`~pynoran.models.position.PositionRecord`; every other type is
ignored.

Position payloads come in two layouts sharing the same type codes.  The
only signal is the payload length after the header, see
:func:`detect_variant`.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from datetime import datetime

from pynoran import _constants as c
from pynoran._cursor import ByteCursor
from pynoran._hexlog import DEFAULT_MAX_BYTES, hex_for_log, printable_ascii
from pynoran.exceptions import NoranDecodeError
from pynoran.handshake import build_handshake_reply
from pynoran.identity import FrameContext, IdentityResolver
from pynoran.models.frame import FrameHeader, LayoutVariant, MessageType
from pynoran.models.position import PositionRecord
from pynoran.timestamp import parse_ascii_time, unpack_packed_time

_logger = logging.getLogger(__name__)


def read_header(cursor: ByteCursor) -> FrameHeader:
    """Consume the 4-byte header from the front of *cursor*."""
    length = cursor.read_u16("frame length")
    type_code = cursor.read_u16("message type")
    return FrameHeader(length=length, type_code=type_code)


def detect_variant(message_type: MessageType, payload_length: int) -> LayoutVariant:
    """Select the payload layout from the type and the bytes after the header.

    ``UPLOAD_POSITION_NEW`` is always extended. ``UPLOAD_POSITION`` and
    ``ALARM`` are extended at exactly 48 bytes, ``CONTROL_RESPONSE`` at
    exactly 57. Anything else is legacy.
    """
    if message_type == MessageType.UPLOAD_POSITION_NEW:
        return LayoutVariant.EXTENDED
    if c.EXTENDED_PAYLOAD_LENGTHS.get(int(message_type)) == payload_length:
        return LayoutVariant.EXTENDED
    return LayoutVariant.LEGACY


def kph_to_knots(value: float) -> float:
    return value / c.KPH_PER_KNOT


class PositionDecoder:
    """Decode the payload of a position-bearing frame.

    Parameters
    ----------
    resolver : IdentityResolver
        Maps the transmitted identifier to an internal device id.
    """

    def __init__(self, resolver: IdentityResolver) -> None:
        self._resolver = resolver

    def decode(self, header: FrameHeader, cursor: ByteCursor, context: FrameContext) -> PositionRecord | None:
        """Read the payload following *header*.

        Returns ``None`` when the device is not known to the resolver.

        Raises
        ------
        NoranFramingError
            A field runs past the end of the frame.
        NoranTimestampError
            The extended ASCII timestamp is malformed.
        """
        message_type = header.message_type
        variant = detect_variant(message_type, cursor.remaining)
        extended = variant is LayoutVariant.EXTENDED
        _logger.debug("Decoding %s frame as %s layout (%d payload bytes)", message_type.name, variant, cursor.remaining)

        if message_type == MessageType.CONTROL_RESPONSE:
            cursor.skip(4, "gateway address")
            cursor.skip(4, "gateway port")

        valid = bool(cursor.read_u8("status") & 0x01)
        alarm = cursor.read_u8("alarm")
        attributes: dict[str, int | float] = {c.KEY_ALARM: alarm}

        if extended:
            speed = kph_to_knots(cursor.read_u32("speed"))
            course = cursor.read_f32("course")
        else:
            speed = kph_to_knots(cursor.read_u8("speed"))
            course = float(cursor.read_u16("course"))

        longitude = cursor.read_f32("longitude")
        latitude = cursor.read_f32("latitude")

        time: datetime | None = None
        if not extended:
            time = unpack_packed_time(cursor.read_u32("packed time"))

        id_length = c.EXTENDED_ID_LENGTH if extended else c.LEGACY_ID_LENGTH
        identifier = printable_ascii(cursor.read_bytes(id_length, "device identifier"))
        device_id = self._resolver.resolve(identifier, context)
        if device_id is None:
            return None

        if extended:
            time = parse_ascii_time(cursor.read_bytes(c.EXTENDED_TIME_LENGTH, "timestamp"))
            cursor.skip(1, "timestamp terminator")

        if not extended:
            attributes[c.KEY_IO1] = cursor.read_u8("io1")
            attributes[c.KEY_FUEL] = cursor.read_u8("fuel")
        elif message_type == MessageType.UPLOAD_POSITION_NEW:
            attributes[c.KEY_TEMP1] = cursor.read_i16("temperature")
            attributes[c.KEY_ODOMETER] = cursor.read_f32("odometer")

        return PositionRecord(
            device_id=device_id,
            message_type=message_type,
            variant=variant,
            valid=valid,
            alarm_code=alarm,
            speed_knots=speed,
            course_degrees=course,
            longitude=longitude,
            latitude=latitude,
            time=time,
            attributes=attributes,
        )


class DecodeOutcome(enum.StrEnum):
    POSITION = "position"
    HANDSHAKE = "handshake"
    UNIDENTIFIED = "unidentified"
    IGNORED = "ignored"
    FAULT = "fault"


@dataclass(frozen=True)
class DecodeResult:
    """Outcome of :meth:`NoranDecoder.process`.

    ``FAULT`` carries the exception in ``error``; ``UNIDENTIFIED`` and
    ``IGNORED`` are normal "no record" outcomes.
    """

    outcome: DecodeOutcome
    header: FrameHeader | None = None
    position: PositionRecord | None = None
    reply: bytes | None = None
    error: NoranDecodeError | None = None

    @property
    def is_fault(self) -> bool:
        return self.outcome is DecodeOutcome.FAULT


class NoranDecoder:
    """Entry point for complete frames delivered by a transport.

    Holds no per-frame state; one instance may be shared by concurrent
    workers as long as the resolver tolerates it.

    Parameters
    ----------
    resolver : IdentityResolver
        Identity directory used for position frames.
    log_max_bytes : int
        Maximum number of frame bytes rendered in debug logs.
    """

    def __init__(self, resolver: IdentityResolver, *, log_max_bytes: int = DEFAULT_MAX_BYTES) -> None:
        self._positions = PositionDecoder(resolver)
        self._log_max_bytes = log_max_bytes

    def _dispatch(self, frame: bytes, context: FrameContext) -> DecodeResult:
        _logger.debug("Frame from %s: %s", context.remote_address, hex_for_log(frame, max_bytes=self._log_max_bytes))
        cursor = ByteCursor(frame)
        header = read_header(cursor)
        message_type = header.message_type

        if message_type == MessageType.SHAKE_HAND and context.can_reply:
            reply = build_handshake_reply()
            _logger.debug("Handshake reply to %s: %s", context.remote_address, reply.hex())
            context.send(reply)  # type: ignore[misc]
            return DecodeResult(DecodeOutcome.HANDSHAKE, header=header, reply=reply)

        if message_type.carries_position:
            position = self._positions.decode(header, cursor, context)
            if position is None:
                return DecodeResult(DecodeOutcome.UNIDENTIFIED, header=header)
            return DecodeResult(DecodeOutcome.POSITION, header=header, position=position)

        return DecodeResult(DecodeOutcome.IGNORED, header=header)

    def decode(self, frame: bytes, context: FrameContext | None = None) -> PositionRecord | None:
        """Decode one frame, raising on malformed input.

        Raises
        ------
        NoranDecodeError
            The frame is truncated or its timestamp is malformed.
        """
        return self._dispatch(frame, context or FrameContext()).position

    def process(self, frame: bytes, context: FrameContext | None = None) -> DecodeResult:
        """Decode one frame, returning faults as a ``FAULT`` result."""
        try:
            return self._dispatch(frame, context or FrameContext())
        except NoranDecodeError as exc:
            return DecodeResult(DecodeOutcome.FAULT, error=exc)
