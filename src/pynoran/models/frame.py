"""Frame header model and wire enums."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

from pynoran import _constants as c
from pynoran.models._base import NoranEnum


class MessageType(NoranEnum):
    """Message type code carried at frame offset 2."""

    UNKNOWN = -1
    SHAKE_HAND = c.MSG_SHAKE_HAND
    CONTROL = c.MSG_CONTROL
    ALARM = c.MSG_ALARM
    UPLOAD_POSITION = c.MSG_UPLOAD_POSITION
    UPLOAD_POSITION_NEW = c.MSG_UPLOAD_POSITION_NEW
    IMAGE_SIZE = c.MSG_IMAGE_SIZE
    IMAGE_PACKET = c.MSG_IMAGE_PACKET
    SHAKE_HAND_RESPONSE = c.MSG_SHAKE_HAND_RESPONSE
    CONTROL_RESPONSE = c.MSG_CONTROL_RESPONSE

    @property
    def carries_position(self) -> bool:
        """Whether frames of this type are decoded into a position."""
        return self in _POSITION_TYPES


_POSITION_TYPES = frozenset(
    {
        MessageType.UPLOAD_POSITION,
        MessageType.UPLOAD_POSITION_NEW,
        MessageType.CONTROL_RESPONSE,
        MessageType.ALARM,
    }
)


class LayoutVariant(StrEnum):
    """Payload layout of a position-bearing frame."""

    LEGACY = "legacy"
    EXTENDED = "extended"


class FrameHeader(BaseModel):
    """The two leading fields common to every frame.

    ``length`` is the value the device declared; it is not compared
    against the number of bytes actually received.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    length: int = Field(ge=0, le=0xFFFF)
    type_code: int = Field(ge=0, le=0xFFFF)

    @property
    def message_type(self) -> MessageType:
        return MessageType(self.type_code)
