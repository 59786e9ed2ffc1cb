"""Data models for decoded Noran frames."""

from pynoran.models._base import NoranEnum, ensure_utc
from pynoran.models.device import Device
from pynoran.models.frame import FrameHeader, LayoutVariant, MessageType
from pynoran.models.position import PositionRecord

__all__ = [
    "Device",
    "FrameHeader",
    "LayoutVariant",
    "MessageType",
    "NoranEnum",
    "PositionRecord",
    "ensure_utc",
]
