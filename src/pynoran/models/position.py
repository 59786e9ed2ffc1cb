"""Decoded position model."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
from types import MappingProxyType
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from pynoran._constants import PROTOCOL_NAME
from pynoran.models._base import ensure_utc
from pynoran.models.frame import LayoutVariant, MessageType


class PositionRecord(BaseModel):
    """A position decoded from one uplink frame.

    Parameters
    ----------
    protocol : str
        Protocol name, always ``"noran"``.
    device_id : int
        Internal id returned by the identity resolver. The identifier
        string transmitted by the device is not kept.
    message_type : MessageType
        Type of the frame the position came from.
    variant : LayoutVariant
        Payload layout the frame was decoded with.
    valid : bool
        GPS fix validity (bit 0 of the status byte).
    alarm_code : int
        Raw alarm byte. Also present as ``attributes["alarm"]``.
    speed_knots : float
        Speed converted from km/h.
    course_degrees : float
        Heading in degrees.
    longitude : float
        Longitude in degrees.
    latitude : float
        Latitude in degrees.
    time : datetime
        Fix time in UTC.
    attributes : Mapping
        Read-only auxiliary telemetry. Keys depend on the layout and type:
        ``alarm`` always, ``io1``/``fuel`` for legacy frames,
        ``temp1``/``odometer`` for extended ``UPLOAD_POSITION_NEW``.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    protocol: str = PROTOCOL_NAME
    device_id: int
    message_type: MessageType
    variant: LayoutVariant
    valid: bool
    alarm_code: int = Field(ge=0, le=0xFF)
    speed_knots: float
    course_degrees: float
    longitude: float
    latitude: float
    time: datetime
    attributes: Mapping[str, int | float] = Field(default_factory=dict, validate_default=True)

    @field_validator("time")
    @classmethod
    def _ensure_tz_aware(cls, value: datetime) -> datetime:
        return ensure_utc(value)

    @field_validator("attributes", mode="after")
    @classmethod
    def _freeze_attributes(cls, value: Mapping[str, int | float]) -> Mapping[str, int | float]:
        return MappingProxyType(dict(value))

    @field_serializer("attributes")
    def _dump_attributes(self, value: Mapping[str, int | float]) -> dict[str, Any]:
        return dict(value)
