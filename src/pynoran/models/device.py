"""Device model."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, field_validator


class Device(BaseModel):
    """A tracker known to the identity directory."""

    model_config = ConfigDict(frozen=True, extra="forbid", str_strip_whitespace=True)

    id: int
    unique_id: str
    """Identifier string the tracker transmits in its frames."""
    name: str | None = None

    @field_validator("unique_id")
    @classmethod
    def _require_unique_id(cls, value: str) -> str:
        if not value:
            raise ValueError("unique_id must be non-empty")
        return value
