"""Listener configuration for pynoran."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from pynoran._hexlog import DEFAULT_MAX_BYTES
from pynoran.exceptions import NoranConfigError


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


def _env_int(name: str, value: str) -> int:
    try:
        return int(value.strip())
    except ValueError as exc:
        raise NoranConfigError(f"{name} must be an integer, got {value!r}") from exc


@dataclasses.dataclass(frozen=True)
class NoranConfig:
    """Listener configuration.

    Parameters
    ----------
    host : str
        Address the UDP listener binds to.
    port : int
        UDP port the trackers report to.
    register_unknown : bool
        Register devices the directory has never seen instead of
        dropping their frames.
    log_max_bytes : int
        Maximum number of frame bytes rendered in debug logs.
    """

    host: str = "0.0.0.0"
    port: int = 5061
    register_unknown: bool = False
    log_max_bytes: int = DEFAULT_MAX_BYTES

    def __post_init__(self) -> None:
        if not 0 <= self.port <= 0xFFFF:
            raise NoranConfigError(f"port out of range: {self.port}")
        if self.log_max_bytes < 0:
            raise NoranConfigError(f"log_max_bytes must not be negative: {self.log_max_bytes}")

    @classmethod
    def from_env(cls, **overrides: Any) -> NoranConfig:
        """Create configuration from environment variables.

        Reads ``NORAN_HOST``, ``NORAN_PORT``, ``NORAN_REGISTER_UNKNOWN``
        and ``NORAN_LOG_MAX_BYTES``. Explicit keyword arguments override
        environment values.

        Raises
        ------
        NoranConfigError
            A numeric variable is not an integer or out of range.
        """
        env = os.environ
        config_kwargs: dict[str, Any] = {}

        host = env.get("NORAN_HOST")
        if host is not None and "host" not in overrides:
            config_kwargs["host"] = host.strip()

        port_env = env.get("NORAN_PORT")
        if port_env is not None and "port" not in overrides:
            config_kwargs["port"] = _env_int("NORAN_PORT", port_env)

        if "register_unknown" not in overrides:
            config_kwargs["register_unknown"] = _env_bool(env.get("NORAN_REGISTER_UNKNOWN"), False)

        max_bytes_env = env.get("NORAN_LOG_MAX_BYTES")
        if max_bytes_env is not None and "log_max_bytes" not in overrides:
            config_kwargs["log_max_bytes"] = _env_int("NORAN_LOG_MAX_BYTES", max_bytes_env)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
