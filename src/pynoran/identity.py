"""Device identity resolution.

The decoder maps the identifier string a tracker transmits to an
internal device id through an injected :class:`IdentityResolver`.
:class:`DeviceDirectory` is an in-memory implementation suitable for
tests, tools and small deployments.
"""

from __future__ import annotations

import itertools
import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Protocol

from pynoran.models.device import Device

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FrameContext:
    """Connection details handed to the decoder with each frame.

    Parameters
    ----------
    remote_address : Any
        Peer address the frame arrived from, as the transport reports it.
    send : callable or None
        Writes reply bytes back to the peer. ``None`` when the frame
        cannot be answered (e.g. offline decoding).
    """

    remote_address: Any = None
    send: Callable[[bytes], None] | None = None

    @property
    def can_reply(self) -> bool:
        return self.send is not None


class IdentityResolver(Protocol):
    """Structural interface for identity lookups.

    Returns the internal device id, or ``None`` when the identifier is
    not known.
    """

    def resolve(self, identifier: str, context: FrameContext) -> int | None:
        ...


def _normalize(unique_id: str) -> str:
    # Registry keys match Device.unique_id, which strips surrounding whitespace.
    return unique_id.strip()


class DeviceDirectory:
    """Thread-safe in-memory device registry.

    Parameters
    ----------
    register_unknown : bool
        Register identifiers seen for the first time instead of
        rejecting them.

    Identifiers are compared with surrounding whitespace removed, so a
    tracker padding its identifier with spaces keeps one device id.
    Blank identifiers are never registered.
    """

    def __init__(self, *, register_unknown: bool = False) -> None:
        self._register_unknown = register_unknown
        self._devices: dict[str, Device] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._devices)

    def __contains__(self, unique_id: object) -> bool:
        if not isinstance(unique_id, str):
            return False
        with self._lock:
            return _normalize(unique_id) in self._devices

    def _add_locked(self, unique_id: str, name: str | None) -> Device:
        existing = self._devices.get(unique_id)
        if existing is not None:
            return existing
        device = Device(id=next(self._ids), unique_id=unique_id, name=name)
        self._devices[device.unique_id] = device
        return device

    def add(self, unique_id: str, name: str | None = None) -> Device:
        """Register *unique_id*, returning the existing device if already known."""
        with self._lock:
            return self._add_locked(_normalize(unique_id), name)

    def get(self, unique_id: str) -> Device | None:
        with self._lock:
            return self._devices.get(_normalize(unique_id))

    def resolve(self, identifier: str, context: FrameContext) -> int | None:
        key = _normalize(identifier)
        with self._lock:
            device = self._devices.get(key)
            if device is None and self._register_unknown and key:
                device = self._add_locked(key, key)
                _logger.info("Automatically registered device %s (id=%s)", key, device.id)
        if device is None:
            _logger.warning("Unknown device - %s (%s)", identifier, context.remote_address)
            return None
        return device.id
