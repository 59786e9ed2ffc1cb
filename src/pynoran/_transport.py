"""UDP listener that feeds datagrams to the decoder.

Trackers send one frame per datagram, so no reassembly is done here.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import Any

from pynoran.config import NoranConfig
from pynoran.decoder import DecodeOutcome, NoranDecoder
from pynoran.identity import FrameContext
from pynoran.models.position import PositionRecord

_logger = logging.getLogger(__name__)


class NoranDatagramProtocol(asyncio.DatagramProtocol):
    """Decode each datagram and hand positions to *on_position*.

    Handshake replies go back to the sending address. Frames that fail
    to decode are logged and dropped.
    """

    def __init__(
        self,
        decoder: NoranDecoder,
        on_position: Callable[[PositionRecord], None],
    ) -> None:
        self._decoder = decoder
        self._on_position = on_position
        self._transport: asyncio.DatagramTransport | None = None

    def connection_made(self, transport: asyncio.BaseTransport) -> None:
        self._transport = transport  # type: ignore[assignment]

    def connection_lost(self, exc: Exception | None) -> None:
        self._transport = None
        if exc is not None:
            _logger.warning("Noran listener closed with error: %s", exc)
        else:
            _logger.info("Noran listener closed")

    def _sender(self, addr: Any) -> Callable[[bytes], None] | None:
        transport = self._transport
        if transport is None:
            return None

        def send(data: bytes) -> None:
            transport.sendto(data, addr)

        return send

    def datagram_received(self, data: bytes, addr: Any) -> None:
        context = FrameContext(remote_address=addr, send=self._sender(addr))
        result = self._decoder.process(data, context)
        if result.outcome is DecodeOutcome.FAULT:
            _logger.warning("Dropping frame from %s: %s", addr, result.error)
            return
        if result.position is not None:
            self._on_position(result.position)

    def error_received(self, exc: Exception) -> None:
        _logger.warning("UDP error: %s", exc)


async def start_listener(
    config: NoranConfig,
    decoder: NoranDecoder,
    on_position: Callable[[PositionRecord], None],
) -> tuple[asyncio.DatagramTransport, NoranDatagramProtocol]:
    """Bind the UDP endpoint described by *config*."""
    loop = asyncio.get_running_loop()
    transport, protocol = await loop.create_datagram_endpoint(
        lambda: NoranDatagramProtocol(decoder, on_position),
        local_addr=(config.host, config.port),
    )
    _logger.info("Listening for Noran frames on %s:%s", config.host, config.port)
    return transport, protocol
