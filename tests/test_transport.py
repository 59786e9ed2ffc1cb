from __future__ import annotations

import asyncio
import logging
from typing import Any

import pytest
from _frames import RecordingResolver, build_frame, legacy_payload

from pynoran import _constants as c
from pynoran._transport import NoranDatagramProtocol, start_listener
from pynoran.config import NoranConfig
from pynoran.decoder import NoranDecoder
from pynoran.handshake import HANDSHAKE_REPLY
from pynoran.models.position import PositionRecord


class _FakeTransport:
    def __init__(self) -> None:
        self.sent: list[tuple[bytes, Any]] = []

    def sendto(self, data: bytes, addr: Any = None) -> None:
        self.sent.append((data, addr))


def _protocol(resolver: RecordingResolver) -> tuple[NoranDatagramProtocol, _FakeTransport, list[PositionRecord]]:
    positions: list[PositionRecord] = []
    protocol = NoranDatagramProtocol(NoranDecoder(resolver), positions.append)
    transport = _FakeTransport()
    protocol.connection_made(transport)  # type: ignore[arg-type]
    return protocol, transport, positions


def test_handshake_reply_goes_to_sender(resolver: RecordingResolver) -> None:
    protocol, transport, positions = _protocol(resolver)

    protocol.datagram_received(build_frame(c.MSG_SHAKE_HAND, b""), ("10.0.0.9", 4000))

    assert transport.sent == [(HANDSHAKE_REPLY, ("10.0.0.9", 4000))]
    assert positions == []


def test_position_is_forwarded(resolver: RecordingResolver) -> None:
    protocol, transport, positions = _protocol(resolver)
    addr = ("10.0.0.9", 4000)

    protocol.datagram_received(build_frame(c.MSG_UPLOAD_POSITION, legacy_payload()), addr)

    assert len(positions) == 1
    assert positions[0].device_id == 7
    assert transport.sent == []
    assert resolver.calls[0][1].remote_address == addr


def test_faulty_frame_is_logged_and_dropped(resolver: RecordingResolver, caplog: pytest.LogCaptureFixture) -> None:
    protocol, _transport, positions = _protocol(resolver)

    with caplog.at_level(logging.WARNING, logger="pynoran._transport"):
        protocol.datagram_received(build_frame(c.MSG_UPLOAD_POSITION, b"\x01\x02"), ("10.0.0.9", 4000))

    assert positions == []
    assert "Dropping frame from" in caplog.text


def test_no_reply_after_connection_lost(resolver: RecordingResolver) -> None:
    protocol, transport, _positions = _protocol(resolver)
    protocol.connection_lost(None)

    protocol.datagram_received(build_frame(c.MSG_SHAKE_HAND, b""), ("10.0.0.9", 4000))

    assert transport.sent == []


def test_connection_lost_logs_at_info(resolver: RecordingResolver, caplog: pytest.LogCaptureFixture) -> None:
    protocol, _transport, _positions = _protocol(resolver)

    with caplog.at_level(logging.INFO, logger="pynoran._transport"):
        protocol.connection_lost(None)

    assert [(r.levelno, r.getMessage()) for r in caplog.records] == [(logging.INFO, "Noran listener closed")]


class _Client(asyncio.DatagramProtocol):
    def __init__(self) -> None:
        self.received: asyncio.Queue[bytes] = asyncio.Queue()

    def datagram_received(self, data: bytes, addr: Any) -> None:
        self.received.put_nowait(data)


@pytest.mark.asyncio
async def test_listener_round_trip(resolver: RecordingResolver) -> None:
    positions: list[PositionRecord] = []
    config = NoranConfig(host="127.0.0.1", port=0)
    server, _protocol_obj = await start_listener(config, NoranDecoder(resolver), positions.append)
    host, port = server.get_extra_info("sockname")[:2]

    loop = asyncio.get_running_loop()
    client_transport, client = await loop.create_datagram_endpoint(_Client, remote_addr=(host, port))
    try:
        client_transport.sendto(build_frame(c.MSG_SHAKE_HAND, b""))
        reply = await asyncio.wait_for(client.received.get(), timeout=2.0)
        assert reply == HANDSHAKE_REPLY

        client_transport.sendto(build_frame(c.MSG_UPLOAD_POSITION, legacy_payload()))
        for _ in range(100):
            if positions:
                break
            await asyncio.sleep(0.01)
        assert len(positions) == 1
        assert positions[0].attributes["fuel"] == 55
    finally:
        client_transport.close()
        server.close()
