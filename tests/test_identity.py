from __future__ import annotations

import logging
import threading

import pytest
from _frames import build_frame, legacy_payload
from pydantic import ValidationError

from pynoran import _constants as c
from pynoran.decoder import DecodeOutcome, NoranDecoder
from pynoran.identity import DeviceDirectory, FrameContext


def test_add_is_idempotent_and_assigns_sequential_ids() -> None:
    directory = DeviceDirectory()
    first = directory.add("NR08G000123", "van 1")
    second = directory.add("NR08G000124")
    again = directory.add("NR08G000123", "renamed")

    assert first.id == 1
    assert second.id == 2
    assert again == first
    assert len(directory) == 2
    assert "NR08G000123" in directory
    assert directory.get("missing") is None


def test_add_rejects_blank_identifier() -> None:
    with pytest.raises(ValidationError):
        DeviceDirectory().add("   ")


def test_resolve_known_device() -> None:
    directory = DeviceDirectory()
    device = directory.add("NR08G000123")
    assert directory.resolve("NR08G000123", FrameContext()) == device.id


def test_resolve_unknown_device_logs_warning(caplog: pytest.LogCaptureFixture) -> None:
    directory = DeviceDirectory()
    with caplog.at_level(logging.WARNING, logger="pynoran.identity"):
        result = directory.resolve("NR08G999999", FrameContext(remote_address=("10.1.1.1", 5061)))

    assert result is None
    assert len(directory) == 0
    assert "Unknown device - NR08G999999" in caplog.text
    assert "10.1.1.1" in caplog.text


def test_register_unknown_creates_device() -> None:
    directory = DeviceDirectory(register_unknown=True)

    device_id = directory.resolve("NR08G000777", FrameContext())

    assert device_id == 1
    device = directory.get("NR08G000777")
    assert device is not None
    assert device.name == "NR08G000777"
    assert directory.resolve("NR08G000777", FrameContext()) == device_id


def test_register_unknown_skips_empty_identifier() -> None:
    directory = DeviceDirectory(register_unknown=True)
    assert directory.resolve("", FrameContext()) is None
    assert len(directory) == 0


def test_concurrent_registration_yields_one_device() -> None:
    directory = DeviceDirectory(register_unknown=True)
    results: list[int | None] = []
    lock = threading.Lock()

    def worker() -> None:
        device_id = directory.resolve("NR08G000555", FrameContext())
        with lock:
            results.append(device_id)

    threads = [threading.Thread(target=worker) for _ in range(16)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(directory) == 1
    assert set(results) == {1}


def test_frame_context_can_reply() -> None:
    assert FrameContext().can_reply is False
    assert FrameContext(send=lambda data: None).can_reply is True


class TestPaddedIdentifiers:
    def test_add_and_resolve_with_padding(self) -> None:
        directory = DeviceDirectory()
        device = directory.add("NR08G0001  ")

        assert device.unique_id == "NR08G0001"
        assert directory.resolve("NR08G0001  ", FrameContext()) == device.id
        assert directory.get("  NR08G0001") == device
        assert "NR08G0001  " in directory

    def test_padded_identifier_keeps_one_device_id(self) -> None:
        directory = DeviceDirectory(register_unknown=True)
        decoder = NoranDecoder(directory)
        frame = build_frame(c.MSG_UPLOAD_POSITION, legacy_payload(identifier=b"NR08G0001  "))

        ids = [decoder.process(frame).position.device_id for _ in range(3)]  # type: ignore[union-attr]

        assert ids == [1, 1, 1]
        assert len(directory) == 1

    def test_blank_identifier_is_unidentified_not_fault(self) -> None:
        directory = DeviceDirectory(register_unknown=True)
        frame = build_frame(c.MSG_UPLOAD_POSITION, legacy_payload(identifier=b" " * 11))

        result = NoranDecoder(directory).process(frame)

        assert result.outcome is DecodeOutcome.UNIDENTIFIED
        assert result.error is None
        assert len(directory) == 0
