from __future__ import annotations

from pynoran._hexlog import hex_for_log, printable_ascii


def test_hex_for_log_short_frame() -> None:
    assert hex_for_log(b"\x0d\x00\x00\x80") == "0d000080"


def test_hex_for_log_truncates_long_frames() -> None:
    rendered = hex_for_log(b"\xab" * 100, max_bytes=4)
    assert rendered.startswith("abababab")
    assert "<truncated 100b>" in rendered


def test_hex_for_log_none() -> None:
    assert hex_for_log(None) == "<none>"


def test_printable_ascii_drops_control_and_high_bytes() -> None:
    assert printable_ascii(b"\x00NR08\x7f G1\xff\r\n") == "NR08 G1"
