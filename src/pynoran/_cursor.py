"""Bounds-checked sequential reader over a frame buffer."""

from __future__ import annotations

import struct

from pynoran.exceptions import NoranFramingError

_U8 = struct.Struct("B")


class ByteCursor:
    """Read typed values from *data* front to back.

    Every read checks that enough bytes remain and raises
    :class:`~pynoran.exceptions.NoranFramingError` otherwise, leaving
    the position unchanged.

    Parameters
    ----------
    data : bytes
        Frame buffer.
    byteorder : str
        ``struct`` byte-order prefix, ``"<"`` (default) or ``">"``.
    """

    def __init__(self, data: bytes | bytearray | memoryview, byteorder: str = "<") -> None:
        if byteorder not in ("<", ">"):
            raise ValueError(f"Unsupported byte order: {byteorder!r}")
        self._data = bytes(data)
        self._pos = 0
        self._u16 = struct.Struct(f"{byteorder}H")
        self._i16 = struct.Struct(f"{byteorder}h")
        self._u32 = struct.Struct(f"{byteorder}I")
        self._f32 = struct.Struct(f"{byteorder}f")

    @property
    def position(self) -> int:
        return self._pos

    @property
    def remaining(self) -> int:
        """Number of unread bytes."""
        return len(self._data) - self._pos

    def _require(self, size: int, what: str) -> None:
        if size > self.remaining:
            raise NoranFramingError(
                f"Frame too short for {what}: need {size} bytes at offset {self._pos}, {self.remaining} left",
                offset=self._pos,
                needed=size,
                available=self.remaining,
            )

    def _unpack(self, fmt: struct.Struct, what: str) -> int | float:
        self._require(fmt.size, what)
        value = fmt.unpack_from(self._data, self._pos)[0]
        self._pos += fmt.size
        return value

    def read_u8(self, what: str = "uint8") -> int:
        return int(self._unpack(_U8, what))

    def read_u16(self, what: str = "uint16") -> int:
        return int(self._unpack(self._u16, what))

    def read_i16(self, what: str = "int16") -> int:
        return int(self._unpack(self._i16, what))

    def read_u32(self, what: str = "uint32") -> int:
        return int(self._unpack(self._u32, what))

    def read_f32(self, what: str = "float32") -> float:
        return float(self._unpack(self._f32, what))

    def read_bytes(self, size: int, what: str = "bytes") -> bytes:
        self._require(size, what)
        chunk = self._data[self._pos : self._pos + size]
        self._pos += size
        return chunk

    def skip(self, size: int, what: str = "padding") -> None:
        self._require(size, what)
        self._pos += size
