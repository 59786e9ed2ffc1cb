"""pynoran - Decoder for Noran GPS tracker uplink frames."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pynoran")
except PackageNotFoundError:
    __version__ = "0+local"
from pynoran.config import NoranConfig
from pynoran.decoder import (
    DecodeOutcome,
    DecodeResult,
    NoranDecoder,
    PositionDecoder,
    detect_variant,
    read_header,
)
from pynoran.exceptions import (
    NoranConfigError,
    NoranDecodeError,
    NoranError,
    NoranFramingError,
    NoranTimestampError,
)
from pynoran.handshake import HANDSHAKE_REPLY, build_handshake_reply
from pynoran.identity import DeviceDirectory, FrameContext, IdentityResolver
from pynoran.models import (
    Device,
    FrameHeader,
    LayoutVariant,
    MessageType,
    PositionRecord,
)
from pynoran.timestamp import parse_ascii_time, unpack_packed_time

__all__ = [
    "__version__",
    "HANDSHAKE_REPLY",
    "DecodeOutcome",
    "DecodeResult",
    "Device",
    "DeviceDirectory",
    "FrameContext",
    "FrameHeader",
    "IdentityResolver",
    "LayoutVariant",
    "MessageType",
    "NoranConfig",
    "NoranConfigError",
    "NoranDecodeError",
    "NoranDecoder",
    "NoranError",
    "NoranFramingError",
    "NoranTimestampError",
    "PositionDecoder",
    "PositionRecord",
    "build_handshake_reply",
    "detect_variant",
    "parse_ascii_time",
    "read_header",
    "unpack_packed_time",
]
