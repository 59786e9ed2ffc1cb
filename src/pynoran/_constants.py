"""Internal constants shared across the library."""

PROTOCOL_NAME = "noran"

# ------------------------------------------------------------------
# Message type codes (uint16 LE at frame offset 2)
# ------------------------------------------------------------------
MSG_SHAKE_HAND = 0x0000
MSG_CONTROL = 0x0002
MSG_ALARM = 0x0003
MSG_UPLOAD_POSITION = 0x0008
MSG_UPLOAD_POSITION_NEW = 0x0032
MSG_IMAGE_SIZE = 0x0200
MSG_IMAGE_PACKET = 0x0201
MSG_SHAKE_HAND_RESPONSE = 0x8000
MSG_CONTROL_RESPONSE = 0x8009

HEADER_SIZE = 2 + 2  # length + type

# ------------------------------------------------------------------
# Handshake reply framing
# ------------------------------------------------------------------
HANDSHAKE_MARKER = b"\r\n*KW"
HANDSHAKE_TERMINATOR = b"\r\n"
HANDSHAKE_STATUS_OK = 1
HANDSHAKE_REPLY_SIZE = len(HANDSHAKE_MARKER) + 1 + 2 + 2 + 1 + len(HANDSHAKE_TERMINATOR)

# ------------------------------------------------------------------
# Extended layout is recognised purely by the payload length that
# follows the header.  UPLOAD_POSITION_NEW is always extended.
# ------------------------------------------------------------------
EXTENDED_PAYLOAD_LENGTHS: dict[int, int] = {
    MSG_UPLOAD_POSITION: 48,
    MSG_ALARM: 48,
    MSG_CONTROL_RESPONSE: 57,
}

LEGACY_ID_LENGTH = 11
EXTENDED_ID_LENGTH = 12
EXTENDED_TIME_LENGTH = 17
EXTENDED_TIME_FORMAT = "%y-%m-%d %H:%M:%S"

BASE_YEAR = 2000
KPH_PER_KNOT = 1.852

# ------------------------------------------------------------------
# Position attribute keys
# ------------------------------------------------------------------
KEY_ALARM = "alarm"
KEY_IO1 = "io1"
KEY_FUEL = "fuel"
KEY_TEMP1 = "temp1"
KEY_ODOMETER = "odometer"
