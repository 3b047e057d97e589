import struct

import pytest

from tradekit.boe import MAGIC, BoeMsgType, decode
from tradekit.buffer import Buffer


def _buf(data: bytes) -> Buffer:
    buf = Buffer(len(data) + 16)
    buf.write(data)
    return buf


def _frame(msg_type: int, payload: bytes, seq: int = 1, unit: int = 0) -> bytes:
    body = struct.pack("<BBI", msg_type, unit, seq) + payload
    return struct.pack("<HH", MAGIC, 2 + len(body)) + body


def _login_payload(units):
    fixed = struct.pack(
        "<4s4s10sB11QB", b"0001", b"USER", b"password  ", 0, *range(11), len(units)
    )
    return fixed + b"".join(struct.pack("<BI", n, s) for n, s in units)


def test_client_heartbeat_wire_bytes():
    msg = decode(_buf(b"\xba\xba\x08\x00\x03\x00\x07\x00\x00\x00"))
    assert msg.header.message_type is BoeMsgType.CLIENT_HEARTBEAT
    assert msg.header.message_length == 8
    assert msg.header.sequence_number == 7
    assert msg.payload == b""


def test_server_heartbeat_frame_decodes():
    msg = decode(_buf(_frame(0x09, b"", seq=3, unit=1)))
    assert msg.header.message_type is BoeMsgType.SERVER_HEARTBEAT
    assert msg.header.message_length == 8
    assert msg.header.sequence_number == 3
    assert msg.header.matching_unit == 1


def test_login_request_fields():
    msg = decode(_buf(_frame(0x01, _login_payload([(1, 42)]), seq=5, unit=2)))
    assert msg.header.message_type is BoeMsgType.LOGIN_REQUEST
    assert msg.header.matching_unit == 2
    assert msg["Username"] == "USER"
    assert msg["Password"] == "password  "
    assert msg["ReservedBitfields2"] == 10
    assert msg["Units"] == [(1, 42)]


def test_logout_fields():
    payload = struct.pack("<c60sIB", b"U", b"bye".ljust(60), 99, 1) + struct.pack("<BI", 3, 8)
    msg = decode(_buf(_frame(0x08, payload)))
    assert msg["LogoutReason"] == "U"
    assert msg["LogoutReasonText"].rstrip() == "bye"
    assert msg["LastReceivedSequenceNumber"] == 99
    assert msg["Units"] == [(3, 8)]


def test_decode_consumes_exact_frame():
    frame = _frame(0x09, b"")
    buf = _buf(frame + b"\x00")
    decode(buf)
    assert buf.view() == b"\x00"


def test_incomplete_returns_none():
    frame = _frame(0x01, _login_payload([]))[:-1]
    buf = _buf(frame)
    assert decode(buf) is None
    assert len(buf) == len(frame)


def test_bad_magic_raises():
    with pytest.raises(ValueError):
        decode(_buf(b"\xab\xab\x08\x00\x03\x00\x07\x00\x00\x00"))


def test_too_long_raises():
    with pytest.raises(ValueError):
        decode(_buf(_frame(0x04, b"\x00" * 200)))


def test_truncated_units_raise():
    payload = _login_payload([(1, 42)])[:-2]
    with pytest.raises(ValueError):
        decode(_buf(_frame(0x01, payload)))


def test_unknown_type_raises():
    with pytest.raises(ValueError):
        decode(_buf(_frame(0x7F, b"")))