import pytest

from tradekit.buffer import Buffer
from tradekit.soupbin3 import Packet, PacketType, decode_packet, encode_packet


def _buffer(data: bytes) -> Buffer:
    buf = Buffer(len(data) + 16)
    buf.write(data)
    return buf


def test_heartbeat_wire_bytes():
    assert encode_packet(Packet(PacketType.SERVER_HEARTBEAT)) == b"\x00\x01H"


def test_login_request_round_trip_pads_fields():
    password = "password"
    packet = Packet(
        PacketType.LOGIN_REQUEST,
        {"Username": "user", "Password": password,
         "RequestedSession": "SESSION001", "RequestedSequenceNumber": "1"},
    )
    buf = _buffer(encode_packet(packet))
    decoded = decode_packet(buf)
    assert decoded.packet_type is PacketType.LOGIN_REQUEST
    assert decoded["Username"] == "user".ljust(6)
    assert decoded["Password"].rstrip() == password
    assert decoded["RequestedSession"] == "SESSION001"
    assert decoded["RequestedSequenceNumber"] == "1".rjust(20)
    assert len(buf) == 0


def test_sequenced_data_round_trip():
    payload = b"\x01\x02hello\xff"
    packet = Packet(PacketType.SEQ_DATA, {"Message": payload})
    decoded = decode_packet(_buffer(encode_packet(packet)))
    assert decoded == packet


def test_debug_text_round_trip():
    packet = Packet(PacketType.DEBUG, {"Text": "debug line"})
    assert decode_packet(_buffer(encode_packet(packet))) == packet


def test_consecutive_packets():
    first = encode_packet(Packet(PacketType.LOGIN_REJECTED, {"RejectReasonCode": "A"}))
    second = encode_packet(Packet(PacketType.END_OF_SESSION))
    buf = _buffer(first + second)
    assert decode_packet(buf)["RejectReasonCode"] == "A"
    assert decode_packet(buf).packet_type is PacketType.END_OF_SESSION
    assert decode_packet(buf) is None


def test_incomplete_packet_consumes_nothing():
    data = encode_packet(Packet(PacketType.UNSEQ_DATA, {"Message": b"abcdef"}))
    buf = _buffer(data[:-1])
    assert decode_packet(buf) is None
    assert len(buf) == len(data) - 1


def test_zero_length_raises():
    with pytest.raises(ValueError):
        decode_packet(_buffer(b"\x00\x00"))


def test_unknown_type_raises():
    with pytest.raises(ValueError):
        decode_packet(_buffer(b"\x00\x01?"))


def test_fixed_packet_with_wrong_length_raises():
    with pytest.raises(ValueError):
        decode_packet(_buffer(b"\x00\x02H\x00"))


def test_overlong_field_is_refused():
    with pytest.raises(ValueError):
        encode_packet(Packet(PacketType.LOGIN_ACCEPTED, {"Session": "X" * 11}))