import pytest

from tradekit.buffer import Buffer
from tradekit.omx_itch186 import OmxItch186MsgType, decode, message_size

ADD_ORDER_PIECES = ["000000123", "B", "000000500", "ABC123", "0000012345"]


def _buf(data: bytes) -> Buffer:
    buf = Buffer(len(data) + 16)
    buf.write(data)
    return buf


def test_add_order_fields():
    data = ("A" + "".join(ADD_ORDER_PIECES)).encode()
    msg = decode(_buf(data))
    assert msg.msg_type is OmxItch186MsgType.ADD_ORDER
    assert list(msg.fields.values()) == ADD_ORDER_PIECES
    assert msg["OrderBook"] == "ABC123"


def test_add_order_size_matches_wire():
    data = ("A" + "".join(ADD_ORDER_PIECES)).encode()
    assert message_size(OmxItch186MsgType.ADD_ORDER) == len(data)


def test_seconds_message_pinned():
    msg = decode(_buf(b"T12345"))
    assert msg.fields == {"Second": "12345"}
    assert message_size("T") == 6


@pytest.mark.parametrize("kind", list(OmxItch186MsgType))
def test_every_type_round_trips_its_body(kind):
    body = "".join(str(i % 10) for i in range(message_size(kind) - 1))
    buf = _buf(kind.value.encode() + body.encode() + b"TAIL")
    msg = decode(buf)
    assert msg.msg_type is kind
    assert "".join(msg.fields.values()) == body
    assert buf.view() == b"TAIL"


def test_incomplete_returns_none():
    data = ("A" + "".join(ADD_ORDER_PIECES)).encode()[:-1]
    buf = _buf(data)
    assert decode(buf) is None
    assert len(buf) == len(data)


def test_empty_buffer_returns_none():
    assert decode(Buffer(8)) is None


def test_unknown_type_raises():
    with pytest.raises(ValueError):
        decode(_buf(b"Z000000000"))


def test_unknown_type_size_raises():
    with pytest.raises(ValueError):
        message_size("Z")