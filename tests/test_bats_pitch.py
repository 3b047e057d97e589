import pytest

from tradekit.bats_pitch import PitchMsgType, decode
from tradekit.buffer import Buffer

TIMESTAMP = "28800011"
ADD_ORDER_PIECES = ["4K27GA00000Y", "B", "000100", "AAPL  ", "0000182500", "Y"]


def _buf(data: bytes) -> Buffer:
    buf = Buffer(len(data) + 16)
    buf.write(data)
    return buf


def _add_order() -> bytes:
    return (TIMESTAMP + "A" + "".join(ADD_ORDER_PIECES)).encode()


def test_add_order_short_fields():
    msg = decode(_buf(_add_order()))
    assert msg.msg_type is PitchMsgType.ADD_ORDER_SHORT
    assert msg.timestamp == TIMESTAMP
    assert list(msg.fields.values()) == ADD_ORDER_PIECES
    assert msg["StockSymbol"] == "AAPL  "


def test_decode_consumes_whole_message():
    data = _add_order()
    buf = _buf(data + data)
    decode(buf)
    assert len(buf) == len(data)


def test_extra_trailer_is_skipped():
    buf = _buf(_add_order() + b"\n")
    msg = decode(buf, 1)
    assert msg["Display"] == "Y"
    assert len(buf) == 0


def test_without_extra_trailer_remains():
    buf = _buf(_add_order() + b"\n")
    decode(buf)
    assert buf.view() == b"\n"


def test_incomplete_message_returns_none():
    data = _add_order()[:-1]
    buf = _buf(data)
    assert decode(buf) is None
    assert len(buf) == len(data)


def test_missing_trailer_returns_none():
    buf = _buf(_add_order())
    assert decode(buf, 1) is None


def test_short_header_returns_none():
    assert decode(_buf(TIMESTAMP.encode())) is None


def test_trade_break():
    msg = decode(_buf((TIMESTAMP + "B" + "0A1B2C3D4E5F").encode()))
    assert msg.msg_type is PitchMsgType.TRADE_BREAK
    assert msg.fields == {"ExecutionID": "0A1B2C3D4E5F"}


def test_symbol_clear_lower_case_type():
    msg = decode(_buf((TIMESTAMP + "s" + "MSFT    ").encode()))
    assert msg.msg_type is PitchMsgType.SYMBOL_CLEAR
    assert msg["StockSymbol"] == "MSFT    "


def test_unknown_type_raises():
    with pytest.raises(ValueError):
        decode(_buf((TIMESTAMP + "Z" + "0" * 40).encode()))


def test_negative_extra_raises():
    with pytest.raises(ValueError):
        decode(_buf(_add_order()), -1)