import struct

import pytest

from tradekit.buffer import Buffer
from tradekit.itch41 import Itch41Message, Itch41MsgType, decode, message_size


def buffer_with(data: bytes) -> Buffer:
    buf = Buffer(len(data) + 16)
    buf.write(data)
    return buf


def add_order(ref=42, side=b"B", shares=100, stock=b"AAPL    ", price=1234500):
    return struct.pack(">cIQcI8sI", b"A", 7, ref, side, shares, stock, price)


SAMPLES = {
    Itch41MsgType.TIMESTAMP_SECONDS: struct.pack(">cI", b"T", 3600),
    Itch41MsgType.SYSTEM_EVENT: struct.pack(">cIc", b"S", 1, b"O"),
    Itch41MsgType.ADD_ORDER: add_order(),
    Itch41MsgType.ORDER_DELETE: struct.pack(">cIQ", b"D", 9, 42),
    Itch41MsgType.ORDER_REPLACE: struct.pack(">cIQQII", b"U", 9, 42, 43, 10, 99),
    Itch41MsgType.RPII: struct.pack(">cI8sc", b"N", 9, b"MSFT    ", b"B"),
    Itch41MsgType.NOII: struct.pack(">cIQQc8sIIIcc", b"I", 1, 2, 3, b"B", b"IBM     ",
                                    4, 5, 6, b"O", b"L"),
}


@pytest.mark.parametrize("kind,raw", list(SAMPLES.items()))
def test_layout_sizes_match(kind, raw):
    assert message_size(kind) == len(raw)


@pytest.mark.parametrize("kind,raw", list(SAMPLES.items()))
def test_decode_consumes_whole_message(kind, raw):
    buf = buffer_with(raw + b"extra")
    msg = decode(buf)
    assert msg.msg_type is kind
    assert buf.view() == b"extra"


def test_decode_add_order_fields():
    msg = decode(buffer_with(add_order(ref=42, shares=100, price=1234500)))
    assert msg == Itch41Message(
        Itch41MsgType.ADD_ORDER,
        {
            "TimestampNanoseconds": 7,
            "OrderReferenceNumber": 42,
            "BuySellIndicator": "B",
            "Shares": 100,
            "Stock": "AAPL    ",
            "Price": 1234500,
        },
    )
    assert msg["Price"] == 1234500


def test_timestamp_seconds_size():
    assert message_size(Itch41MsgType.TIMESTAMP_SECONDS) == 5
    assert message_size("A") == message_size(Itch41MsgType.ADD_ORDER)


def test_incomplete_message_is_not_consumed():
    raw = add_order()
    buf = buffer_with(raw[:-1])
    assert decode(buf) is None
    assert buf.view() == raw[:-1]


def test_empty_buffer():
    assert decode(Buffer(8)) is None


def test_unknown_type():
    with pytest.raises(ValueError):
        decode(buffer_with(b"Z" + bytes(20)))
    with pytest.raises(ValueError):
        message_size("z")


def test_decode_sequence():
    raw = b"".join(SAMPLES.values())
    buf = buffer_with(raw)
    kinds = []
    while (msg := decode(buf)) is not None:
        kinds.append(msg.msg_type)
    assert kinds == list(SAMPLES)
    assert len(buf) == 0