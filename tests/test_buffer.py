import struct

import pytest

from tradekit.buffer import Buffer, checksum


def test_new_buffer_is_empty():
    buf = Buffer(16)
    assert len(buf) == 0
    assert buf.remaining() == 16
    assert buf.view() == b""


def test_write_and_view():
    buf = Buffer(8)
    assert buf.write(b"abc") == 3
    assert buf.view() == b"abc"
    assert len(buf) == 3
    assert buf.remaining() == 5


def test_write_overflow_raises():
    buf = Buffer(4)
    buf.write(b"abc")
    with pytest.raises(BufferError):
        buf.write(b"de")
    assert buf.view() == b"abc"


def test_put_appends_byte():
    buf = Buffer(2)
    buf.put(0x41)
    buf.put(0x42)
    assert buf.view() == b"AB"
    with pytest.raises(BufferError):
        buf.put(0x43)


def test_put_rejects_non_byte():
    with pytest.raises(ValueError):
        Buffer(4).put(256)


@pytest.mark.parametrize(
    "fmt, method",
    [
        ("<H", "get_le16"),
        ("<I", "get_le32"),
        ("<Q", "get_le64"),
        (">H", "get_be16"),
        ("<B", "get_u8"),
    ],
)
def test_integer_round_trip(fmt, method):
    value = 0x7F if fmt.endswith("B") else 0x1234
    if fmt in ("<I",):
        value = 0x12345678
    if fmt == "<Q":
        value = 0x0102030405060708
    buf = Buffer(16)
    buf.write(struct.pack(fmt, value))
    assert getattr(buf, method)() == value
    assert len(buf) == 0


def test_peek_does_not_consume():
    buf = Buffer(8)
    buf.write(struct.pack("<H", 0xBABA))
    assert buf.peek_le16() == 0xBABA
    assert buf.peek_u8() == 0xBA
    assert len(buf) == 2


def test_get_past_end_raises():
    buf = Buffer(8)
    buf.write(b"\x01")
    with pytest.raises(IndexError):
        buf.get_le16()
    assert len(buf) == 1


def test_get_bytes():
    buf = Buffer(8)
    buf.write(b"hello")
    assert buf.get_bytes(2) == b"he"
    assert buf.view() == b"llo"


def test_advance_and_bounds():
    buf = Buffer(8)
    buf.write(b"hello")
    buf.advance(3)
    assert buf.view() == b"lo"
    with pytest.raises(ValueError):
        buf.advance(5)


def test_reset_discards_data():
    buf = Buffer(8)
    buf.write(b"data")
    buf.get_u8()
    buf.reset()
    assert len(buf) == 0
    assert buf.remaining() == 8


def test_compact_moves_unread_to_front():
    buf = Buffer(6)
    buf.write(b"abcdef")
    buf.advance(4)
    assert buf.remaining() == 0
    buf.compact()
    assert buf.view() == b"ef"
    assert buf.remaining() == 4
    buf.write(b"gh")
    assert buf.view() == b"efgh"


def test_find_positions_at_byte():
    buf = Buffer(16)
    buf.write(b"xx=yy")
    assert buf.find(ord("=")) is True
    assert buf.view() == b"=yy"


def test_find_missing_byte_drains():
    buf = Buffer(16)
    buf.write(b"abc")
    assert buf.find(ord("z")) is False
    assert len(buf) == 0


def test_checksum_wraps_at_256():
    assert checksum(bytes([200, 100])) == 44
    assert checksum(b"") == 0


def test_buffer_checksum_covers_unread_only():
    buf = Buffer(16)
    buf.write(b"\x05abc")
    buf.advance(1)
    assert buf.checksum() == checksum(b"abc")


def test_negative_capacity_rejected():
    with pytest.raises(ValueError):
        Buffer(-1)