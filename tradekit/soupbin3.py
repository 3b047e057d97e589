"""SoupBinTCP 3.0 packet encoding and decoding."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Union

from tradekit.buffer import Buffer

FieldValue = Union[str, bytes]

_LENGTH_SIZE = 2
_MAX_LENGTH = 0xFFFF


class PacketType(str, Enum):
    DEBUG = "+"
    LOGIN_ACCEPTED = "A"
    LOGIN_REJECTED = "J"
    SEQ_DATA = "S"
    SERVER_HEARTBEAT = "H"
    END_OF_SESSION = "Z"
    LOGIN_REQUEST = "L"
    UNSEQ_DATA = "U"
    CLIENT_HEARTBEAT = "R"
    LOGOUT_REQUEST = "O"


# Fixed-width text fields: name, width, right-justified (numeric) or not.
_FIXED: dict[PacketType, tuple[tuple[str, int, bool], ...]] = {
    PacketType.LOGIN_ACCEPTED: (("Session", 10, False), ("SequenceNumber", 20, True)),
    PacketType.LOGIN_REJECTED: (("RejectReasonCode", 1, False),),
    PacketType.SERVER_HEARTBEAT: (),
    PacketType.END_OF_SESSION: (),
    PacketType.LOGIN_REQUEST: (
        ("Username", 6, False),
        ("Password", 10, False),
        ("RequestedSession", 10, False),
        ("RequestedSequenceNumber", 20, True),
    ),
    PacketType.CLIENT_HEARTBEAT: (),
    PacketType.LOGOUT_REQUEST: (),
}
_TEXT = {PacketType.DEBUG: "Text"}
_DATA = {PacketType.SEQ_DATA: "Message", PacketType.UNSEQ_DATA: "Message"}


@dataclass(frozen=True)
class Packet:
    """A packet: its type and its payload fields by specification name."""

    packet_type: PacketType
    fields: dict[str, FieldValue] = field(default_factory=dict)

    def __getitem__(self, name: str) -> FieldValue:
        return self.fields[name]


def _packet_type(value: PacketType | str) -> PacketType:
    try:
        return PacketType(value)
    except ValueError:
        raise ValueError(f"unknown SoupBinTCP packet type {value!r}") from None


def _decode_payload(kind: PacketType, payload: bytes) -> dict[str, FieldValue]:
    if kind in _TEXT:
        return {_TEXT[kind]: payload.decode("latin-1")}
    if kind in _DATA:
        return {_DATA[kind]: payload}
    layout = _FIXED[kind]
    expected = sum(width for _, width, _ in layout)
    if len(payload) != expected:
        raise ValueError(
            f"{kind.name} packet carries {len(payload)} bytes, expected {expected}"
        )
    fields: dict[str, FieldValue] = {}
    offset = 0
    for name, width, _ in layout:
        fields[name] = payload[offset:offset + width].decode("latin-1")
        offset += width
    return fields


def decode_packet(buffer: Buffer) -> Packet | None:
    """Decode the next packet; return None, consuming nothing, if it is incomplete.

    A zero length, an unknown type or a wrong size for a fixed-size packet
    raises ValueError.
    """
    if len(buffer) < _LENGTH_SIZE:
        return None
    start = buffer.start
    length = int.from_bytes(buffer.data[start:start + _LENGTH_SIZE], "big")
    if not length:
        raise ValueError("SoupBinTCP packet has zero length")
    if len(buffer) < _LENGTH_SIZE + length:
        return None
    body = bytes(buffer.data[start + _LENGTH_SIZE:start + _LENGTH_SIZE + length])
    kind = _packet_type(chr(body[0]))
    fields = _decode_payload(kind, body[1:])
    buffer.advance(_LENGTH_SIZE + length)
    return Packet(kind, fields)


def _encode_payload(packet: Packet) -> bytes:
    kind = _packet_type(packet.packet_type)
    if kind in _TEXT:
        text = packet.fields.get(_TEXT[kind], "")
        return text.encode("latin-1") if isinstance(text, str) else bytes(text)
    if kind in _DATA:
        data = packet.fields.get(_DATA[kind], b"")
        return data.encode("latin-1") if isinstance(data, str) else bytes(data)
    parts: list[bytes] = []
    for name, width, numeric in _FIXED[kind]:
        value = packet.fields.get(name, "")
        raw = value.encode("latin-1") if isinstance(value, str) else bytes(value)
        if len(raw) > width:
            raise ValueError(f"{name} is {len(raw)} bytes, at most {width} allowed")
        parts.append(raw.rjust(width) if numeric else raw.ljust(width))
    return b"".join(parts)


def encode_packet(packet: Packet) -> bytes:
    """The wire form of *packet*: a big-endian length, the type, the payload.

    Text fields are padded with spaces, numeric ones on the left.
    """
    body = _packet_type(packet.packet_type).value.encode("ascii") + _encode_payload(packet)
    if len(body) > _MAX_LENGTH:
        raise ValueError(f"packet of {len(body)} bytes is too long")
    return len(body).to_bytes(_LENGTH_SIZE, "big") + body