"""LSE ITCH message decoding (little-endian on the wire)."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Union

from tradekit.buffer import Buffer

FieldValue = Union[int, str]

_PREFIX = 2  # Length and MessageType bytes


class LseItchMsgType(IntEnum):
    LOGIN_REQUEST = 0x01
    LOGIN_RESPONSE = 0x02
    LOGOUT_REQUEST = 0x05
    REPLAY_REQUEST = 0x03
    REPLAY_RESPONSE = 0x04
    SNAPSHOT_REQUEST = 0x81
    SNAPSHOT_RESPONSE = 0x82
    SNAPSHOT_COMPLETE = 0x83
    TIME = 0x54
    SYSTEM_EVENT = 0x53
    SYMBOL_DIRECTORY = 0x52
    SYMBOL_STATUS = 0x48
    ADD_ORDER = 0x41
    ADD_ATTRIBUTED_ORDER = 0x46
    ORDER_DELETED = 0x44
    ORDER_MODIFIED = 0x55
    ORDER_BOOK_CLEAR = 0x79
    ORDER_EXECUTED = 0x45
    ORDER_EXECUTED_WITH_PRICE_SIZE = 0x43
    TRADE = 0x50
    AUCTION_TRADE = 0x51
    OFF_BOOK_TRADE = 0x78
    TRADE_BREAK = 0x42
    AUCTION_INFO = 0x49
    STATISTICS = 0x77


# Administrative message bodies that follow Length and MessageType.
_LAYOUTS: dict[LseItchMsgType, tuple[struct.Struct, tuple[str, ...]]] = {
    kind: (struct.Struct(fmt), names)
    for kind, fmt, names in (
        (LseItchMsgType.LOGIN_REQUEST, "<6s8s", ("Username", "Password")),
        (LseItchMsgType.REPLAY_REQUEST, "<BIH", ("MarketDataGroup", "FirstMessage", "Count")),
        (LseItchMsgType.SNAPSHOT_REQUEST, "<I6sI",
         ("SequenceNumber", "Segment", "InstrumentID")),
        (LseItchMsgType.LOGOUT_REQUEST, "<", ()),
        (LseItchMsgType.LOGIN_RESPONSE, "<c", ("Status",)),
        (LseItchMsgType.REPLAY_RESPONSE, "<BIHc",
         ("MarketDataGroup", "FirstMessage", "Count", "Status")),
        (LseItchMsgType.SNAPSHOT_RESPONSE, "<IIc", ("SequenceNumber", "OrderCount", "Status")),
        (LseItchMsgType.SNAPSHOT_COMPLETE, "<I6sIB",
         ("SequenceNumber", "Segment", "InstrumentID", "Flags")),
    )
}


@dataclass(frozen=True)
class LseItchMessage:
    """A decoded message: type, length, fields and the raw body after the type."""

    msg_type: LseItchMsgType
    length: int
    fields: dict[str, FieldValue] = field(default_factory=dict)
    payload: bytes = b""

    def __getitem__(self, name: str) -> FieldValue:
        return self.fields[name]


def decode(buffer: Buffer) -> LseItchMessage | None:
    """Decode the next message; return None, consuming nothing, if it is incomplete.

    Length covers the whole message. Administrative messages are split into
    fields; application messages keep only their raw payload. An unknown type
    or an impossible length raises ValueError.
    """
    if len(buffer) < _PREFIX:
        return None
    length = buffer.data[buffer.start]
    code = buffer.data[buffer.start + 1]
    try:
        kind = LseItchMsgType(code)
    except ValueError:
        raise ValueError(f"unknown LSE ITCH message type {code:#04x}") from None
    if length < _PREFIX:
        raise ValueError(f"LSE ITCH message length {length} is too small")
    layout = _LAYOUTS.get(kind)
    if layout is not None and length < _PREFIX + layout[0].size:
        raise ValueError(f"LSE ITCH message length {length} too small for {kind.name}")
    if len(buffer) < length:
        return None
    payload = buffer.get_bytes(length)[_PREFIX:]
    fields: dict[str, FieldValue] = {}
    if layout is not None:
        fmt, names = layout
        values = fmt.unpack_from(payload)
        fields = {
            name: value.decode("latin-1") if isinstance(value, bytes) else value
            for name, value in zip(names, values)
        }
    return LseItchMessage(kind, length, fields, payload)