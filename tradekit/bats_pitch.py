"""BATS PITCH market data message decoding (fixed-width ASCII on the wire)."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from tradekit.buffer import Buffer

_TIMESTAMP_SIZE = 8
_HEADER_SIZE = _TIMESTAMP_SIZE + 1


class PitchMsgType(str, Enum):
    SYMBOL_CLEAR = "s"
    ADD_ORDER_SHORT = "A"
    ADD_ORDER_LONG = "d"
    ORDER_EXECUTED = "E"
    ORDER_CANCEL = "X"
    TRADE_SHORT = "P"
    TRADE_LONG = "r"
    TRADE_BREAK = "B"
    TRADING_STATUS = "H"
    AUCTION_UPDATE = "I"
    AUCTION_SUMMARY = "J"


# Fields that follow the timestamp and the message type: (name, width).
_LAYOUTS: dict[PitchMsgType, tuple[tuple[str, int], ...]] = {
    PitchMsgType.SYMBOL_CLEAR: (("StockSymbol", 8),),
    PitchMsgType.ADD_ORDER_SHORT: (
        ("OrderID", 12), ("SideIndicator", 1), ("Shares", 6), ("StockSymbol", 6),
        ("Price", 10), ("Display", 1),
    ),
    PitchMsgType.ADD_ORDER_LONG: (
        ("OrderID", 12), ("SideIndicator", 1), ("Shares", 6), ("StockSymbol", 8),
        ("Price", 10), ("Display", 1), ("ParticipantID", 4),
    ),
    PitchMsgType.ORDER_EXECUTED: (
        ("OrderID", 12), ("ExecutedShares", 6), ("ExecutionID", 12),
    ),
    PitchMsgType.ORDER_CANCEL: (("OrderID", 12), ("CanceledShares", 6)),
    PitchMsgType.TRADE_SHORT: (
        ("OrderID", 12), ("SideIndicator", 1), ("Shares", 6), ("StockSymbol", 6),
        ("Price", 10), ("ExecutionID", 12),
    ),
    PitchMsgType.TRADE_LONG: (
        ("OrderID", 12), ("SideIndicator", 1), ("Shares", 6), ("StockSymbol", 8),
        ("Price", 10), ("ExecutionID", 12),
    ),
    PitchMsgType.TRADE_BREAK: (("ExecutionID", 12),),
    PitchMsgType.TRADING_STATUS: (
        ("StockSymbol", 8), ("HaltStatus", 1), ("RegSHOAction", 1),
        ("Reserved1", 1), ("Reserved2", 1),
    ),
    PitchMsgType.AUCTION_UPDATE: (
        ("StockSymbol", 8), ("AuctionType", 1), ("ReferencePrice", 10),
        ("BuyShares", 10), ("SellShares", 10), ("IndicativePrice", 10),
        ("AuctionOnlyPrice", 10),
    ),
    PitchMsgType.AUCTION_SUMMARY: (
        ("StockSymbol", 8), ("AuctionType", 1), ("Price", 10), ("Shares", 10),
    ),
}
_SIZES = {
    kind: _HEADER_SIZE + sum(width for _, width in layout)
    for kind, layout in _LAYOUTS.items()
}


@dataclass(frozen=True)
class PitchMessage:
    """A decoded message: timestamp, type and text fields by specification name."""

    timestamp: str
    msg_type: PitchMsgType
    fields: dict[str, str] = field(default_factory=dict)

    def __getitem__(self, name: str) -> str:
        return self.fields[name]


def decode(buffer: Buffer, extra: int = 0) -> PitchMessage | None:
    """Decode the next message, then skip *extra* trailing bytes (a line end).

    Return None, consuming nothing, if the message and its trailer are not
    all there yet. An unknown message type raises ValueError.
    """
    if extra < 0:
        raise ValueError("extra byte count must not be negative")
    if len(buffer) < _HEADER_SIZE:
        return None
    code = chr(buffer.data[buffer.start + _TIMESTAMP_SIZE])
    try:
        kind = PitchMsgType(code)
    except ValueError:
        raise ValueError(f"unknown PITCH message type {code!r}") from None
    size = _SIZES[kind]
    if len(buffer) < size + extra:
        return None
    raw = buffer.get_bytes(size + extra).decode("latin-1")
    fields: dict[str, str] = {}
    offset = _HEADER_SIZE
    for name, width in _LAYOUTS[kind]:
        fields[name] = raw[offset:offset + width]
        offset += width
    return PitchMessage(raw[:_TIMESTAMP_SIZE], kind, fields)