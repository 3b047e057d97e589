"""OMX Nordic ITCH 1.86 message decoding (fixed-width ASCII after the type byte)."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from tradekit.buffer import Buffer


class OmxItch186MsgType(str, Enum):
    SECONDS = "T"
    MILLISECONDS = "M"
    SYSTEM_EVENT = "S"
    MARKET_SEGMENT_STATE = "O"
    ORDER_BOOK_DIRECTORY = "R"
    ORDER_BOOK_TRADING_ACTION = "H"
    ADD_ORDER = "A"
    ADD_ORDER_MPID = "F"
    ORDER_EXECUTED = "E"
    ORDER_EXECUTED_WITH_PRICE = "C"
    ORDER_CANCEL = "X"
    ORDER_DELETE = "D"
    TRADE = "P"
    CROSS_TRADE = "Q"
    BROKEN_TRADE = "B"
    NOII = "I"


_ORN = ("OrderReferenceNumber", 9)

# Fields that follow the one-byte message type: (name, width).
_LAYOUTS: dict[OmxItch186MsgType, tuple[tuple[str, int], ...]] = {
    OmxItch186MsgType.SECONDS: (("Second", 5),),
    OmxItch186MsgType.MILLISECONDS: (("Millisecond", 3),),
    OmxItch186MsgType.SYSTEM_EVENT: (("EventCode", 1),),
    OmxItch186MsgType.MARKET_SEGMENT_STATE: (("MarketSegmentID", 3), ("EventCode", 1)),
    OmxItch186MsgType.ORDER_BOOK_DIRECTORY: (
        ("OrderBook", 6), ("Symbol", 16), ("ISIN", 12), ("FinancialProduct", 3),
        ("TradingCurrency", 3), ("MIC", 4), ("MarketSegmentID", 3), ("NoteCodes", 8),
        ("RoundLotSize", 9),
    ),
    OmxItch186MsgType.ORDER_BOOK_TRADING_ACTION: (
        ("OrderBook", 6), ("TradingState", 1), ("Reserved", 1), ("Reason", 4),
    ),
    OmxItch186MsgType.ADD_ORDER: (
        _ORN, ("BuySellIndicator", 1), ("Quantity", 9), ("OrderBook", 6), ("Price", 10),
    ),
    OmxItch186MsgType.ADD_ORDER_MPID: (
        _ORN, ("BuySellIndicator", 1), ("Quantity", 9), ("OrderBook", 6), ("Price", 10),
        ("Attribution", 4),
    ),
    OmxItch186MsgType.ORDER_EXECUTED: (
        _ORN, ("ExecutedQuantity", 9), ("MatchNumber", 9), ("OwnerParticipantID", 4),
        ("CounterpartyParticipantID", 4),
    ),
    OmxItch186MsgType.ORDER_EXECUTED_WITH_PRICE: (
        _ORN, ("ExecutedQuantity", 9), ("MatchNumber", 9), ("Printable", 1),
        ("TradePrice", 10), ("OwnerParticipantID", 4), ("CounterpartyParticipantID", 4),
    ),
    OmxItch186MsgType.ORDER_CANCEL: (_ORN, ("CanceledQuantity", 9)),
    OmxItch186MsgType.ORDER_DELETE: (_ORN,),
    OmxItch186MsgType.TRADE: (
        _ORN, ("TradeType", 1), ("Quantity", 9), ("OrderBook", 6), ("MatchNumber", 9),
        ("TradePrice", 10), ("BuyerParticipantID", 4), ("SellerParticipantID", 4),
    ),
    OmxItch186MsgType.CROSS_TRADE: (
        ("Quantity", 9), ("OrderBook", 6), ("CrossPrice", 10), ("MatchNumber", 9),
        ("CrossType", 1), ("NumberOfTrades", 10),
    ),
    OmxItch186MsgType.BROKEN_TRADE: (("MatchNumber", 9),),
    OmxItch186MsgType.NOII: (
        ("PairedQuantity", 9), ("ImbalanceQuantity", 9), ("ImbalanceDirection", 1),
        ("OrderBook", 6), ("EquilibriumPrice", 10), ("CrossType", 1),
        ("BestBidPrice", 10), ("BestBidQuantity", 9), ("BestAskPrice", 10),
        ("BestAskQuantity", 9),
    ),
}


@dataclass(frozen=True)
class OmxItch186Message:
    """A decoded message: its type and its text fields by specification name."""

    msg_type: OmxItch186MsgType
    fields: dict[str, str] = field(default_factory=dict)

    def __getitem__(self, name: str) -> str:
        return self.fields[name]


def _message_type(value: OmxItch186MsgType | str) -> OmxItch186MsgType:
    try:
        return OmxItch186MsgType(value)
    except ValueError:
        raise ValueError(f"unknown OMX ITCH 1.86 message type {value!r}") from None


def message_size(msg_type: OmxItch186MsgType | str) -> int:
    """Size in bytes of a whole message of *msg_type*, type byte included."""
    return 1 + sum(width for _, width in _LAYOUTS[_message_type(msg_type)])


def decode(buffer: Buffer) -> OmxItch186Message | None:
    """Decode the next message; return None, consuming nothing, if it is incomplete.

    An unknown message type raises ValueError.
    """
    if not len(buffer):
        return None
    kind = _message_type(chr(buffer.peek_u8()))
    size = message_size(kind)
    if len(buffer) < size:
        return None
    raw = buffer.get_bytes(size).decode("latin-1")
    fields: dict[str, str] = {}
    offset = 1
    for name, width in _LAYOUTS[kind]:
        fields[name] = raw[offset:offset + width]
        offset += width
    return OmxItch186Message(kind, fields)