"""NYSE XDP market data message decoding (little-endian on the wire)."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Union

from tradekit.buffer import Buffer

FieldValue = Union[int, str]

_HEADER = struct.Struct("<HH")


class XdpMsgType(IntEnum):
    ORDER_BOOK_ADD_ORDER = 100
    ORDER_BOOK_MODIFY = 101
    ORDER_BOOK_DELETE = 102
    ORDER_BOOK_EXECUTION = 103
    ORDER_BOOK_ADD_ORDER_REFRESH = 106
    TRADE = 220
    TRADE_CANCEL_OR_BUST = 221
    TRADE_CORRECTION = 222
    STOCK_SUMMARY = 223
    PBBO = 104
    IMBALANCE = 105


_BOOK = ("SourceTimeNS", "SymbolIndex", "SymbolSeqNum", "OrderID")
_TIMED = ("SourceTime", "SourceTimeNS", "SymbolIndex", "SymbolSeqNum")
_CONDS = ("TradeCond1", "TradeCond2", "TradeCond3", "TradeCond4", "TradeThroughExempt")

# Layouts of the bodies that follow the MsgSize/MsgType header.
_LAYOUTS: dict[XdpMsgType, tuple[struct.Struct, tuple[str, ...]]] = {
    kind: (struct.Struct(fmt), names)
    for kind, fmt, names in (
        (XdpMsgType.ORDER_BOOK_ADD_ORDER, "<IIIIIIccc",
         _BOOK + ("Price", "Volume", "Side", "OrderIDGTCIndicator", "TradeSession")),
        (XdpMsgType.ORDER_BOOK_MODIFY, "<IIIIIIccc",
         _BOOK + ("Price", "Volume", "Side", "OrderIDGTCIndicator", "ReasonCode")),
        (XdpMsgType.ORDER_BOOK_DELETE, "<IIIIccc",
         _BOOK + ("Side", "OrderIDGTCIndicator", "ReasonCode")),
        (XdpMsgType.ORDER_BOOK_EXECUTION, "<IIIIIIcccI",
         _BOOK + ("Price", "Volume", "Side", "OrderIDGTCIndicator", "ReasonCode", "TradeID")),
        (XdpMsgType.ORDER_BOOK_ADD_ORDER_REFRESH, "<IIIIIIIccc",
         _TIMED + ("OrderID", "Price", "Volume", "Side", "OrderIDGTCIndicator",
                   "TradeSession")),
        (XdpMsgType.TRADE, "<IIIIIIIccccccIIII",
         _TIMED + ("TradeID", "Price", "Volume") + _CONDS
         + ("LiquidityIndicatorFlag", "AskPrice", "AskVolume", "BidPrice", "BidVolume")),
        (XdpMsgType.TRADE_CANCEL_OR_BUST, "<IIIII", _TIMED + ("OriginalTradeID",)),
        (XdpMsgType.TRADE_CORRECTION, "<IIIIIIIIccccc",
         _TIMED + ("OriginalTradeID", "TradeID", "Price", "Volume") + _CONDS),
        (XdpMsgType.STOCK_SUMMARY, "<IIIIIIII",
         ("SourceTime", "SourceTimeNS", "SymbolIndex", "HighPrice", "LowPrice", "Open",
          "Close", "TotalVolume")),
        (XdpMsgType.PBBO, "<IIIIII", _TIMED + ("BidPrice", "AskPrice")),
        (XdpMsgType.IMBALANCE, "<IIIIIIIIHccIII",
         _TIMED + ("ReferencePrice", "PairedQty", "TotalImbalanceQty", "MarketImbalanceQty",
                   "AuctionTime", "AuctionType", "ImbalanceSide",
                   "ContinuousBookClearingPrice", "ClosingOnlyClearingPrice",
                   "SSRFilingPrice")),
    )
}


@dataclass(frozen=True)
class XdpMessage:
    """A decoded message: its type, its size on the wire and its fields."""

    msg_type: XdpMsgType
    size: int
    fields: dict[str, FieldValue] = field(default_factory=dict)

    def __getitem__(self, name: str) -> FieldValue:
        return self.fields[name]


def decode(buffer: Buffer) -> XdpMessage | None:
    """Decode the next message; return None, consuming nothing, if it is incomplete.

    MsgSize covers the whole message, header included; bytes beyond the known
    fields are skipped. An unknown type or an impossible size raises ValueError.
    """
    if len(buffer) < _HEADER.size:
        return None
    header = bytes(buffer.data[buffer.start:buffer.start + _HEADER.size])
    size, code = _HEADER.unpack(header)
    try:
        kind = XdpMsgType(code)
    except ValueError:
        raise ValueError(f"unknown XDP message type {code}") from None
    layout, names = _LAYOUTS[kind]
    if size < _HEADER.size + layout.size:
        raise ValueError(f"XDP message size {size} too small for type {kind.name}")
    if len(buffer) < size:
        return None
    raw = buffer.get_bytes(size)
    values = layout.unpack_from(raw, _HEADER.size)
    fields = {
        name: value.decode("latin-1") if isinstance(value, bytes) else value
        for name, value in zip(names, values)
    }
    return XdpMessage(kind, size, fields)