"""NASDAQ TotalView-ITCH 4.0 message decoding."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from enum import Enum
from typing import Union

from tradekit.buffer import Buffer

FieldValue = Union[int, str]


class Itch40MsgType(str, Enum):
    TIMESTAMP_SECONDS = "T"
    SYSTEM_EVENT = "S"
    STOCK_DIRECTORY = "R"
    STOCK_TRADING_ACTION = "H"
    MARKET_PARTICIPANT_POS = "L"
    ADD_ORDER = "A"
    ADD_ORDER_MPID = "F"
    ORDER_EXECUTED = "E"
    ORDER_EXECUTED_WITH_PRICE = "C"
    ORDER_CANCEL = "X"
    ORDER_DELETE = "D"
    ORDER_REPLACE = "U"
    TRADE = "P"
    CROSS_TRADE = "Q"
    BROKEN_TRADE = "B"
    NOII = "I"


_TS = "TimestampNanoseconds"

# Layouts of the message bodies that follow the one-byte message type.
_LAYOUTS: dict[Itch40MsgType, tuple[struct.Struct, tuple[str, ...]]] = {
    kind: (struct.Struct(fmt), names)
    for kind, fmt, names in (
        (Itch40MsgType.TIMESTAMP_SECONDS, ">I", ("Second",)),
        (Itch40MsgType.SYSTEM_EVENT, ">Ic", ("Timestamp", "EventCode")),
        (Itch40MsgType.STOCK_DIRECTORY, ">I6sccIc",
         (_TS, "Stock", "MarketCategory", "FinancialStatusIndicator",
          "RoundLotSize", "RoundLotsOnly")),
        (Itch40MsgType.STOCK_TRADING_ACTION, ">I6scc4s",
         (_TS, "Stock", "TradingState", "Reserved", "Reason")),
        (Itch40MsgType.MARKET_PARTICIPANT_POS, ">I4s6sccc",
         (_TS, "MPID", "Stock", "PrimaryMarketMaker", "MarketMakerMode",
          "MarketParticipantState")),
        (Itch40MsgType.ADD_ORDER, ">IQcI6sI",
         (_TS, "OrderReferenceNumber", "BuySellIndicator", "Shares", "Stock", "Price")),
        (Itch40MsgType.ADD_ORDER_MPID, ">IQcI6sI4s",
         (_TS, "OrderReferenceNumber", "BuySellIndicator", "Shares", "Stock", "Price",
          "Attribution")),
        (Itch40MsgType.ORDER_EXECUTED, ">IQIQ",
         (_TS, "OrderReferenceNumber", "ExecutedShares", "MatchNumber")),
        (Itch40MsgType.ORDER_EXECUTED_WITH_PRICE, ">IQIQcI",
         (_TS, "OrderReferenceNumber", "ExecutedShares", "MatchNumber", "Printable",
          "ExecutionPrice")),
        (Itch40MsgType.ORDER_CANCEL, ">IQI", (_TS, "OrderReferenceNumber", "CanceledShares")),
        (Itch40MsgType.ORDER_DELETE, ">IQ", (_TS, "OrderReferenceNumber")),
        (Itch40MsgType.ORDER_REPLACE, ">IQQII",
         (_TS, "OriginalOrderReferenceNumber", "NewOrderReferenceNumber", "Shares", "Price")),
        (Itch40MsgType.TRADE, ">IQcI6sIQ",
         (_TS, "OrderReferenceNumber", "BuySellIndicator", "Shares", "Stock", "Price",
          "MatchNumber")),
        (Itch40MsgType.CROSS_TRADE, ">IQ6sIQc",
         (_TS, "Shares", "Stock", "CrossPrice", "MatchNumber", "CrossType")),
        (Itch40MsgType.BROKEN_TRADE, ">IQ", (_TS, "MatchNumber")),
        (Itch40MsgType.NOII, ">IQQc6sIIIcc",
         (_TS, "PairedShares", "ImbalanceShares", "ImbalanceDirection", "Stock", "FarPrice",
          "NearPrice", "CurrentReferencePrice", "CrossType", "PriceVariationIndicator")),
    )
}


@dataclass(frozen=True)
class Itch40Message:
    """A decoded message: its type and its fields by specification name."""

    msg_type: Itch40MsgType
    fields: dict[str, FieldValue] = field(default_factory=dict)

    def __getitem__(self, name: str) -> FieldValue:
        return self.fields[name]


def _message_type(value: Itch40MsgType | str) -> Itch40MsgType:
    try:
        return Itch40MsgType(value)
    except ValueError:
        raise ValueError(f"unknown ITCH 4.0 message type {value!r}") from None


def message_size(msg_type: Itch40MsgType | str) -> int:
    """Size in bytes of a whole message of *msg_type*, type byte included."""
    layout, _ = _LAYOUTS[_message_type(msg_type)]
    return 1 + layout.size


def decode(buffer: Buffer) -> Itch40Message | None:
    """Decode the next message; return None, consuming nothing, if it is incomplete.

    An unknown message type raises ValueError.
    """
    if not len(buffer):
        return None
    kind = _message_type(chr(buffer.peek_u8()))
    layout, names = _LAYOUTS[kind]
    if len(buffer) < 1 + layout.size:
        return None
    buffer.advance(1)
    values = layout.unpack(buffer.get_bytes(layout.size))
    fields = {
        name: value.decode("latin-1") if isinstance(value, bytes) else value
        for name, value in zip(names, values)
    }
    return Itch40Message(kind, fields)