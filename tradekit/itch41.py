"""NASDAQ TotalView-ITCH 4.1 message decoding."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from enum import Enum
from typing import Union

from tradekit.buffer import Buffer

FieldValue = Union[int, str]


class Itch41MsgType(str, Enum):
    TIMESTAMP_SECONDS = "T"
    SYSTEM_EVENT = "S"
    STOCK_DIRECTORY = "R"
    STOCK_TRADING_ACTION = "H"
    REG_SHO_RESTRICTION = "Y"
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
    RPII = "N"


class Itch41EventCode(str, Enum):
    START_OF_MESSAGES = "O"
    START_OF_SYSTEM_HOURS = "S"
    START_OF_MARKET_HOURS = "Q"
    END_OF_MARKET_HOURS = "M"
    END_OF_SYSTEM_HOURS = "E"
    END_OF_MESSAGES = "C"
    EMERGENCY_HALT = "A"
    EMERGENCY_QUOTE_ONLY = "R"
    EMERGENCY_RESUMPTION = "B"


_TS = "TimestampNanoseconds"

# Layouts of the message bodies that follow the one-byte message type.
_LAYOUTS: dict[Itch41MsgType, tuple[struct.Struct, tuple[str, ...]]] = {
    kind: (struct.Struct(fmt), names)
    for kind, fmt, names in (
        (Itch41MsgType.TIMESTAMP_SECONDS, ">I", ("Second",)),
        (Itch41MsgType.SYSTEM_EVENT, ">Ic", ("Timestamp", "EventCode")),
        (Itch41MsgType.STOCK_DIRECTORY, ">I8sccIc",
         (_TS, "Stock", "MarketCategory", "FinancialStatusIndicator",
          "RoundLotSize", "RoundLotsOnly")),
        (Itch41MsgType.STOCK_TRADING_ACTION, ">I8scc4s",
         (_TS, "Stock", "TradingState", "Reserved", "Reason")),
        (Itch41MsgType.REG_SHO_RESTRICTION, ">I8sc", (_TS, "Stock", "RegSHOAction")),
        (Itch41MsgType.MARKET_PARTICIPANT_POS, ">I4s8sccc",
         (_TS, "MPID", "Stock", "PrimaryMarketMaker", "MarketMakerMode",
          "MarketParticipantState")),
        (Itch41MsgType.ADD_ORDER, ">IQcI8sI",
         (_TS, "OrderReferenceNumber", "BuySellIndicator", "Shares", "Stock", "Price")),
        (Itch41MsgType.ADD_ORDER_MPID, ">IQcI8sI4s",
         (_TS, "OrderReferenceNumber", "BuySellIndicator", "Shares", "Stock", "Price",
          "Attribution")),
        (Itch41MsgType.ORDER_EXECUTED, ">IQIQ",
         (_TS, "OrderReferenceNumber", "ExecutedShares", "MatchNumber")),
        (Itch41MsgType.ORDER_EXECUTED_WITH_PRICE, ">IQIQcI",
         (_TS, "OrderReferenceNumber", "ExecutedShares", "MatchNumber", "Printable",
          "ExecutionPrice")),
        (Itch41MsgType.ORDER_CANCEL, ">IQI", (_TS, "OrderReferenceNumber", "CanceledShares")),
        (Itch41MsgType.ORDER_DELETE, ">IQ", (_TS, "OrderReferenceNumber")),
        (Itch41MsgType.ORDER_REPLACE, ">IQQII",
         (_TS, "OriginalOrderReferenceNumber", "NewOrderReferenceNumber", "Shares", "Price")),
        (Itch41MsgType.TRADE, ">IQcI8sIQ",
         (_TS, "OrderReferenceNumber", "BuySellIndicator", "Shares", "Stock", "Price",
          "MatchNumber")),
        (Itch41MsgType.CROSS_TRADE, ">IQ8sIQc",
         (_TS, "Shares", "Stock", "CrossPrice", "MatchNumber", "CrossType")),
        (Itch41MsgType.BROKEN_TRADE, ">IQ", (_TS, "MatchNumber")),
        (Itch41MsgType.NOII, ">IQQc8sIIIcc",
         (_TS, "PairedShares", "ImbalanceShares", "ImbalanceDirection", "Stock", "FarPrice",
          "NearPrice", "CurrentReferencePrice", "CrossType", "PriceVariationIndicator")),
        (Itch41MsgType.RPII, ">I8sc", (_TS, "Stock", "InterestFlag")),
    )
}


@dataclass(frozen=True)
class Itch41Message:
    """A decoded message: its type and its fields by specification name."""

    msg_type: Itch41MsgType
    fields: dict[str, FieldValue] = field(default_factory=dict)

    def __getitem__(self, name: str) -> FieldValue:
        return self.fields[name]


def _message_type(value: Itch41MsgType | str) -> Itch41MsgType:
    try:
        return Itch41MsgType(value)
    except ValueError:
        raise ValueError(f"unknown ITCH 4.1 message type {value!r}") from None


def message_size(msg_type: Itch41MsgType | str) -> int:
    """Size in bytes of a whole message of *msg_type*, type byte included."""
    layout, _ = _LAYOUTS[_message_type(msg_type)]
    return 1 + layout.size


def decode(buffer: Buffer) -> Itch41Message | None:
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
    return Itch41Message(kind, fields)