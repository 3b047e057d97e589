"""NASDAQ OUCH 4.2 order entry message decoding (big-endian on the wire)."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from enum import Enum
from typing import Union

from tradekit.buffer import Buffer

FieldValue = Union[int, str]


class Ouch42MsgType(str, Enum):
    # Messages a client sends.
    ENTER_ORDER = "O"
    REPLACE_ORDER = "U"
    CANCEL_ORDER = "X"
    MODIFY_ORDER = "M"
    # Messages the exchange sends; "U" and "M" are shared with the above.
    SYSTEM_EVENT = "S"
    ACCEPTED = "A"
    REPLACED = "U"
    CANCELED = "C"
    AIQ_CANCELED = "D"
    EXECUTED = "E"
    BROKEN_TRADE = "B"
    REJECTED = "J"
    CANCEL_PENDING = "P"
    CANCEL_REJECT = "I"
    ORDER_PRIO_UPDATE = "T"
    ORDER_MODIFIED = "M"


_Layouts = dict[Ouch42MsgType, tuple[struct.Struct, tuple[str, ...]]]


def _layouts(*specs: tuple[Ouch42MsgType, str, tuple[str, ...]]) -> _Layouts:
    return {kind: (struct.Struct(fmt), names) for kind, fmt, names in specs}


_INBOUND = _layouts(
    (Ouch42MsgType.ENTER_ORDER, ">14scI8sII4scccIc",
     ("OrderToken", "BuySellIndicator", "Shares", "Stock", "Price", "TimeInForce", "Firm",
      "Display", "Capacity", "IntermarketSweepEligibility", "MinimumQuantity", "CrossType")),
    (Ouch42MsgType.REPLACE_ORDER, ">14s14sIIIccI",
     ("ExistingOrderToken", "ReplacementOrderToken", "Shares", "Price", "TimeInForce",
      "Display", "IntermarketSweepEligibility", "MinimumQuantity")),
    (Ouch42MsgType.CANCEL_ORDER, ">14sI", ("OrderToken", "Shares")),
    (Ouch42MsgType.MODIFY_ORDER, ">14scI", ("OrderToken", "BuySellIndicator", "Shares")),
)

_OUTBOUND = _layouts(
    (Ouch42MsgType.SYSTEM_EVENT, ">Qc", ("Timestamp", "EventCode")),
    (Ouch42MsgType.ACCEPTED, ">Q14scI8sII4scQccIccc",
     ("Timestamp", "OrderToken", "BuySellIndicator", "Shares", "Stock", "Price",
      "TimeInForce", "Firm", "Display", "OrderReferenceNumber", "Capacity",
      "IntermarketSweepEligibility", "MinimumQuantity", "CrossType", "OrderState",
      "BBOWeightIndicator")),
    (Ouch42MsgType.REPLACED, ">Q14scI8sII4scQccIcc14sc",
     ("Timestamp", "ReplacementOrderToken", "BuySellIndicator", "Shares", "Stock", "Price",
      "TimeInForce", "Firm", "Display", "OrderReferenceNumber", "Capacity",
      "IntermarketSweepEligibility", "MinimumQuantity", "CrossType", "OrderState",
      "PreviousOrderToken", "BBOWeightIndicator")),
    (Ouch42MsgType.CANCELED, ">Q14sIc", ("Timestamp", "OrderToken", "DecrementShares", "Reason")),
    (Ouch42MsgType.AIQ_CANCELED, ">Q14sIcIIc",
     ("Timestamp", "OrderToken", "DecrementShares", "Reason",
      "QuantityPreventedFromTrading", "ExecutionPrice", "LiquidityFlag")),
    (Ouch42MsgType.EXECUTED, ">Q14sIIcQ",
     ("Timestamp", "OrderToken", "ExecutedShares", "ExecutionPrice", "LiquidityFlag",
      "MatchNumber")),
    (Ouch42MsgType.BROKEN_TRADE, ">Q14sQc", ("Timestamp", "OrderToken", "MatchNumber", "Reason")),
    (Ouch42MsgType.REJECTED, ">Q14sc", ("Timestamp", "OrderToken", "Reason")),
    (Ouch42MsgType.CANCEL_PENDING, ">Q14s", ("Timestamp", "OrderToken")),
    (Ouch42MsgType.CANCEL_REJECT, ">Q14s", ("Timestamp", "OrderToken")),
    (Ouch42MsgType.ORDER_PRIO_UPDATE, ">Q14sIcQ",
     ("Timestamp", "OrderToken", "Price", "Display", "OrderReferenceNumber")),
    (Ouch42MsgType.ORDER_MODIFIED, ">Q14scI",
     ("Timestamp", "OrderToken", "BuySellIndicator", "Shares")),
)


@dataclass(frozen=True)
class Ouch42Message:
    """A decoded message: its type and its fields by specification name."""

    msg_type: Ouch42MsgType
    fields: dict[str, FieldValue] = field(default_factory=dict)

    def __getitem__(self, name: str) -> FieldValue:
        return self.fields[name]


def _decode(buffer: Buffer, layouts: _Layouts, direction: str) -> Ouch42Message | None:
    if not len(buffer):
        return None
    code = chr(buffer.peek_u8())
    try:
        kind = Ouch42MsgType(code)
        layout, names = layouts[kind]
    except (ValueError, KeyError):
        raise ValueError(f"unknown {direction} OUCH 4.2 message type {code!r}") from None
    if len(buffer) < 1 + layout.size:
        return None
    buffer.advance(1)
    values = layout.unpack(buffer.get_bytes(layout.size))
    fields = {
        name: value.decode("latin-1") if isinstance(value, bytes) else value
        for name, value in zip(names, values)
    }
    return Ouch42Message(kind, fields)


def decode_inbound(buffer: Buffer) -> Ouch42Message | None:
    """Decode the next client-to-exchange message, or None if it is incomplete."""
    return _decode(buffer, _INBOUND, "inbound")


def decode_outbound(buffer: Buffer) -> Ouch42Message | None:
    """Decode the next exchange-to-client message, or None if it is incomplete."""
    return _decode(buffer, _OUTBOUND, "outbound")