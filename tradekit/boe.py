"""BATS Binary Order Entry (BOE) message decoding (little-endian on the wire)."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Union

from tradekit.buffer import Buffer

MAX_MESSAGE_LEN = 183
MAGIC = 0xBABA

FieldValue = Union[int, str, list]

_HEADER = struct.Struct("<HHBBI")
_MAGIC_SIZE = 2
_UNIT = struct.Struct("<BI")


class BoeMsgType(IntEnum):
    # Participant to exchange.
    LOGIN_REQUEST = 0x01
    LOGOUT_REQUEST = 0x02
    CLIENT_HEARTBEAT = 0x03
    NEW_ORDER = 0x04
    CANCEL_ORDER = 0x05
    MODIFY_ORDER = 0x06
    # Exchange to participant.
    LOGIN_RESPONSE = 0x07
    LOGOUT = 0x08
    SERVER_HEARTBEAT = 0x09
    REPLAY_COMPLETE = 0x13
    ORDER_ACKNOWLEDGEMENT = 0x0A
    ORDER_REJECTED = 0x0B
    ORDER_MODIFIED = 0x0C
    ORDER_RESTATED = 0x0D
    USER_MODIFY_REJECTED = 0x0E
    ORDER_CANCELLED = 0x0F
    CANCEL_REJECTED = 0x10
    ORDER_EXECUTION = 0x11
    TRADE_CANCEL_OR_CORRECT = 0x12


_BITFIELDS = (
    "OrderAcknowledgementBitfields", "OrderRejectedBitfields", "OrderModifiedBitfields",
    "OrderRestatedBitfields", "UserModifyRejectedBitfields", "OrderCancelledBitfields",
    "CancelRejectedBitfields", "OrderExecutionBitfields", "TradeCancelOrCorrectBitfields",
    "ReservedBitfields1", "ReservedBitfields2",
)

# Fixed parts of payloads; each ends with NumberOfUnits, followed by the units.
_LAYOUTS: dict[BoeMsgType, tuple[struct.Struct, tuple[str, ...]]] = {
    BoeMsgType.LOGIN_REQUEST: (
        struct.Struct("<4s4s10sB11QB"),
        ("SessionSubID", "Username", "Password", "NoUnspecifiedUnitReplay")
        + _BITFIELDS + ("NumberOfUnits",),
    ),
    BoeMsgType.LOGIN_RESPONSE: (
        struct.Struct("<c60sB11QIB"),
        ("LoginResponseStatus", "LoginResponseText", "NoUnspecifiedUnitReplay")
        + _BITFIELDS + ("LastReceivedSequenceNumber", "NumberOfUnits"),
    ),
    BoeMsgType.LOGOUT: (
        struct.Struct("<c60sIB"),
        ("LogoutReason", "LogoutReasonText", "LastReceivedSequenceNumber", "NumberOfUnits"),
    ),
}


@dataclass(frozen=True)
class BoeHeader:
    start_of_message: int
    message_length: int
    message_type: BoeMsgType
    matching_unit: int
    sequence_number: int


@dataclass(frozen=True)
class BoeMessage:
    """A decoded message: header, decoded fields and the raw payload."""

    header: BoeHeader
    fields: dict[str, FieldValue] = field(default_factory=dict)
    payload: bytes = b""

    def __getitem__(self, name: str) -> FieldValue:
        return self.fields[name]


def _decode_payload(kind: BoeMsgType, payload: bytes) -> dict[str, FieldValue]:
    layout = _LAYOUTS.get(kind)
    if layout is None:
        return {}
    fmt, names = layout
    if len(payload) < fmt.size:
        raise ValueError(f"{kind.name} payload of {len(payload)} bytes is too short")
    values = fmt.unpack_from(payload)
    fields: dict[str, FieldValue] = {
        name: value.decode("latin-1") if isinstance(value, bytes) else value
        for name, value in zip(names, values)
    }
    count = fields["NumberOfUnits"]
    units_end = fmt.size + count * _UNIT.size
    if len(payload) < units_end:
        raise ValueError(f"{kind.name} payload too short for {count} units")
    fields["Units"] = list(_UNIT.iter_unpack(payload[fmt.size:units_end]))
    return fields


def decode(buffer: Buffer) -> BoeMessage | None:
    """Decode the next message; return None, consuming nothing, if it is incomplete.

    MessageLength counts every byte after the start-of-message marker. A bad
    marker, an impossible length or an unknown type raises ValueError.
    """
    if len(buffer) < _HEADER.size:
        return None
    magic, length, code, unit, seq = _HEADER.unpack_from(buffer.data, buffer.start)
    if magic != MAGIC:
        raise ValueError(f"bad BOE start of message {magic:#06x}")
    if length < _HEADER.size - _MAGIC_SIZE:
        raise ValueError(f"BOE message length {length} is too small")
    total = _MAGIC_SIZE + length
    if total > MAX_MESSAGE_LEN:
        raise ValueError(f"BOE message of {total} bytes exceeds {MAX_MESSAGE_LEN}")
    try:
        kind = BoeMsgType(code)
    except ValueError:
        raise ValueError(f"unknown BOE message type {code:#04x}") from None
    if len(buffer) < total:
        return None
    payload = bytes(buffer.data[buffer.start + _HEADER.size:buffer.start + total])
    fields = _decode_payload(kind, payload)
    buffer.advance(total)
    header = BoeHeader(magic, length, kind, unit, seq)
    return BoeMessage(header, fields, payload)