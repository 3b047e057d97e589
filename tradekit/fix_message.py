"""FIX message model: message types, tags, typed fields and messages."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Union

MAX_HEAD_LEN = 256
MAX_BODY_LEN = 1024
MAX_MESSAGE_SIZE = MAX_HEAD_LEN + MAX_BODY_LEN
MAX_FIELD_NUMBER = 48

FieldValue = Union[int, float, str]


class FixMsgType(IntEnum):
    HEARTBEAT = 0
    TEST_REQUEST = 1
    RESEND_REQUEST = 2
    REJECT = 3
    SEQUENCE_RESET = 4
    LOGOUT = 5
    EXECUTION_REPORT = 6
    LOGON = 7
    NEW_ORDER_SINGLE = 8
    SNAPSHOT_REFRESH = 9
    INCREMENT_REFRESH = 10
    SESSION_STATUS = 11
    SECURITY_STATUS = 12
    ORDER_CANCEL_REPLACE = 13
    ORDER_CANCEL_REJECT = 14
    ORDER_CANCEL_REQUEST = 15
    ORDER_MASS_CANCEL_REQUEST = 16
    ORDER_MASS_CANCEL_REPORT = 17
    QUOTE_REQUEST = 18
    SECURITY_DEFINITION_REQUEST = 19
    NEW_ORDER_CROSS = 20
    MASS_QUOTE = 21
    QUOTE_CANCEL = 22
    SECURITY_DEFINITION = 23
    QUOTE_ACKNOWLEDGEMENT = 24
    ORDER_MASS_STATUS_REQUEST = 25
    ORDER_MASS_ACTION_REQUEST = 26
    ORDER_MASS_ACTION_REPORT = 27
    UNKNOWN = -1

    @property
    def code(self) -> str | None:
        """The MsgType (35) value on the wire, or None for UNKNOWN."""
        return _CODES.get(self)

    @classmethod
    def parse(cls, code: str) -> FixMsgType:
        """Map a MsgType value to a message type, UNKNOWN if unrecognised."""
        return _BY_CODE.get(code, cls.UNKNOWN)


_CODES: dict[FixMsgType, str] = {
    FixMsgType.HEARTBEAT: "0",
    FixMsgType.TEST_REQUEST: "1",
    FixMsgType.RESEND_REQUEST: "2",
    FixMsgType.REJECT: "3",
    FixMsgType.SEQUENCE_RESET: "4",
    FixMsgType.LOGOUT: "5",
    FixMsgType.EXECUTION_REPORT: "8",
    FixMsgType.LOGON: "A",
    FixMsgType.NEW_ORDER_SINGLE: "D",
    FixMsgType.SNAPSHOT_REFRESH: "W",
    FixMsgType.INCREMENT_REFRESH: "X",
    FixMsgType.SESSION_STATUS: "h",
    FixMsgType.SECURITY_STATUS: "f",
    FixMsgType.ORDER_CANCEL_REPLACE: "G",
    FixMsgType.ORDER_CANCEL_REJECT: "9",
    FixMsgType.ORDER_CANCEL_REQUEST: "F",
    FixMsgType.ORDER_MASS_CANCEL_REQUEST: "q",
    FixMsgType.ORDER_MASS_CANCEL_REPORT: "r",
    FixMsgType.QUOTE_REQUEST: "R",
    FixMsgType.SECURITY_DEFINITION_REQUEST: "c",
    FixMsgType.NEW_ORDER_CROSS: "s",
    FixMsgType.MASS_QUOTE: "i",
    FixMsgType.QUOTE_CANCEL: "Z",
    FixMsgType.SECURITY_DEFINITION: "d",
    FixMsgType.QUOTE_ACKNOWLEDGEMENT: "b",
    FixMsgType.ORDER_MASS_STATUS_REQUEST: "AF",
    FixMsgType.ORDER_MASS_ACTION_REQUEST: "CA",
    FixMsgType.ORDER_MASS_ACTION_REPORT: "BZ",
}
_BY_CODE: dict[str, FixMsgType] = {code: kind for kind, code in _CODES.items()}


class FixType(IntEnum):
    INT = 0
    FLOAT = 1
    CHAR = 2
    STRING = 3
    CHECKSUM = 4
    MSGSEQNUM = 5
    STRING_8 = 6


class FixTag(IntEnum):
    Account = 1
    AvgPx = 6
    BeginSeqNo = 7
    BeginString = 8
    BodyLength = 9
    CheckSum = 10
    ClOrdID = 11
    CumQty = 14
    EndSeqNo = 16
    ExecID = 17
    ExecTransType = 20
    LastPx = 31
    LastShares = 32
    MsgSeqNum = 34
    MsgType = 35
    NewSeqNo = 36
    OrderID = 37
    OrderQty = 38
    OrdStatus = 39
    OrdType = 40
    OrigClOrdID = 41
    PossDupFlag = 43
    Price = 44
    RefSeqNum = 45
    SecurityID = 48
    SenderCompID = 49
    SendingTime = 52
    Side = 54
    Symbol = 55
    TargetCompID = 56
    Text = 58
    TransactTime = 60
    RptSeq = 83
    EncryptMethod = 98
    OrdRejReason = 103
    HeartBtInt = 108
    TestReqID = 112
    GapFillFlag = 123
    ResetSeqNumFlag = 141
    ExecType = 150
    LeavesQty = 151
    MDEntryType = 269
    MDEntryPx = 270
    MDEntrySize = 271
    MDUpdateAction = 279
    TradingSessionID = 336
    LastMsgSeqNumProcessed = 369
    MultiLegReportingType = 442
    Password = 554
    MDPriceLevel = 1023


@dataclass
class FixField:
    tag: int
    type: FixType
    value: FieldValue


def int_field(tag: int, value: int) -> FixField:
    return FixField(int(tag), FixType.INT, int(value))


def string_field(tag: int, value: str) -> FixField:
    return FixField(int(tag), FixType.STRING, value)


def float_field(tag: int, value: float) -> FixField:
    return FixField(int(tag), FixType.FLOAT, float(value))


def char_field(tag: int, value: str) -> FixField:
    if len(value) != 1:
        raise ValueError(f"a char field holds exactly one character, not {value!r}")
    return FixField(int(tag), FixType.CHAR, value)


def checksum_field(tag: int, value: int) -> FixField:
    return FixField(int(tag), FixType.CHECKSUM, int(value))


@dataclass
class FixMessage:
    """A FIX message: the required header fields and a list of body fields."""

    type: FixMsgType = FixMsgType.UNKNOWN
    begin_string: str | None = None
    body_length: int = 0
    msg_type: str | None = None
    sender_comp_id: str | None = None
    target_comp_id: str | None = None
    msg_seq_num: int = 0
    check_sum: str | None = None
    fields: list[FixField] = field(default_factory=list)

    def add_field(self, field: FixField) -> None:
        """Append *field*; raise OverflowError past MAX_FIELD_NUMBER fields."""
        if len(self.fields) >= MAX_FIELD_NUMBER:
            raise OverflowError(f"a message holds at most {MAX_FIELD_NUMBER} fields")
        self.fields.append(field)

    def get_field(self, tag: int) -> FixField | None:
        """The first field with *tag*, or None."""
        return next((f for f in self.fields if f.tag == tag), None)

    def type_is(self, msg_type: FixMsgType) -> bool:
        return self.type == msg_type