"""Scripted FIX conversations: parsing, comparison and printing of messages."""

from __future__ import annotations

import re
from typing import Iterable

from tradekit.fix_message import (
    FixMessage,
    FixMsgType,
    FixTag,
    FixType,
    int_field,
    string_field,
)

MAX_ELEMENTS = 32
MAX_LINE_LENGTH = 256

_INT_TAGS = frozenset(
    {FixTag.EncryptMethod, FixTag.HeartBtInt, FixTag.BeginSeqNo, FixTag.NewSeqNo, FixTag.EndSeqNo}
)
_STRING_TAGS = frozenset(
    {FixTag.ResetSeqNumFlag, FixTag.GapFillFlag, FixTag.SendingTime, FixTag.TestReqID, FixTag.Text}
)
_INT_RE = re.compile(r"\s*[+-]?\d+")
_END = "\0\n"
_VALUE_END = "\0\x01\n"


class ScriptError(ValueError):
    """Raised for a script that cannot be read."""


class Container:
    """An ordered list of expected messages with a cursor."""

    def __init__(self) -> None:
        self.messages: list[FixMessage] = []
        self.cursor = 0

    def __len__(self) -> int:
        return len(self.messages)

    def add(self, message: FixMessage) -> None:
        if len(self.messages) >= MAX_ELEMENTS:
            raise ScriptError(f"a script side holds at most {MAX_ELEMENTS} messages")
        self.messages.append(message)

    def current(self) -> FixMessage | None:
        if self.cursor < len(self.messages):
            return self.messages[self.cursor]
        return None

    def next(self) -> FixMessage | None:
        self.cursor += 1
        return self.current()


def _strtol(text: str) -> int:
    match = _INT_RE.match(text)
    return int(match.group()) if match else 0


def _apply(msg: FixMessage, tag: int, value: str) -> None:
    try:
        if tag in _INT_TAGS:
            msg.add_field(int_field(tag, _strtol(value)))
        elif tag in _STRING_TAGS:
            msg.add_field(string_field(tag, value))
        elif tag == FixTag.MsgSeqNum:
            msg.msg_seq_num = _strtol(value)
        elif tag == FixTag.BodyLength:
            msg.body_length = _strtol(value)
        elif tag == FixTag.SenderCompID:
            msg.sender_comp_id = value
        elif tag == FixTag.TargetCompID:
            msg.target_comp_id = value
        elif tag == FixTag.BeginString:
            msg.begin_string = value
        elif tag == FixTag.CheckSum:
            msg.check_sum = value
        elif tag == FixTag.MsgType:
            msg.type = FixMsgType.parse(value)
            msg.msg_type = value
        else:
            raise ScriptError(f"unsupported tag {tag}")
    except OverflowError as exc:
        raise ScriptError(str(exc)) from exc


def parse_script_line(line: str) -> FixMessage:
    """Parse ``tag=value`` pairs separated by SOH into a message."""
    msg = FixMessage()
    pos = 0
    while pos < len(line) and line[pos] not in _END:
        match = _INT_RE.match(line, pos)
        tag = int(match.group()) if match else 0
        value_start = (match.end() if match else pos) + 1
        end = value_start
        while end < len(line) and line[end] not in _VALUE_END:
            end += 1
        _apply(msg, tag, line[value_start:end])
        if end >= len(line) or line[end] in _END:
            break
        pos = end + 1
    return msg


def read_script(stream: Iterable[str]) -> tuple[Container, Container]:
    """Read a script; return the (server, client) expected message lists.

    Lines starting with ``s``/``S`` belong to the server side, lines starting
    with ``c``/``C`` to the client side; all other lines are ignored.
    """
    server, client = Container(), Container()
    for line in stream:
        if len(line) > MAX_LINE_LENGTH - 1:
            raise ScriptError("line is too long")
        if line[:1] in ("c", "C"):
            client.add(parse_script_line(line[1:]))
        elif line[:1] in ("s", "S"):
            server.add(parse_script_line(line[1:]))
    return server, client


def _strings_differ(expected: str | None, actual: str | None) -> bool:
    if expected is None:
        return False
    return expected != actual


def messages_differ(expected: FixMessage, actual: FixMessage) -> bool:
    """True if *actual* does not match what *expected* specifies.

    Header values that are unset in *expected* are not compared; every body
    field of *expected* must be present in *actual* with an equal value.
    """
    if expected.body_length and expected.body_length != actual.body_length:
        return True
    if expected.msg_seq_num and expected.msg_seq_num != actual.msg_seq_num:
        return True
    for name in ("sender_comp_id", "target_comp_id", "begin_string", "msg_type"):
        if _strings_differ(getattr(expected, name), getattr(actual, name)):
            return True

    for wanted in expected.fields:
        got = actual.get_field(wanted.tag)
        if got is None:
            return True
        if wanted.type is FixType.CHAR:
            if str(wanted.value).lower() != str(got.value).lower():
                return True
        elif wanted.type in (FixType.STRING, FixType.FLOAT, FixType.CHECKSUM, FixType.INT):
            if wanted.value != got.value:
                return True
    return False


def _clip(value: str) -> str:
    return value.split("\x01", 1)[0]


def format_message(msg: FixMessage) -> str:
    """Render *msg* as ``|tag=value|...|`` for display."""
    parts: list[str] = []
    if msg.begin_string:
        parts.append(f"|{int(FixTag.BeginString)}={_clip(msg.begin_string)}")
    if msg.body_length:
        parts.append(f"|{int(FixTag.BodyLength)}={msg.body_length}")
    if msg.msg_type:
        parts.append(f"|{int(FixTag.MsgType)}={_clip(msg.msg_type)}")
    if msg.sender_comp_id:
        parts.append(f"|{int(FixTag.SenderCompID)}={_clip(msg.sender_comp_id)}")
    if msg.target_comp_id:
        parts.append(f"|{int(FixTag.TargetCompID)}={_clip(msg.target_comp_id)}")
    if msg.msg_seq_num:
        parts.append(f"|{int(FixTag.MsgSeqNum)}={msg.msg_seq_num}")

    for fld in msg.fields:
        if fld.type is FixType.STRING:
            parts.append(f"|{fld.tag}={_clip(str(fld.value))}")
        elif fld.type is FixType.FLOAT:
            parts.append(f"|{fld.tag}={fld.value:f}")
        elif fld.type is FixType.CHAR:
            parts.append(f"|{fld.tag}={fld.value}")
        elif fld.type in (FixType.CHECKSUM, FixType.INT):
            parts.append(f"|{fld.tag}={fld.value}")

    return "".join(parts)[: MAX_LINE_LENGTH - 1] + "|"