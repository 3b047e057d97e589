"""Building blocks of the FAST codec: field kinds, presence maps and sizes."""

from __future__ import annotations

from enum import IntEnum

PMAP_MAX_BYTES = 8
PREAMBLE_MAX_BYTES = 8
FIELD_MAX_NUMBER = 128
STRING_MAX_BYTES = 256
VECTOR_MAX_BYTES = 256
MESSAGE_MAX_SIZE = 2048
TEMPLATE_MAX_NUMBER = 128
SEQUENCE_ELEMENTS = 128

MSG_STATE_GARBLED = -1
MSG_STATE_PARTIAL = -2

MSG_FLAGS_RESET = 0x00000001

FIELD_FLAGS_UNICODE = 0x00000001
FIELD_FLAGS_PMAPREQ = 0x00000002
FIELD_FLAGS_DECIMAL_INDIVID = 0x00000004

_MAX_TRANSFER_BYTES = 9


class FastType(IntEnum):
    INT = 0
    UINT = 1
    STRING = 2
    VECTOR = 3
    DECIMAL = 4
    SEQUENCE = 5


class FastOp(IntEnum):
    NONE = 0
    COPY = 1
    INCR = 2
    DELTA = 3
    DEFAULT = 4
    CONSTANT = 5


class FastPresence(IntEnum):
    OPTIONAL = 0
    MANDATORY = 1


class FastState(IntEnum):
    UNDEFINED = 0
    ASSIGNED = 1
    EMPTY = 2


class Pmap:
    """A presence map: seven bits per byte, most significant data bit first."""

    def __init__(self, data: bytes = b"") -> None:
        if len(data) > PMAP_MAX_BYTES:
            raise ValueError(f"a presence map holds at most {PMAP_MAX_BYTES} bytes")
        self.data = bytearray(data)

    def __len__(self) -> int:
        return len(self.data)

    def _locate(self, bit: int) -> tuple[int, int] | None:
        if bit < 0:
            raise ValueError("bit index must not be negative")
        index, offset = divmod(bit, 7)
        if index >= len(self.data):
            return None
        return index, 1 << (6 - offset)

    def is_set(self, bit: int) -> bool:
        """True if *bit* is present in the map and set."""
        place = self._locate(bit)
        if place is None:
            return False
        index, mask = place
        return bool(self.data[index] & mask)

    def set(self, bit: int) -> bool:
        """Set *bit*; return False if the map is too short to hold it."""
        place = self._locate(bit)
        if place is None:
            return False
        index, mask = place
        self.data[index] |= mask
        return True


def pmap_required(op: FastOp, presence: FastPresence) -> bool:
    """Whether a field with this operator and presence takes a presence map bit."""
    if op == FastOp.CONSTANT:
        return presence != FastPresence.MANDATORY
    return op in (FastOp.COPY, FastOp.INCR, FastOp.DEFAULT)


def transfer_size_int(value: int) -> int:
    """Bytes needed to encode a signed integer in stop-bit form (at most 9)."""
    magnitude = value if value >= 0 else ~value
    return min(_MAX_TRANSFER_BYTES, (magnitude.bit_length() + 7) // 7)


def transfer_size_uint(value: int) -> int:
    """Bytes needed to encode an unsigned integer in stop-bit form (at most 9)."""
    if value < 0:
        raise ValueError("an unsigned value must not be negative")
    return min(_MAX_TRANSFER_BYTES, max(1, (value.bit_length() + 6) // 7))