"""A fixed-capacity byte buffer with a read cursor and a write cursor."""

from __future__ import annotations


def checksum(data: bytes) -> int:
    """Return the sum of all bytes in *data*, truncated to eight bits."""
    return sum(data) & 0xFF


class Buffer:
    """Bytes between ``start`` and ``end`` are unread; writes go after ``end``."""

    def __init__(self, capacity: int) -> None:
        if capacity < 0:
            raise ValueError("capacity must not be negative")
        self.capacity = capacity
        self.data = bytearray(capacity)
        self.start = 0
        self.end = 0

    def __len__(self) -> int:
        return self.end - self.start

    def remaining(self) -> int:
        """Number of bytes that can still be written."""
        return self.capacity - self.end

    def write(self, data: bytes) -> int:
        """Append *data*; raise BufferError if it does not fit."""
        size = len(data)
        if size > self.remaining():
            raise BufferError(
                f"cannot write {size} bytes, only {self.remaining()} left"
            )
        self.data[self.end:self.end + size] = data
        self.end += size
        return size

    def put(self, byte: int) -> None:
        """Append a single byte."""
        if not 0 <= byte <= 0xFF:
            raise ValueError(f"not a byte value: {byte}")
        if not self.remaining():
            raise BufferError("buffer is full")
        self.data[self.end] = byte
        self.end += 1

    def view(self) -> bytes:
        """The unread bytes, without consuming them."""
        return bytes(self.data[self.start:self.end])

    def _require(self, size: int) -> None:
        if size > len(self):
            raise IndexError(f"need {size} bytes, only {len(self)} available")

    def _take(self, size: int) -> bytes:
        self._require(size)
        chunk = bytes(self.data[self.start:self.start + size])
        self.start += size
        return chunk

    def peek_u8(self) -> int:
        self._require(1)
        return self.data[self.start]

    def peek_le16(self) -> int:
        self._require(2)
        return int.from_bytes(self.data[self.start:self.start + 2], "little")

    def get_u8(self) -> int:
        return self._take(1)[0]

    def get_le16(self) -> int:
        return int.from_bytes(self._take(2), "little")

    def get_le32(self) -> int:
        return int.from_bytes(self._take(4), "little")

    def get_le64(self) -> int:
        return int.from_bytes(self._take(8), "little")

    def get_be16(self) -> int:
        return int.from_bytes(self._take(2), "big")

    def get_bytes(self, n: int) -> bytes:
        """Consume and return the next *n* bytes."""
        if n < 0:
            raise ValueError("byte count must not be negative")
        return self._take(n)

    def advance(self, n: int) -> None:
        """Move the read cursor by *n* bytes, staying within the written data."""
        position = self.start + n
        if not 0 <= position <= self.end:
            raise ValueError(f"cannot advance read cursor to {position}")
        self.start = position

    def reset(self) -> None:
        """Discard all contents."""
        self.start = self.end = 0

    def compact(self) -> None:
        """Move unread bytes to the front so that more can be written."""
        size = len(self)
        if self.start:
            self.data[:size] = self.data[self.start:self.end]
        self.start = 0
        self.end = size

    def find(self, byte: int) -> bool:
        """Skip bytes until *byte* is next; return False if the data runs out."""
        while len(self):
            if self.data[self.start] == byte:
                return True
            self.start += 1
        return False

    def checksum(self) -> int:
        """Eight-bit sum of the unread bytes."""
        return checksum(self.data[self.start:self.end])