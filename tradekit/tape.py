"""The ``tape`` command: inspection of compressed ITCH 4.1 market data files."""

from __future__ import annotations

import getopt
import os
import sys
import zlib
from collections import Counter
from typing import BinaryIO, Callable, Iterator, Mapping, Protocol

from tradekit import itch41
from tradekit.buffer import Buffer
from tradekit.itch41 import Itch41Message, Itch41MsgType

PROG = "tape"
BUFFER_SIZE = 1 << 20
_LENGTH_PREFIX = 2
_READ_CHUNK = 1 << 16

_STAT_NAMES: tuple[tuple[str, Itch41MsgType], ...] = (
    ("Timestamp - Seconds", Itch41MsgType.TIMESTAMP_SECONDS),
    ("System Event", Itch41MsgType.SYSTEM_EVENT),
    ("Stock Directory", Itch41MsgType.STOCK_DIRECTORY),
    ("Stock Trading Action", Itch41MsgType.STOCK_TRADING_ACTION),
    ("REG SHO Restriction", Itch41MsgType.REG_SHO_RESTRICTION),
    ("Market Participant Position", Itch41MsgType.MARKET_PARTICIPANT_POS),
    ("Add Order", Itch41MsgType.ADD_ORDER),
    ("Add Order - MPID Attribution", Itch41MsgType.ADD_ORDER_MPID),
    ("Order Executed", Itch41MsgType.ORDER_EXECUTED),
    ("Order Executed With Price", Itch41MsgType.ORDER_EXECUTED_WITH_PRICE),
    ("Order Cancel", Itch41MsgType.ORDER_CANCEL),
    ("Order Delete", Itch41MsgType.ORDER_DELETE),
    ("Order Replace", Itch41MsgType.ORDER_REPLACE),
    ("Trade (non-cross)", Itch41MsgType.TRADE),
    ("Cross Trade", Itch41MsgType.CROSS_TRADE),
    ("Broken Trade", Itch41MsgType.BROKEN_TRADE),
    ("NOII", Itch41MsgType.NOII),
    ("RPII", Itch41MsgType.RPII),
)

_USAGE = (
    "\n usage: {prog} COMMAND [ARGS]\n"
    "\n The commands are:\n"
    "   check     Check market data file\n"
    "\n"
)
_CHECK_USAGE = (
    "\n usage: {prog} check [<options>] [filename]\n"
    "\n    -v, --verbose         be more verbose\n"
    "\n"
)


class _Readable(Protocol):
    def read(self, size: int) -> bytes: ...


class _Inflater:
    """Reads gzip or zlib compressed data as a stream of uncompressed bytes."""

    def __init__(
        self, raw: BinaryIO, total: int, progress: Callable[[int], None] | None
    ) -> None:
        self._raw = raw
        self._total = total
        self._progress = progress
        self._consumed = 0
        self._inflater = zlib.decompressobj(15 + 32)
        self._pending = b""
        self._eof = False

    def read(self, size: int) -> bytes:
        while len(self._pending) < size and not self._eof:
            chunk = self._raw.read(_READ_CHUNK)
            if not chunk:
                self._pending += self._inflater.flush()
                self._eof = True
                break
            self._consumed += len(chunk)
            self._pending += self._inflater.decompress(chunk)
            if self._progress is not None and self._total:
                self._progress(self._consumed * 100 // self._total)
        out, self._pending = self._pending[:size], self._pending[size:]
        return out


def _print_progress(percent: int) -> None:
    sys.stderr.write(f"Processing messages: {percent:3d}%\r")
    sys.stderr.flush()


def iter_messages(stream: _Readable) -> Iterator[Itch41Message]:
    """Yield ITCH 4.1 messages, each preceded by a two-byte length, from *stream*.

    A message cut short by the end of the data is dropped.
    """
    buf = Buffer(BUFFER_SIZE)

    def refill() -> bool:
        buf.compact()
        data = stream.read(buf.remaining())
        if not data:
            return False
        buf.write(data)
        return True

    while True:
        while len(buf) < _LENGTH_PREFIX:
            if not refill():
                return
        buf.advance(_LENGTH_PREFIX)
        while (msg := itch41.decode(buf)) is None:
            if not refill():
                return
        yield msg


def count_messages(path: str, verbose: bool = False) -> Counter[Itch41MsgType]:
    """Count the messages of each type in a compressed ITCH 4.1 file.

    Verbose mode writes each message type to stdout; otherwise progress
    goes to stderr.
    """
    stats: Counter[Itch41MsgType] = Counter()
    total = os.path.getsize(path)
    with open(path, "rb") as raw:
        reader = _Inflater(raw, total, None if verbose else _print_progress)
        for msg in iter_messages(reader):
            if verbose:
                sys.stdout.write(msg.msg_type.value)
            stats[msg.msg_type] += 1
    return stats


def format_stats(stats: Mapping[Itch41MsgType, int], filename: str) -> str:
    """The per-type message count report."""
    lines = [f" Message type stats for '{filename}':", ""]
    lines.extend(
        f"{stats.get(kind, 0):>14,}  {name}" for name, kind in _STAT_NAMES
    )
    return "\n".join(lines) + "\n\n"


def _check(args: list[str]) -> int:
    usage = _CHECK_USAGE.format(prog=PROG)
    if not args:
        sys.stderr.write(usage)
        return 1
    try:
        options, rest = getopt.gnu_getopt(args, "v", ["verbose"])
    except getopt.GetoptError:
        sys.stderr.write(usage)
        return 1
    if len(rest) != 1:
        sys.stderr.write(usage)
        return 1
    verbose = bool(options)
    filename = rest[0]

    try:
        stats = count_messages(filename, verbose)
    except OSError as exc:
        sys.stderr.write(f"{PROG}: {filename}: {exc.strerror or exc}\n")
        return 1
    except zlib.error:
        sys.stderr.write(f"{PROG}: zlib error\n")
        return 1

    sys.stdout.write("\n")
    sys.stdout.write(format_stats(stats, filename))
    return 0


_COMMANDS: dict[str, Callable[[list[str]], int]] = {"check": _check}


def main(argv: list[str] | None = None) -> int:
    """Run a ``tape`` subcommand; return the process exit status."""
    args = sys.argv[1:] if argv is None else list(argv)
    if not args or args[0] not in _COMMANDS:
        sys.stderr.write(_USAGE.format(prog=PROG))
        return 1
    return _COMMANDS[args[0]](args[1:])


if __name__ == "__main__":
    sys.exit(main())