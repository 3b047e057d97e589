import gzip
import io
import struct
import zlib

import pytest

from tradekit.itch41 import Itch41MsgType
from tradekit.tape import count_messages, format_stats, iter_messages, main


def framed(raw: bytes) -> bytes:
    return len(raw).to_bytes(2, "big") + raw


SECONDS = struct.pack(">cI", b"T", 3600)
ADD = struct.pack(">cIQcI8sI", b"A", 7, 42, b"S", 100, b"AAPL    ", 1234500)
DELETE = struct.pack(">cIQ", b"D", 9, 42)
STREAM = framed(SECONDS) + framed(SECONDS) + framed(ADD) + framed(DELETE)


@pytest.fixture
def gz_file(tmp_path):
    path = tmp_path / "itch.gz"
    path.write_bytes(gzip.compress(STREAM))
    return path


def test_iter_messages_plain_stream():
    kinds = [m.msg_type for m in iter_messages(io.BytesIO(STREAM))]
    assert kinds == [
        Itch41MsgType.TIMESTAMP_SECONDS,
        Itch41MsgType.TIMESTAMP_SECONDS,
        Itch41MsgType.ADD_ORDER,
        Itch41MsgType.ORDER_DELETE,
    ]


def test_iter_messages_drops_truncated_tail():
    data = framed(SECONDS) + framed(ADD)[:-3]
    messages = list(iter_messages(io.BytesIO(data)))
    assert [m.msg_type for m in messages] == [Itch41MsgType.TIMESTAMP_SECONDS]
    assert messages[0]["Second"] == 3600


def test_iter_messages_empty():
    assert list(iter_messages(io.BytesIO(b""))) == []


def test_count_messages_gzip(gz_file):
    stats = count_messages(str(gz_file))
    assert stats[Itch41MsgType.TIMESTAMP_SECONDS] == 2
    assert stats[Itch41MsgType.ADD_ORDER] == 1
    assert stats[Itch41MsgType.ORDER_DELETE] == 1
    assert sum(stats.values()) == 4


def test_count_messages_zlib(tmp_path):
    path = tmp_path / "itch.z"
    path.write_bytes(zlib.compress(STREAM))
    assert count_messages(str(path)) == count_messages(str(path), verbose=True)


def test_count_messages_bad_data(tmp_path):
    path = tmp_path / "bad.gz"
    path.write_bytes(b"not compressed at all")
    with pytest.raises(zlib.error):
        count_messages(str(path))


def test_format_stats_lists_every_type():
    text = format_stats({}, "feed.gz")
    lines = text.splitlines()
    assert lines[0] == " Message type stats for 'feed.gz':"
    assert len([line for line in lines if line.strip()]) == 19
    assert text.endswith("\n\n")


def test_format_stats_groups_thousands():
    text = format_stats({Itch41MsgType.ADD_ORDER: 1234567}, "feed.gz")
    line = next(l for l in text.splitlines() if l.endswith("  Add Order"))
    assert line.split()[0] == "1,234,567"
    assert len(line) == 14 + len("  Add Order")


def test_main_check(gz_file, capsys):
    assert main(["check", str(gz_file)]) == 0
    captured = capsys.readouterr()
    assert f"'{gz_file}'" in captured.out
    assert "Add Order" in captured.out
    assert "Processing messages" in captured.err


def test_main_check_verbose(gz_file, capsys):
    assert main(["check", "--verbose", str(gz_file)]) == 0
    out = capsys.readouterr().out
    assert out.startswith("TTAD\n")


def test_main_without_command(capsys):
    assert main([]) == 1
    assert "usage" in capsys.readouterr().err


def test_main_unknown_command(capsys):
    assert main(["frobnicate"]) == 1
    assert "check" in capsys.readouterr().err


def test_main_check_without_file(capsys):
    assert main(["check"]) == 1
    assert "--verbose" in capsys.readouterr().err


def test_main_check_missing_file(tmp_path, capsys):
    missing = tmp_path / "missing.gz"
    assert main(["check", str(missing)]) == 1
    assert str(missing) in capsys.readouterr().err


def test_main_check_bad_option(gz_file, capsys):
    assert main(["check", "-x", str(gz_file)]) == 1
    assert "usage" in capsys.readouterr().err