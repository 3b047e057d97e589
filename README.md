# tradekit

Building blocks for electronic trading tools, in pure Python with no
dependencies outside the standard library.

## What is in the package

- `tradekit.buffer` – `Buffer`, a fixed-capacity byte buffer with a read
  cursor and a write cursor. It reads unsigned 8-bit, little-endian 16/32/64-bit
  and big-endian 16-bit integers (`get_u8`, `get_le16`, `get_le32`,
  `get_le64`, `get_be16`, `peek_u8`, `peek_le16`), raw bytes (`get_bytes`),
  and supports `write`, `put`, `view`, `advance`, `reset`, `compact`, `find`
  and `checksum`. The module-level `checksum(data)` is the sum of the bytes
  truncated to eight bits, as used in a FIX CheckSum field.
- `tradekit.engine` – `OrderBook`, a limit order book over integer price
  levels 1 to 100 with price/time priority. `limit` returns the new order's
  id and the list of `Trade`s it caused; `cancel` removes a resting order;
  `level_orders` lists the orders resting at a level. Bad orders and
  cancellations raise `OrderRejected`.
- `tradekit.market` – `Market`, which holds up to 100 `Trader`s and an
  `OrderBook`. `new_trader` raises `MarketFull` when the market is full;
  traders are found with `by_sock`, `by_name` and `by_id`.
- `tradekit.fix_message` – the FIX message model: `FixMsgType` (with its
  MsgType wire code and `FixMsgType.parse`), `FixType`, `FixTag`, `FixField`
  and `FixMessage`, and the field constructors `int_field`, `string_field`,
  `float_field`, `char_field` and `checksum_field`.
- `tradekit.fix_script` – scripted FIX conversations. `read_script` reads
  lines starting with `c`/`C` (client) or `s`/`S` (server) into two
  `Container`s of expected messages; `parse_script_line` parses one line of
  SOH-separated `tag=value` pairs; `messages_differ` compares an expected
  message with a received one; `format_message` renders a message as
  `|tag=value|...|`. Bad scripts raise `ScriptError`.
- `tradekit.fast_codec` – FAST helpers: the `FastType`, `FastOp`,
  `FastPresence` and `FastState` enums, the presence map `Pmap`,
  `pmap_required`, and the stop-bit sizes `transfer_size_int` and
  `transfer_size_uint`.
- Message decoders, each taking a `Buffer`, returning `None` without
  consuming anything when the message is not complete yet, and raising
  `ValueError` for an unknown message type:
  - `tradekit.itch41` and `tradekit.itch40` – NASDAQ ITCH 4.1 and 4.0
    (`decode`, `message_size`);
  - `tradekit.ouch42` – NASDAQ OUCH 4.2 (`decode_inbound`, `decode_outbound`);
  - `tradekit.xdp` – NYSE XDP (`decode`);
  - `tradekit.nyse_taq` – NYSE Daily TAQ records (`decode_daily_quote`,
    `decode_daily_trade`, `decode_daily_nbbo`);
  - `tradekit.bats_pitch` – BATS PITCH (`decode(buffer, extra)`, where
    `extra` trailing bytes such as a line end are skipped);
  - `tradekit.boe` – BATS BOE (`decode`), including the login request,
    login response and logout payloads;
  - `tradekit.omx_itch186` – OMX ITCH 1.86 (`decode`, `message_size`);
  - `tradekit.lse_itch` – LSE ITCH (`decode`); administrative messages are
    split into fields, others keep their raw payload;
  - `tradekit.soupbin3` – SoupBinTCP 3.0 packets (`decode_packet`,
    `encode_packet`).

Decoded messages expose their fields by specification name, e.g.
`msg["Stock"]`.

## Installation

```
pip install .
```

For the test suite:

```
pip install .[test]
pytest
```

## Matching orders

```python
from tradekit.engine import BUY, SELL, Order, OrderBook

book = OrderBook()
book.limit(Order(trader=1, level=10, side=SELL, size=5))
order_id, trades = book.limit(Order(trader=2, level=12, side=BUY, size=3))
for trade in trades:
    print(trade)   # Trade(buyer=2, seller=1, price=10, size=3)
```

## Decoding a message

```python
from tradekit import itch41
from tradekit.buffer import Buffer

buf = Buffer(1024)
buf.write(raw_bytes)
msg = itch41.decode(buf)
if msg is not None:
    print(msg.msg_type, msg.fields)
```

## Checking a tape file

`tradekit-tape` reads a gzip- or zlib-compressed NASDAQ ITCH 4.1 file, in
which each message is preceded by a two-byte length, and prints a count of
its messages by type:

```
tradekit-tape check path/to/file.gz
tradekit-tape check --verbose path/to/file.gz
```

Without `--verbose` a progress percentage is written to stderr; with it, the
type letter of every message is written to stdout as it is read. The same
work is available as `tradekit.tape.count_messages` and
`tradekit.tape.format_stats`.

## What the package does not do

- It opens no network connections: there is no FIX session layer (logon,
  heartbeats, sequence numbers), no FIX client or server, and no market
  server that accepts traders over TCP. `Market` and `Trader` only keep
  state; a trader's `session` is any object you supply.
- It does not write FIX messages to the wire or parse them from raw FIX
  text; `fix_message` is a data model and `fix_script` works on script lines.
- It does not encode or decode whole FAST messages or templates; only the
  presence-map and size helpers are provided.
- Apart from SoupBinTCP packets, the decoders do not encode messages.