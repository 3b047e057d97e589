"""NYSE Daily TAQ record decoding (fixed-width ASCII records)."""

from __future__ import annotations

from dataclasses import dataclass, field

from tradekit.buffer import Buffer

_QUOTE_HEAD = (
    ("Time", 9), ("Exchange", 1), ("Symbol", 16), ("BidPrice", 11), ("BidSize", 7),
    ("AskPrice", 11), ("AskSize", 7), ("QuoteCondition", 1), ("MarketMaker", 4),
    ("BidExchange", 1), ("AskExchange", 1), ("SequenceNumber", 16),
    ("NationalBBOInd", 1), ("NASDAQBBOInd", 1), ("QuoteCancelCorrection", 1),
    ("SourceOfQuote", 1),
)

_QUOTE = _QUOTE_HEAD + (
    ("RetailInterestIndicator", 1), ("ShortSaleRestrictionIndicator", 1),
    ("LULDBBOIndicatorCQS", 1), ("LULDBBOIndicatorUTP", 1),
    ("FINRAADFMPIDIndicator", 1), ("LineChange", 2),
)

_TRADE = (
    ("Time", 9), ("Exchange", 1), ("Symbol", 16), ("SaleCondition", 4),
    ("TradeVolume", 9), ("TradePrice", 11), ("TradeStopStockIndicator", 1),
    ("TradeCorrectionIndicator", 2), ("TradeSequenceNumber", 16), ("SourceOfTrade", 1),
    ("TradeReportingFacility", 1), ("LineChange", 2),
)

_NBBO = _QUOTE_HEAD + (
    ("NBBOQuoteCondition", 1), ("BestBidExchange", 1), ("BestBidPrice", 11),
    ("BestBidSize", 7), ("BestBidMarketMaker", 4), ("BestBidMMLocation", 2),
    ("BestBidMMDeskLocation", 1), ("BestAskExchange", 1), ("BestAskPrice", 11),
    ("BestAskSize", 7), ("BestAskMarketMaker", 4), ("BestAskMMLocation", 2),
    ("BestAskMMDeskLocation", 1), ("LULDNBBOIndicatorCQS", 1),
    ("LULDNBBOIndicatorUTP", 1), ("LineChange", 2),
)


@dataclass(frozen=True)
class TaqRecord:
    """A decoded record: its kind and its text fields by specification name."""

    kind: str
    fields: dict[str, str] = field(default_factory=dict)

    def __getitem__(self, name: str) -> str:
        return self.fields[name]


def _decode(buffer: Buffer, kind: str, layout: tuple[tuple[str, int], ...]) -> TaqRecord | None:
    size = sum(width for _, width in layout)
    if len(buffer) < size:
        return None
    raw = buffer.get_bytes(size).decode("latin-1")
    fields: dict[str, str] = {}
    offset = 0
    for name, width in layout:
        fields[name] = raw[offset:offset + width]
        offset += width
    return TaqRecord(kind, fields)


def decode_daily_quote(buffer: Buffer) -> TaqRecord | None:
    """Decode the next daily quote record, or None if it is incomplete."""
    return _decode(buffer, "quote", _QUOTE)


def decode_daily_trade(buffer: Buffer) -> TaqRecord | None:
    """Decode the next daily trade record, or None if it is incomplete."""
    return _decode(buffer, "trade", _TRADE)


def decode_daily_nbbo(buffer: Buffer) -> TaqRecord | None:
    """Decode the next daily NBBO record, or None if it is incomplete."""
    return _decode(buffer, "nbbo", _NBBO)