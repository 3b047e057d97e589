"""Traders connected to a simulated market and the market's order book."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from tradekit.engine import OrderBook

MAX_TRADERS = 100


class MarketFull(RuntimeError):
    """Raised when no more traders can join the market."""


@dataclass
class Trader:
    """A participant; ``session`` is any object with ``sockfd`` and ``close()``."""

    id: int
    name: str = ""
    active: bool = False
    session: Any = None

    def close(self) -> None:
        """Close the trader's session and mark the trader inactive."""
        if self.session is not None:
            self.session.close()
        self.session = None
        self.active = False


@dataclass
class Market:
    traders: list[Trader] = field(default_factory=list)
    book: OrderBook = field(default_factory=OrderBook)

    def __init__(self) -> None:
        self.traders = []
        self.book = OrderBook()

    def new_trader(self) -> Trader:
        """Register a new inactive trader with the next free id."""
        if len(self.traders) >= MAX_TRADERS:
            raise MarketFull(f"market already has {MAX_TRADERS} traders")
        trader = Trader(id=len(self.traders))
        self.traders.append(trader)
        return trader

    def by_sock(self, sockfd: int) -> Trader | None:
        return next(
            (
                trader
                for trader in self.traders
                if trader.session is not None and trader.session.sockfd == sockfd
            ),
            None,
        )

    def by_name(self, name: str) -> Trader | None:
        return next((t for t in self.traders if t.name == name), None)

    def by_id(self, trader_id: int) -> Trader | None:
        return next((t for t in self.traders if t.id == trader_id), None)