"""A price-level limit order matching engine."""

from __future__ import annotations

import dataclasses
from collections import deque
from dataclasses import dataclass

MAX_ORDERS = 10000
MAX_LEVEL = 100

BUY = 0
SELL = 1


class OrderRejected(ValueError):
    """Raised when the book refuses an order or a cancellation."""


@dataclass(eq=False)
class Order:
    """A limit order at an integer price level; side is BUY or SELL."""

    trader: int
    level: int
    side: int
    size: int


@dataclass(frozen=True)
class Trade:
    buyer: int
    seller: int
    price: int
    size: int


class OrderBook:
    """Orders rest in FIFO queues, one per price level from 1 to MAX_LEVEL."""

    def __init__(self) -> None:
        self.levels: list[deque[Order]] = [deque() for _ in range(MAX_LEVEL + 2)]
        self.orders: list[Order] = []
        self.best_ask = MAX_LEVEL + 1
        self.best_bid = 0

    def limit(self, order: Order) -> tuple[int, list[Trade]]:
        """Enter a copy of *order*; return its id and the trades it caused."""
        if len(self.orders) >= MAX_ORDERS:
            raise OrderRejected("order book is full")
        if not 1 <= order.level <= MAX_LEVEL:
            raise OrderRejected(f"price level {order.level} out of range")
        if not order.size:
            raise OrderRejected("order size is zero")

        entered = dataclasses.replace(order)
        order_id = len(self.orders)
        self.orders.append(entered)
        return order_id, self._match(entered)

    def _match(self, order: Order) -> list[Trade]:
        trades: list[Trade] = []
        buying = order.side == BUY

        def crosses() -> bool:
            if buying:
                return order.level >= self.best_ask
            return order.level <= self.best_bid

        while crosses():
            price = self.best_ask if buying else self.best_bid
            level = self.levels[price]
            while level:
                head = level[0]
                size = min(head.size, order.size)
                if buying:
                    trades.append(Trade(order.trader, head.trader, price, size))
                else:
                    trades.append(Trade(head.trader, order.trader, price, size))
                head.size -= size
                order.size -= size
                if not head.size:
                    level.popleft()
                if not order.size:
                    return trades
            if buying:
                self.best_ask += 1
            else:
                self.best_bid -= 1

        if buying:
            self.best_bid = max(self.best_bid, order.level)
        else:
            self.best_ask = min(self.best_ask, order.level)

        self.levels[order.level].append(order)
        return trades

    def cancel(self, order_id: int) -> None:
        """Remove a resting order; raise OrderRejected if it cannot be cancelled."""
        if not 0 <= order_id < len(self.orders):
            raise OrderRejected(f"unknown order id {order_id}")
        order = self.orders[order_id]
        if not order.size:
            raise OrderRejected(f"order {order_id} is no longer live")
        self.levels[order.level].remove(order)
        order.size = 0

    def level_orders(self, level: int) -> list[Order]:
        """Orders resting at *level*, oldest first."""
        if not 1 <= level <= MAX_LEVEL:
            raise ValueError(f"price level {level} out of range")
        return list(self.levels[level])