"""Detection of new trades by tracked whales from their recent trade history."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any

from whalecopy.data_client import UserTrade
from whalecopy.timestamps import parse_trade_timestamp
from whalecopy.tokens import OrderSide

RECENT_TRADE_LIMIT = 10


@dataclass
class WhaleTradeEvent:
    """A trade by a tracked wallet, ready for the copy pipeline."""

    wallet: str
    market_id: str
    asset_id: str
    side: OrderSide
    size: Decimal
    price: Decimal
    notional: Decimal
    timestamp: datetime


def _side(text: str) -> OrderSide | None:
    try:
        return OrderSide(text.upper())
    except ValueError:
        return None


def _now(now: datetime | None) -> datetime:
    return now if now is not None else datetime.now(timezone.utc)


class TradePoller:
    """Remembers the last trade seen per wallet and reports only newer ones."""

    def __init__(self, data_client: Any):
        self._data_client = data_client
        self.last_seen: dict[str, datetime] = {}

    def prime(self, addresses: Iterable[str], now: datetime | None = None) -> None:
        """Start watching ``addresses`` from ``now``, so older trades are ignored."""
        start = _now(now)
        for address in addresses:
            self.last_seen[address] = start

    def new_trades(
        self, address: str, trades: Iterable[UserTrade], now: datetime | None = None
    ) -> list[WhaleTradeEvent]:
        """Turn trades newer than the last one seen into events and advance the mark.

        Trades without a timestamp count as happening ``now``; trades whose
        side is neither BUY nor SELL are dropped.
        """
        current = _now(now)
        cutoff = self.last_seen.get(address, current)
        latest = cutoff
        events = []
        for trade in trades:
            traded_at = parse_trade_timestamp(trade.timestamp) or current
            if traded_at <= cutoff:
                continue
            latest = max(latest, traded_at)
            side = _side(trade.side or "BUY")
            if side is None:
                continue
            size = trade.size if trade.size is not None else Decimal(0)
            price = trade.price if trade.price is not None else Decimal(0)
            events.append(
                WhaleTradeEvent(
                    wallet=address,
                    market_id=trade.market or "unknown",
                    asset_id=trade.token_id or "unknown",
                    side=side,
                    size=size,
                    price=price,
                    notional=size * price,
                    timestamp=traded_at,
                )
            )
        if latest > cutoff:
            self.last_seen[address] = latest
        return events

    def poll_wallet(self, address: str, now: datetime | None = None) -> list[WhaleTradeEvent]:
        """Fetch the wallet's most recent trades and return the new ones."""
        trades = self._data_client.get_user_trades(address, RECENT_TRADE_LIMIT)
        return self.new_trades(address, trades, now)