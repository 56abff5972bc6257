"""Filters and estimates used when picking new whales from the leaderboard."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import datetime
from decimal import ROUND_HALF_EVEN, Decimal

from whalecopy.data_client import LeaderboardEntry, UserTrade
from whalecopy.timestamps import parse_trade_timestamp

MAX_INACTIVE_DAYS = 30
SEEDER_RECENCY_DAYS = 90
MIN_LEADERBOARD_VOLUME = Decimal(1_000)
LEADERBOARD_FETCH_COUNT = 500
USER_TRADE_FETCH_LIMIT = 200

_TOP_TIER_PNL = Decimal(100_000)
_HIGH_PERFORMER_PNL = Decimal(10_000)
_MAX_SHARPE = Decimal(5)


@dataclass
class WhaleEstimate:
    """Initial scores for a whale seeded from leaderboard data."""

    classification: str
    category: str
    win_rate: Decimal
    kelly: Decimal
    expected_value: Decimal
    sharpe: Decimal
    trade_count: int
    pnl: Decimal


def _timestamps(trades: Iterable[UserTrade]) -> list[datetime]:
    parsed = (parse_trade_timestamp(t.timestamp) for t in trades)
    return [ts for ts in parsed if ts is not None]


def detect_bot_or_mm(trades: Sequence[UserTrade]) -> str | None:
    """Return why a wallet looks like a bot or market maker, or None if it does not."""
    count = len(trades)
    if count < 20:
        return None

    timestamps = _timestamps(trades)
    if len(timestamps) >= 20:
        span_days = max((max(timestamps) - min(timestamps)).days, 1)
        per_day = count / span_days
        if count >= 100 and span_days < 7:
            return f"bot: {count} trades in {span_days} days ({per_day:.0f} trades/day)"
        if per_day > 50.0:
            return f"bot: {per_day:.0f} trades/day over {span_days} days"

    bought: set[str] = set()
    sold: set[str] = set()
    for trade in trades:
        market = trade.market or ""
        if not market:
            continue
        side = (trade.side or "").upper()
        if side == "BUY":
            bought.add(market)
        elif side == "SELL":
            sold.add(market)

    dual_side = len(bought & sold)
    total_markets = len(bought | sold)
    if total_markets >= 5:
        ratio = dual_side / total_markets
        if ratio > 0.40:
            return (
                f"market_maker: {dual_side}/{total_markets} markets "
                f"({ratio * 100.0:.0f}%) have dual-side activity"
            )
    return None


def filter_leaderboard(
    entries: Iterable[LeaderboardEntry], skip_top_n: int
) -> list[tuple[int, LeaderboardEntry]]:
    """Keep ``(rank, entry)`` pairs past the top N with positive PnL and real volume.

    Ranks are zero-based positions in the leaderboard.
    """
    kept = []
    for rank, entry in enumerate(entries):
        if rank < skip_top_n:
            continue
        pnl = entry.pnl if entry.pnl is not None else Decimal(0)
        volume = entry.volume if entry.volume is not None else Decimal(0)
        if pnl <= 0 or volume <= MIN_LEADERBOARD_VOLUME:
            continue
        kept.append((rank, entry))
    return kept


def most_recent_trade(trades: Iterable[UserTrade]) -> datetime | None:
    """The latest parseable trade timestamp, or None when there is none."""
    return max(_timestamps(trades), default=None)


def is_recently_active(
    trades: Iterable[UserTrade], now: datetime, max_days: int = SEEDER_RECENCY_DAYS
) -> bool:
    """True when the latest trade is at most ``max_days`` whole days before ``now``."""
    latest = most_recent_trade(trades)
    if latest is None:
        return False
    return (now - latest).days <= max_days


def classify_pnl(pnl: Decimal) -> str:
    if pnl > _TOP_TIER_PNL:
        return "top_tier"
    if pnl > _HIGH_PERFORMER_PNL:
        return "high_performer"
    return "profitable"


def _estimated_win_rate(pnl: Decimal) -> Decimal:
    if pnl > _TOP_TIER_PNL:
        return Decimal("0.68")
    if pnl > _HIGH_PERFORMER_PNL:
        return Decimal("0.63")
    return Decimal("0.58")


def estimate_scores(pnl: Decimal, volume: Decimal, trade_count: int) -> WhaleEstimate:
    """Rough starting scores for a whale from its leaderboard PnL and volume."""
    win_rate = _estimated_win_rate(pnl)
    kelly = win_rate * 2 - 1
    expected_value = pnl / Decimal(trade_count) if trade_count > 0 else Decimal(0)
    if volume > 0:
        sharpe = min(pnl / volume * 100, _MAX_SHARPE)
    else:
        sharpe = Decimal(1)
    rounded_volume = volume.quantize(Decimal(1), rounding=ROUND_HALF_EVEN)
    return WhaleEstimate(
        classification=classify_pnl(pnl),
        category=f"vol:{rounded_volume}",
        win_rate=win_rate,
        kelly=kelly,
        expected_value=expected_value,
        sharpe=sharpe,
        trade_count=trade_count,
        pnl=pnl,
    )