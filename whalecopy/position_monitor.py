"""Stop-loss and take-profit checks for open positions."""

from __future__ import annotations

import enum
from decimal import Decimal

from whalecopy.types import ApiOrderBook

DEFAULT_STOP_LOSS_PCT = Decimal("15.00")
DEFAULT_TAKE_PROFIT_PCT = Decimal("50.00")


class ExitReason(enum.Enum):
    """Why a position is being closed."""

    STOP_LOSS = "stop_loss"
    TAKE_PROFIT = "take_profit"


def best_bid(book: ApiOrderBook) -> Decimal | None:
    """Price at which a held position could be sold: the highest bid, if any."""
    level = book.best_bid()
    return None if level is None else level.price


def unrealized_pnl(current_price: Decimal, avg_entry_price: Decimal, size: Decimal) -> Decimal:
    """Profit or loss of a position if it were sold at ``current_price``."""
    return (current_price - avg_entry_price) * size


def pnl_percent(current_price: Decimal, avg_entry_price: Decimal) -> Decimal | None:
    """Price change from entry in percent; None when the entry price is zero."""
    if avg_entry_price == 0:
        return None
    return (current_price - avg_entry_price) / avg_entry_price * 100


def exit_reason(
    pnl_pct: Decimal,
    stop_loss_pct: Decimal | None = None,
    take_profit_pct: Decimal | None = None,
) -> ExitReason | None:
    """Decide whether a position breaches its stop-loss or take-profit.

    Missing thresholds fall back to 15% stop-loss and 50% take-profit.
    Both bounds are inclusive, and stop-loss is checked first.
    """
    stop_loss = DEFAULT_STOP_LOSS_PCT if stop_loss_pct is None else stop_loss_pct
    take_profit = DEFAULT_TAKE_PROFIT_PCT if take_profit_pct is None else take_profit_pct
    if pnl_pct <= -stop_loss:
        return ExitReason.STOP_LOSS
    if pnl_pct >= take_profit:
        return ExitReason.TAKE_PROFIT
    return None