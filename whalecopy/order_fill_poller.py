"""Decisions for submitted orders: record fills, wait, or cancel."""

from __future__ import annotations

import enum
from datetime import datetime, timezone
from decimal import Decimal

from whalecopy.tokens import OrderSide

ORDER_STALE_SECS = 300


class OrderStatus(enum.Enum):
    """Status of an order as reported by the order book."""

    MATCHED = "MATCHED"
    LIVE = "LIVE"
    CANCELED = "CANCELED"
    UNMATCHED = "UNMATCHED"
    DELAYED = "DELAYED"


class FillAction(enum.Enum):
    """What to do with a submitted order after checking it."""

    RECORD_FILL = "record_fill"
    WAIT = "wait"
    CANCEL_STALE = "cancel_stale"
    CANCEL = "cancel"
    IGNORE = "ignore"


def slippage_pct(fill_price: Decimal, target_price: Decimal) -> Decimal:
    """Absolute deviation of the fill from the target, in percent of the target."""
    if target_price > 0:
        return abs((fill_price - target_price) / target_price * 100)
    return Decimal(0)


def is_stale(placed_at: datetime | None, now: datetime | None = None) -> bool:
    """True when the order was placed more than five whole minutes ago."""
    if placed_at is None:
        return False
    current = now if now is not None else datetime.now(timezone.utc)
    age_secs = int((current - placed_at).total_seconds())
    return age_secs > ORDER_STALE_SECS


def entry_outcome(side: str | OrderSide) -> str:
    """Outcome held after an entry fill: a buy holds Yes, anything else No."""
    text = side.value if isinstance(side, OrderSide) else side
    return "Yes" if text == "BUY" else "No"


def plan_fill_action(status: OrderStatus | None, stale: bool) -> FillAction:
    """Choose the action for an order; ``status`` is None when the query failed.

    An order that could not be queried, or is still live, is cancelled only
    once it is stale.
    """
    if status is None or status is OrderStatus.LIVE:
        return FillAction.CANCEL_STALE if stale else FillAction.WAIT
    if status is OrderStatus.MATCHED:
        return FillAction.RECORD_FILL
    if status in (OrderStatus.CANCELED, OrderStatus.UNMATCHED):
        return FillAction.CANCEL
    return FillAction.IGNORE