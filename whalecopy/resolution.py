"""Working out how a resolved market settles the positions held in it."""

from __future__ import annotations

import enum
from collections.abc import Iterable
from decimal import Decimal

from whalecopy.types import ApiMarket


class ResolutionOutcome(enum.Enum):
    RESOLVED_YES = "resolved_yes"
    RESOLVED_NO = "resolved_no"


def resolved_outcome(market: ApiMarket) -> ResolutionOutcome | None:
    """The outcome of a closed market, or None while it is open or undecided.

    Only the first token marked as winner counts; a winner that is neither
    Yes nor No leaves the market unresolved.
    """
    if market.closed is not True:
        return None
    winner = next((t for t in market.tokens if t.winner is True), None)
    if winner is None:
        return None
    label = winner.outcome.upper()
    if label == "YES":
        return ResolutionOutcome.RESOLVED_YES
    if label == "NO":
        return ResolutionOutcome.RESOLVED_NO
    return None


def settlement_pnl(
    outcome: ResolutionOutcome | str,
    held_outcome: str,
    size: Decimal,
    avg_entry_price: Decimal,
) -> Decimal:
    """Realised PnL of a position once the market settles.

    A winning share pays 1, so it gains ``1 - entry``; a losing one loses
    its entry price.
    """
    outcome = ResolutionOutcome(outcome)
    winning = "Yes" if outcome is ResolutionOutcome.RESOLVED_YES else "No"
    if held_outcome == winning:
        return size * (Decimal(1) - avg_entry_price)
    return -(size * avg_entry_price)


def total_settlement_pnl(
    outcome: ResolutionOutcome | str,
    holdings: Iterable[tuple[str, Decimal, Decimal]],
) -> Decimal:
    """Sum of settlement PnL over ``(held_outcome, size, avg_entry_price)`` holdings."""
    outcome = ResolutionOutcome(outcome)
    return sum(
        (settlement_pnl(outcome, held, size, entry) for held, size, entry in holdings),
        Decimal(0),
    )