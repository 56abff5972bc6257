"""Periodic discovery of active markets worth watching."""

from __future__ import annotations

import logging
import re
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Any

from whalecopy.gamma_client import GammaClientError, GammaMarket

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 100

_DECIMAL_TEXT = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)")


@dataclass
class DiscoveredMarket:
    """A market that passed the volume and liquidity thresholds."""

    condition_id: str
    question: str
    volume: Decimal
    liquidity: Decimal
    end_date_iso: str | None = None
    clob_token_ids: str | None = None
    slug: str | None = None
    outcomes: str | None = None
    token_ids: list[str] = field(default_factory=list)


@dataclass
class DiscoveryResult:
    markets: list[DiscoveredMarket] = field(default_factory=list)
    token_ids: list[str] = field(default_factory=list)


def parse_decimal(value: str | None) -> Decimal:
    """Read a decimal string; missing or malformed values count as zero."""
    if value is None:
        return Decimal(0)
    text = value.strip()
    if not _DECIMAL_TEXT.fullmatch(text):
        return Decimal(0)
    try:
        return Decimal(text)
    except InvalidOperation:
        return Decimal(0)


def _discovered(market: GammaMarket, volume: Decimal, liquidity: Decimal) -> DiscoveredMarket:
    return DiscoveredMarket(
        condition_id=market.condition_id,
        question=market.question,
        volume=volume,
        liquidity=liquidity,
        end_date_iso=market.end_date_iso,
        clob_token_ids=market.clob_token_ids,
        slug=market.event_slug(),
        outcomes=market.outcomes_json(),
        token_ids=[t for t in market.parse_token_ids() if t],
    )


def discover_markets(
    gamma_client: Any,
    min_volume: Decimal,
    min_liquidity: Decimal,
    page_size: int = DEFAULT_PAGE_SIZE,
) -> DiscoveryResult:
    """Page through active markets and keep those above both thresholds.

    A failing page ends the scan; whatever was found before it is kept.
    """
    result = DiscoveryResult()
    tokens: set[str] = set()
    offset = 0
    while True:
        try:
            page = gamma_client.get_active_markets(page_size, offset)
        except GammaClientError as exc:
            logger.error("Failed to fetch markets from Gamma API: %s", exc)
            break
        for market in page:
            volume = parse_decimal(market.volume)
            liquidity = parse_decimal(market.liquidity)
            if volume >= min_volume and liquidity >= min_liquidity:
                found = _discovered(market, volume, liquidity)
                result.markets.append(found)
                tokens.update(found.token_ids)
        if len(page) < page_size:
            break
        offset += page_size
    result.token_ids = sorted(tokens)
    return result


def run_market_discovery(
    gamma_client: Any,
    publish: Callable[[list[str]], Any],
    persist: Callable[[DiscoveredMarket], Any] | None,
    interval_secs: float,
    min_volume: Decimal,
    min_liquidity: Decimal,
) -> None:
    """Scan for markets every ``interval_secs``, starting at once, forever.

    Each kept market is handed to ``persist``; a non-empty token list is
    handed to ``publish``. Errors from either are logged and the loop goes on.
    """
    next_tick = time.monotonic()
    while True:
        logger.info("Market discovery: scanning for active markets")
        result = discover_markets(gamma_client, min_volume, min_liquidity)
        if persist is not None:
            for market in result.markets:
                try:
                    persist(market)
                except Exception as exc:
                    logger.warning(
                        "Failed to persist active market %s: %s", market.condition_id, exc
                    )
        logger.info(
            "Discovered %d active markets with %d tokens",
            len(result.markets),
            len(result.token_ids),
        )
        if result.token_ids:
            try:
                publish(result.token_ids)
            except Exception as exc:
                logger.error("Failed to broadcast token IDs: %s", exc)
        next_tick += interval_secs
        time.sleep(max(0.0, next_tick - time.monotonic()))