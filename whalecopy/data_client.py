"""Client for the public data API: trades, markets and the leaderboard."""

from __future__ import annotations

import string
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, TypeVar

import httpx

from whalecopy.types import ApiMarket, ApiTrade, _lookup, _mapping, _optional_decimal, _optional_str

DATA_API_BASE = "https://data-api.polymarket.com"
GAMMA_API_BASE = "https://gamma-api.polymarket.com"
CLOB_API_BASE = "https://clob.polymarket.com"

LEADERBOARD_PAGE_SIZE = 50

_T = TypeVar("_T")


class DataClientError(Exception):
    """A request to the data API failed or returned something unexpected."""


@dataclass
class LeaderboardEntry:
    address: str | None = None
    volume: Decimal | None = None
    pnl: Decimal | None = None
    rank: str | None = None
    user_name: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> LeaderboardEntry:
        data = _mapping(data, "leaderboard entry")
        return cls(
            address=_optional_str(_lookup(data, "address", "proxyWallet"), "address"),
            volume=_optional_decimal(_lookup(data, "volume", "vol"), "volume"),
            pnl=_optional_decimal(data.get("pnl"), "pnl"),
            rank=_optional_str(data.get("rank"), "rank"),
            user_name=_optional_str(_lookup(data, "user_name", "userName"), "user_name"),
        )


@dataclass
class UserTrade:
    """A trade of one user; the timestamp is kept as the raw JSON value."""

    token_id: str | None = None
    side: str | None = None
    size: Decimal | None = None
    price: Decimal | None = None
    timestamp: Any = None
    market: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> UserTrade:
        data = _mapping(data, "user trade")
        return cls(
            token_id=_optional_str(_lookup(data, "token_id", "asset"), "token_id"),
            side=_optional_str(data.get("side"), "side"),
            size=_optional_decimal(data.get("size"), "size"),
            price=_optional_decimal(data.get("price"), "price"),
            timestamp=data.get("timestamp"),
            market=_optional_str(_lookup(data, "market", "conditionId"), "market"),
        )


def is_bare_hex(market_id: str) -> bool:
    """True for a 64-character hex string without 0x that holds a letter."""
    return (
        len(market_id) == 64
        and all(ch in string.hexdigits for ch in market_id)
        and any(ch.isalpha() for ch in market_id)
    )


class DataClient:
    """Reads trades, markets and leaderboard data."""

    def __init__(self, http: httpx.Client | None = None, base_url: str = DATA_API_BASE):
        self._http = http if http is not None else httpx.Client()
        self._base_url = base_url.rstrip("/")

    def _get_json(self, url: str, params: Mapping[str, str] | None = None) -> Any:
        try:
            response = self._http.get(url, params=params)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPError as exc:
            raise DataClientError(f"HTTP request failed: {exc}") from exc
        except ValueError as exc:
            raise DataClientError(f"unexpected response: {exc}") from exc

    @staticmethod
    def _parse(payload: Any, parse: Callable[[Any], _T]) -> _T:
        try:
            return parse(payload)
        except ValueError as exc:
            raise DataClientError(f"unexpected response: {exc}") from exc

    @classmethod
    def _parse_list(cls, payload: Any, parse: Callable[[Any], _T]) -> list[_T]:
        if not isinstance(payload, list):
            raise DataClientError("unexpected response: expected a list")
        return [cls._parse(item, parse) for item in payload]

    def get_trades_by_wallet(self, wallet: str) -> list[ApiTrade]:
        payload = self._get_json(f"{self._base_url}/trades", {"maker_address": wallet})
        return self._parse_list(payload, ApiTrade.from_dict)

    def get_market(self, condition_id: str) -> ApiMarket:
        payload = self._get_json(f"{self._base_url}/markets/{condition_id}")
        return self._parse(payload, ApiMarket.from_dict)

    def get_markets(self) -> list[ApiMarket]:
        payload = self._get_json(f"{self._base_url}/markets")
        return self._parse_list(payload, ApiMarket.from_dict)

    def get_leaderboard(self, total: int) -> list[LeaderboardEntry]:
        """Collect up to ``total`` entries ranked by PnL, paging 50 at a time."""
        url = f"{self._base_url}/v1/leaderboard"
        entries: list[LeaderboardEntry] = []
        offset = 0
        while len(entries) < total:
            params = {
                "limit": str(LEADERBOARD_PAGE_SIZE),
                "offset": str(offset),
                "timePeriod": "ALL",
                "orderBy": "PNL",
            }
            page = self._parse_list(self._get_json(url, params), LeaderboardEntry.from_dict)
            entries.extend(page)
            if len(page) < LEADERBOARD_PAGE_SIZE:
                break
            offset += LEADERBOARD_PAGE_SIZE
        return entries[:total]

    def resolve_to_condition_id(self, market_id: str) -> str:
        """Turn a condition id, bare hex id or decimal token id into a 0x condition id."""
        if market_id.startswith("0x"):
            return market_id
        if is_bare_hex(market_id):
            return f"0x{market_id}"
        payload = self._get_json(f"{GAMMA_API_BASE}/markets", {"clob_token_ids": market_id})
        if isinstance(payload, list) and payload and isinstance(payload[0], Mapping):
            condition_id = payload[0].get("conditionId")
            if isinstance(condition_id, str):
                return condition_id
        raise DataClientError(f"unexpected response: no market found for token {market_id}")

    def get_market_for_resolution(self, market_id: str) -> ApiMarket:
        """Look a market up on the order-book API, whatever form its id is in."""
        condition_id = self.resolve_to_condition_id(market_id)
        payload = self._get_json(f"{CLOB_API_BASE}/markets/{condition_id}")
        return self._parse(payload, ApiMarket.from_dict)

    def get_user_trades(self, address: str, limit: int) -> list[UserTrade]:
        payload = self._get_json(
            f"{self._base_url}/trades", {"user": address, "limit": str(limit)}
        )
        return self._parse_list(payload, UserTrade.from_dict)