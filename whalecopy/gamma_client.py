"""Client for the market-listing (Gamma) API."""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

import httpx

from whalecopy.types import _list, _lookup, _mapping, _optional_str, _require, _str

GAMMA_API_BASE = "https://gamma-api.polymarket.com"


class GammaClientError(Exception):
    """A request to the Gamma API failed or returned something unexpected."""


@dataclass
class GammaEvent:
    slug: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> GammaEvent:
        data = _mapping(data, "event")
        return cls(slug=_optional_str(data.get("slug"), "slug"))


@dataclass
class GammaMarket:
    """A market as listed by the Gamma API."""

    condition_id: str
    question: str
    slug: str | None = None
    events: list[GammaEvent] = field(default_factory=list)
    outcomes: list[str] = field(default_factory=list)
    clob_token_ids: str | None = None
    volume: str | None = None
    liquidity: str | None = None
    end_date_iso: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> GammaMarket:
        data = _mapping(data, "market")
        return cls(
            condition_id=_str(_require(data, "condition_id", "conditionId"), "condition_id"),
            question=_str(_require(data, "question"), "question"),
            slug=_optional_str(data.get("slug"), "slug"),
            events=[GammaEvent.from_dict(e) for e in _list(data.get("events"), "events")],
            outcomes=[_str(o, "outcomes") for o in _list(data.get("outcomes"), "outcomes")],
            clob_token_ids=_optional_str(
                _lookup(data, "clob_token_ids", "clobTokenIds"), "clob_token_ids"
            ),
            volume=_optional_str(data.get("volume"), "volume"),
            liquidity=_optional_str(data.get("liquidity"), "liquidity"),
            end_date_iso=_optional_str(
                _lookup(data, "end_date_iso", "endDateIso"), "end_date_iso"
            ),
        )

    def parse_token_ids(self) -> list[str]:
        """Decode the JSON-encoded token id list; empty when absent or malformed."""
        if self.clob_token_ids is None:
            return []
        try:
            ids = json.loads(self.clob_token_ids)
        except ValueError:
            return []
        if not isinstance(ids, list) or not all(isinstance(i, str) for i in ids):
            return []
        return ids

    def event_slug(self) -> str | None:
        """Slug of the first event, falling back to the market's own slug."""
        if self.events and self.events[0].slug is not None:
            return self.events[0].slug
        return self.slug

    def outcomes_json(self) -> str | None:
        """Outcome labels as a compact JSON array, or None when there are none."""
        if not self.outcomes:
            return None
        return json.dumps(self.outcomes, separators=(",", ":"), ensure_ascii=False)


class GammaClient:
    """Reads active markets from the Gamma API."""

    def __init__(self, http: httpx.Client | None = None, base_url: str = GAMMA_API_BASE):
        self._http = http if http is not None else httpx.Client()
        self._base_url = base_url.rstrip("/")

    def get_active_markets(self, limit: int, offset: int) -> list[GammaMarket]:
        """Fetch one page of active, unclosed markets."""
        params = {"active": "true", "closed": "false", "limit": str(limit), "offset": str(offset)}
        try:
            response = self._http.get(f"{self._base_url}/markets", params=params)
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPError as exc:
            raise GammaClientError(f"HTTP request failed: {exc}") from exc
        except ValueError as exc:
            raise GammaClientError(f"unexpected response: {exc}") from exc
        if not isinstance(payload, list):
            raise GammaClientError("unexpected response: expected a list of markets")
        try:
            return [GammaMarket.from_dict(item) for item in payload]
        except ValueError as exc:
            raise GammaClientError(f"unexpected response: {exc}") from exc