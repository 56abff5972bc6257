"""Market, trade and order-book records returned by the exchange APIs."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Any


def _mapping(data: Any, name: str) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise ValueError(f"{name}: expected a JSON object, got {type(data).__name__}")
    return data


def _lookup(data: Mapping[str, Any], *keys: str) -> Any:
    """Return the value under the first key present, or None."""
    for key in keys:
        if key in data:
            return data[key]
    return None


def _require(data: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in data and data[key] is not None:
            return data[key]
    raise ValueError(f"missing field {keys[0]!r}")


def _str(value: Any, name: str) -> str:
    if not isinstance(value, str):
        raise ValueError(f"{name}: expected a string, got {value!r}")
    return value


def _optional_str(value: Any, name: str) -> str | None:
    return None if value is None else _str(value, name)


def _optional_bool(value: Any, name: str) -> bool | None:
    if value is None:
        return None
    if not isinstance(value, bool):
        raise ValueError(f"{name}: expected a boolean, got {value!r}")
    return value


def _decimal(value: Any, name: str) -> Decimal:
    if isinstance(value, bool) or not isinstance(value, (int, float, str, Decimal)):
        raise ValueError(f"{name}: expected a decimal, got {value!r}")
    try:
        result = Decimal(str(value).strip())
    except InvalidOperation as exc:
        raise ValueError(f"{name}: invalid decimal {value!r}") from exc
    if not result.is_finite():
        raise ValueError(f"{name}: invalid decimal {value!r}")
    return result


def _optional_decimal(value: Any, name: str) -> Decimal | None:
    return None if value is None else _decimal(value, name)


def _list(value: Any, name: str) -> list[Any]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValueError(f"{name}: expected a list, got {value!r}")
    return value


@dataclass
class ApiToken:
    """One outcome token of a market."""

    token_id: str
    outcome: str
    price: Decimal | None = None
    winner: bool | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ApiToken:
        data = _mapping(data, "token")
        return cls(
            token_id=_str(_require(data, "token_id"), "token_id"),
            outcome=_str(_require(data, "outcome"), "outcome"),
            price=_optional_decimal(data.get("price"), "price"),
            winner=_optional_bool(data.get("winner"), "winner"),
        )


@dataclass
class ApiMarket:
    """A market as described by the data and order-book APIs."""

    condition_id: str
    question: str
    description: str | None = None
    tokens: list[ApiToken] = field(default_factory=list)
    active: bool | None = None
    closed: bool | None = None
    end_date_iso: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ApiMarket:
        data = _mapping(data, "market")
        return cls(
            condition_id=_str(_require(data, "condition_id"), "condition_id"),
            question=_str(_require(data, "question"), "question"),
            description=_optional_str(data.get("description"), "description"),
            tokens=[ApiToken.from_dict(t) for t in _list(data.get("tokens"), "tokens")],
            active=_optional_bool(data.get("active"), "active"),
            closed=_optional_bool(data.get("closed"), "closed"),
            end_date_iso=_optional_str(data.get("end_date_iso"), "end_date_iso"),
        )


_TRADE_STR_FIELDS = (
    "id",
    "taker_order_id",
    "market",
    "asset_id",
    "side",
    "maker_address",
    "taker_address",
    "timestamp",
    "transaction_hash",
)


@dataclass
class ApiTrade:
    """A trade from the REST trades endpoint."""

    id: str | None = None
    taker_order_id: str | None = None
    market: str | None = None
    asset_id: str | None = None
    side: str | None = None
    size: Decimal | None = None
    price: Decimal | None = None
    maker_address: str | None = None
    taker_address: str | None = None
    timestamp: str | None = None
    transaction_hash: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ApiTrade:
        data = _mapping(data, "trade")
        values: dict[str, Any] = {
            name: _optional_str(data.get(name), name) for name in _TRADE_STR_FIELDS
        }
        values["size"] = _optional_decimal(data.get("size"), "size")
        values["price"] = _optional_decimal(data.get("price"), "price")
        return cls(**values)


@dataclass
class WsTrade:
    """A trade pushed over the websocket, with size and price left as text."""

    id: str | None = None
    taker_order_id: str | None = None
    market: str | None = None
    asset_id: str | None = None
    side: str | None = None
    size: str | None = None
    price: str | None = None
    maker_address: str | None = None
    taker_address: str | None = None
    timestamp: str | None = None
    transaction_hash: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> WsTrade:
        data = _mapping(data, "trade")
        names = _TRADE_STR_FIELDS + ("size", "price")
        return cls(**{name: _optional_str(data.get(name), name) for name in names})


@dataclass
class WsSubscribe:
    """A websocket subscription message."""

    msg_type: str
    assets_ids: list[str]

    @classmethod
    def market(cls, asset_ids: list[str]) -> WsSubscribe:
        """Subscribe to the market channel for several assets at once."""
        return cls(msg_type="market", assets_ids=list(asset_ids))

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.msg_type, "assets_ids": list(self.assets_ids)}


@dataclass
class WsTradeEvent:
    """A last-trade-price event from the websocket."""

    event_type: str | None = None
    asset_id: str | None = None
    market: str | None = None
    side: str | None = None
    size: str | None = None
    price: str | None = None
    timestamp: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> WsTradeEvent:
        data = _mapping(data, "event")
        names = ("event_type", "asset_id", "market", "side", "size", "price", "timestamp")
        return cls(**{name: _optional_str(data.get(name), name) for name in names})


@dataclass
class ApiOrderBookLevel:
    """One price level of an order book."""

    price: Decimal
    size: Decimal

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ApiOrderBookLevel:
        data = _mapping(data, "level")
        return cls(
            price=_decimal(_require(data, "price"), "price"),
            size=_decimal(_require(data, "size"), "size"),
        )


@dataclass
class ApiOrderBook:
    """An order book snapshot for one token."""

    market: str | None = None
    asset_id: str | None = None
    bids: list[ApiOrderBookLevel] = field(default_factory=list)
    asks: list[ApiOrderBookLevel] = field(default_factory=list)
    hash: str | None = None
    timestamp: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ApiOrderBook:
        data = _mapping(data, "order book")
        return cls(
            market=_optional_str(data.get("market"), "market"),
            asset_id=_optional_str(data.get("asset_id"), "asset_id"),
            bids=[ApiOrderBookLevel.from_dict(x) for x in _list(data.get("bids"), "bids")],
            asks=[ApiOrderBookLevel.from_dict(x) for x in _list(data.get("asks"), "asks")],
            hash=_optional_str(data.get("hash"), "hash"),
            timestamp=_optional_str(data.get("timestamp"), "timestamp"),
        )

    def best_bid(self) -> ApiOrderBookLevel | None:
        """The bid with the highest price, or None when there are no bids."""
        return max(self.bids, key=lambda level: level.price, default=None)