from decimal import Decimal

import pytest

from whalecopy.types import (
    ApiMarket,
    ApiOrderBook,
    ApiOrderBookLevel,
    ApiToken,
    ApiTrade,
    WsSubscribe,
    WsTrade,
    WsTradeEvent,
)


def test_market_with_tokens():
    market = ApiMarket.from_dict(
        {
            "condition_id": "0xabc",
            "question": "Will it rain?",
            "closed": True,
            "tokens": [
                {"token_id": "1", "outcome": "Yes", "price": "0.65", "winner": True},
                {"token_id": "2", "outcome": "No", "price": 0.35},
            ],
        }
    )
    assert market.condition_id == "0xabc"
    assert market.closed is True
    assert market.active is None
    assert market.tokens[0].price == Decimal("0.65")
    assert market.tokens[0].winner is True
    assert market.tokens[1].price == Decimal("0.35")
    assert market.tokens[1].winner is None


def test_market_defaults_to_no_tokens():
    market = ApiMarket.from_dict({"condition_id": "c", "question": "q"})
    assert market.tokens == []
    assert market.description is None


def test_market_requires_condition_id():
    with pytest.raises(ValueError):
        ApiMarket.from_dict({"question": "q"})


def test_token_requires_outcome():
    with pytest.raises(ValueError):
        ApiToken.from_dict({"token_id": "1"})


def test_invalid_decimal_is_rejected():
    with pytest.raises(ValueError):
        ApiToken.from_dict({"token_id": "1", "outcome": "Yes", "price": "abc"})


def test_trade_fields_are_optional():
    trade = ApiTrade.from_dict({})
    assert trade.id is None
    assert trade.size is None
    assert trade.transaction_hash is None


def test_trade_parses_decimals():
    trade = ApiTrade.from_dict({"id": "t1", "size": "100", "price": "0.5", "side": "BUY"})
    assert trade.size == Decimal("100")
    assert trade.price == Decimal("0.5")
    assert trade.side == "BUY"


def test_ws_trade_keeps_text():
    trade = WsTrade.from_dict({"size": "12.5", "price": "0.4"})
    assert trade.size == "12.5"
    assert trade.price == "0.4"


def test_ws_trade_event():
    event = WsTradeEvent.from_dict({"event_type": "last_trade_price", "asset_id": "a1"})
    assert event.event_type == "last_trade_price"
    assert event.asset_id == "a1"
    assert event.side is None


def test_subscribe_message_format():
    message = WsSubscribe.market(["id1", "id2"]).to_dict()
    assert message == {"type": "market", "assets_ids": ["id1", "id2"]}


def test_subscribe_copies_asset_ids():
    ids = ["id1"]
    sub = WsSubscribe.market(ids)
    ids.append("id2")
    assert sub.assets_ids == ["id1"]


def test_level_requires_size():
    with pytest.raises(ValueError):
        ApiOrderBookLevel.from_dict({"price": "0.5"})


def test_best_bid_is_highest_price():
    book = ApiOrderBook.from_dict(
        {
            "bids": [
                {"price": "0.40", "size": "10"},
                {"price": "0.55", "size": "3"},
                {"price": "0.50", "size": "7"},
            ],
            "asks": [],
        }
    )
    best = book.best_bid()
    assert best.price == Decimal("0.55")
    assert best.size == Decimal("3")
    assert all(level.price <= best.price for level in book.bids)


def test_best_bid_empty_book():
    assert ApiOrderBook.from_dict({}).best_bid() is None