from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from whalecopy.data_client import DataClientError, UserTrade
from whalecopy.tokens import OrderSide
from whalecopy.whale_trade_poller import TradePoller

START = datetime(2024, 1, 1, tzinfo=timezone.utc)


def _ts(offset_secs):
    return int((START + timedelta(seconds=offset_secs)).timestamp())


def _trade(offset, side="BUY", token="tok", market="mkt", size="100", price="0.65"):
    return UserTrade(token_id=token, side=side, size=Decimal(size), price=Decimal(price),
                     timestamp=_ts(offset), market=market)


class FakeDataClient:
    def __init__(self, trades=None, error=None):
        self.trades = trades or []
        self.error = error
        self.calls = []

    def get_user_trades(self, address, limit):
        self.calls.append((address, limit))
        if self.error is not None:
            raise self.error
        return self.trades


def test_only_trades_after_prime_are_reported():
    poller = TradePoller(FakeDataClient())
    poller.prime(["0xabc"], START)
    events = poller.new_trades("0xabc", [_trade(-60), _trade(0), _trade(30)], START)
    assert [e.timestamp for e in events] == [START + timedelta(seconds=30)]
    event = events[0]
    assert event.wallet == "0xabc"
    assert event.side is OrderSide.BUY
    assert event.market_id == "mkt"
    assert event.asset_id == "tok"
    assert event.notional == Decimal("65.00")


def test_seen_trades_are_not_reported_twice():
    poller = TradePoller(FakeDataClient())
    poller.prime(["w"], START)
    trades = [_trade(10), _trade(20, side="sell")]
    first = poller.new_trades("w", trades, START)
    assert [e.side for e in first] == [OrderSide.BUY, OrderSide.SELL]
    assert poller.new_trades("w", trades, START) == []
    assert poller.last_seen["w"] == START + timedelta(seconds=20)


def test_unknown_side_is_dropped_but_advances_mark():
    poller = TradePoller(FakeDataClient())
    poller.prime(["w"], START)
    assert poller.new_trades("w", [_trade(50, side="HOLD")], START) == []
    assert poller.last_seen["w"] == START + timedelta(seconds=50)


def test_missing_fields_get_defaults():
    poller = TradePoller(FakeDataClient())
    poller.prime(["w"], START)
    trade = UserTrade(timestamp=_ts(5))
    [event] = poller.new_trades("w", [trade], START)
    assert event.side is OrderSide.BUY
    assert event.market_id == "unknown"
    assert event.asset_id == "unknown"
    assert event.notional == Decimal(0)


def test_poll_wallet_asks_for_ten_recent_trades():
    client = FakeDataClient(trades=[_trade(100)])
    poller = TradePoller(client)
    poller.prime(["w"], START)
    events = poller.poll_wallet("w", START)
    assert client.calls == [("w", 10)]
    assert len(events) == 1


def test_poll_wallet_propagates_client_errors():
    poller = TradePoller(FakeDataClient(error=DataClientError("boom")))
    with pytest.raises(DataClientError):
        poller.poll_wallet("w", START)


def test_unprimed_wallet_starts_from_now():
    poller = TradePoller(FakeDataClient())
    events = poller.new_trades("new", [_trade(-1), _trade(1)], START)
    assert [e.timestamp for e in events] == [START + timedelta(seconds=1)]