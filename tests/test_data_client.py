from decimal import Decimal

import httpx
import pytest
import respx

from whalecopy.data_client import (
    CLOB_API_BASE,
    DATA_API_BASE,
    GAMMA_API_BASE,
    DataClient,
    DataClientError,
    LeaderboardEntry,
    UserTrade,
    is_bare_hex,
)

HEX64 = "ab" * 32


@pytest.fixture
def router():
    with respx.mock(assert_all_called=False) as mock:
        yield mock


@pytest.mark.parametrize(
    "value, expected",
    [
        (HEX64, True),
        ("1" * 64, False),
        ("ab" * 31, False),
        ("g" + "a" * 63, False),
        ("0x" + "ab" * 31, False),
    ],
)
def test_is_bare_hex(value, expected):
    assert is_bare_hex(value) is expected


def test_leaderboard_entry_aliases():
    entry = LeaderboardEntry.from_dict(
        {"proxyWallet": "0xw", "vol": 5000, "pnl": "250.5", "rank": "3", "userName": "whale"}
    )
    assert entry.address == "0xw"
    assert entry.volume == Decimal("5000")
    assert entry.pnl == Decimal("250.5")
    assert entry.rank == "3"
    assert entry.user_name == "whale"


def test_user_trade_aliases():
    trade = UserTrade.from_dict(
        {"asset": "123", "conditionId": "0xc", "side": "SELL", "size": 10, "timestamp": 1700000000}
    )
    assert trade.token_id == "123"
    assert trade.market == "0xc"
    assert trade.size == Decimal("10")
    assert trade.timestamp == 1700000000
    assert trade.price is None


def _leaderboard_handler(available):
    def handler(request):
        offset = int(request.url.params["offset"])
        limit = int(request.url.params["limit"])
        count = max(0, min(limit, available - offset))
        body = [{"proxyWallet": f"0x{offset + i}", "pnl": "1"} for i in range(count)]
        return httpx.Response(200, json=body)

    return handler


def test_leaderboard_paginates_and_truncates(router):
    route = router.get(f"{DATA_API_BASE}/v1/leaderboard").mock(
        side_effect=_leaderboard_handler(1000)
    )
    entries = DataClient().get_leaderboard(120)
    assert len(entries) == 120
    assert [e.address for e in entries[:2]] == ["0x0", "0x1"]
    assert route.call_count == 3
    params = route.calls.last.request.url.params
    assert params["offset"] == "100"
    assert params["timePeriod"] == "ALL"
    assert params["orderBy"] == "PNL"


def test_leaderboard_stops_on_short_page(router):
    route = router.get(f"{DATA_API_BASE}/v1/leaderboard").mock(
        side_effect=_leaderboard_handler(70)
    )
    entries = DataClient().get_leaderboard(500)
    assert len(entries) == 70
    assert route.call_count == 2


def test_leaderboard_zero_total_makes_no_request(router):
    route = router.get(f"{DATA_API_BASE}/v1/leaderboard")
    assert DataClient().get_leaderboard(0) == []
    assert route.call_count == 0


def test_resolve_prefixed_and_bare_hex(router):
    client = DataClient()
    assert client.resolve_to_condition_id("0xabc") == "0xabc"
    assert client.resolve_to_condition_id(HEX64) == "0x" + HEX64
    assert len(router.calls) == 0


def test_resolve_decimal_token_via_gamma(router):
    route = router.get(f"{GAMMA_API_BASE}/markets").mock(
        return_value=httpx.Response(200, json=[{"conditionId": "0xfound"}])
    )
    assert DataClient().resolve_to_condition_id("12345") == "0xfound"
    assert route.calls.last.request.url.params["clob_token_ids"] == "12345"


def test_resolve_unknown_token(router):
    router.get(f"{GAMMA_API_BASE}/markets").mock(return_value=httpx.Response(200, json=[]))
    with pytest.raises(DataClientError, match="no market found for token 999"):
        DataClient().resolve_to_condition_id("999")


def test_market_for_resolution(router):
    router.get(f"{CLOB_API_BASE}/markets/0x{HEX64}").mock(
        return_value=httpx.Response(
            200,
            json={
                "condition_id": "0x" + HEX64,
                "question": "Q?",
                "closed": True,
                "tokens": [{"token_id": "1", "outcome": "Yes", "winner": True}],
            },
        )
    )
    market = DataClient().get_market_for_resolution(HEX64)
    assert market.condition_id == "0x" + HEX64
    assert market.closed is True
    assert market.tokens[0].winner is True


def test_get_user_trades(router):
    route = router.get(f"{DATA_API_BASE}/trades").mock(
        return_value=httpx.Response(200, json=[{"asset": "t1", "side": "BUY", "price": "0.4"}])
    )
    trades = DataClient().get_user_trades("0xuser", 200)
    assert trades[0].token_id == "t1"
    assert trades[0].price == Decimal("0.4")
    params = route.calls.last.request.url.params
    assert params["user"] == "0xuser"
    assert params["limit"] == "200"


def test_get_trades_by_wallet(router):
    route = router.get(f"{DATA_API_BASE}/trades").mock(
        return_value=httpx.Response(200, json=[{"id": "t1", "size": "5"}])
    )
    trades = DataClient().get_trades_by_wallet("0xmaker")
    assert trades[0].id == "t1"
    assert trades[0].size == Decimal("5")
    assert route.calls.last.request.url.params["maker_address"] == "0xmaker"


def test_get_market_and_markets(router):
    router.get(f"{DATA_API_BASE}/markets/0xc").mock(
        return_value=httpx.Response(200, json={"condition_id": "0xc", "question": "Q"})
    )
    router.get(f"{DATA_API_BASE}/markets").mock(
        return_value=httpx.Response(200, json=[{"condition_id": "0xd", "question": "R"}])
    )
    client = DataClient()
    assert client.get_market("0xc").question == "Q"
    assert [m.condition_id for m in client.get_markets()] == ["0xd"]


def test_http_error_raises(router):
    router.get(f"{DATA_API_BASE}/trades").mock(return_value=httpx.Response(503))
    with pytest.raises(DataClientError):
        DataClient().get_user_trades("0xuser", 10)


def test_malformed_payload_raises(router):
    router.get(f"{DATA_API_BASE}/markets/0xc").mock(
        return_value=httpx.Response(200, json={"question": "no id"})
    )
    with pytest.raises(DataClientError):
        DataClient().get_market("0xc")