# whalecopy

Building blocks for a bot that follows large, consistently profitable
prediction-market traders ("whales") and mirrors their positions.

The package is a library. It has no command of its own. You combine its
HTTP clients and decision helpers inside your own service loop.

## Modules

- `whalecopy.types` holds the API records:
  - `ApiMarket`, `ApiToken` and `ApiTrade`;
  - `WsTrade` and `WsTradeEvent`;
  - `ApiOrderBook` and `ApiOrderBookLevel`;
  - `WsSubscribe`.

  Each decoded record has a `from_dict` constructor, which raises
  `ValueError` on malformed data. Prices and sizes are `Decimal`.
  `WsSubscribe.market(asset_ids).to_dict()` builds a market-channel
  subscription message. `ApiOrderBook.best_bid()` returns the
  highest-priced bid.
- `whalecopy.tokens` has two parsers:
  - `parse_token_id` reads a token id as decimal first, then as hex with
    or without `0x`. It returns an integer that fits in 256 bits.
  - `parse_side` maps `"BUY"`, in any case, to `OrderSide.BUY`, and
    anything else to `OrderSide.SELL`.
- `whalecopy.timestamps.parse_trade_timestamp` turns a JSON timestamp into
  an aware UTC `datetime`. The timestamp may be integer seconds, integer
  milliseconds (values above 10^12), an integer string, or RFC 3339 text.
  It returns `None` for anything else.
- `whalecopy.gamma_client`:
  - `GammaClient.get_active_markets(limit, offset)` fetches one page of
    active, unclosed markets.
  - `GammaMarket` decodes its token id list (`parse_token_ids`), its event
    slug (`event_slug`) and its outcome labels (`outcomes_json`).
  - Failures raise `GammaClientError`.
- `whalecopy.data_client.DataClient` covers:
  - the leaderboard (`get_leaderboard`), paged 50 at a time and ranked by
    PnL;
  - user trades (`get_user_trades`) and trades by wallet;
  - market lookups;
  - `get_market_for_resolution`, which accepts a `0x` condition id, a bare
    64-character hex id or a decimal token id.

  Failures raise `DataClientError`.
- `whalecopy.notifier`:
  - `Notifier.send` posts a Markdown message to a Telegram chat. It logs
    failures instead of raising, and returns whether the message was
    accepted.
  - The formatters build message texts for copy signals, basket consensus,
    order results, position exits and market settlement:
    `format_copy_signal`, `format_consensus_alert`,
    `format_order_result`, `format_position_exit` and
    `format_market_settled`.
- `whalecopy.market_discovery`:
  - `discover_markets` pages through active markets. It keeps those at or
    above the volume and liquidity thresholds and collects their sorted,
    de-duplicated token ids.
  - `run_market_discovery` repeats the scan forever at a fixed interval.
    It hands each kept market to a `persist` callback and the token list
    to a `publish` callback.
- `whalecopy.resolution`:
  - `resolved_outcome` reads the winning side of a closed market.
  - `settlement_pnl` and `total_settlement_pnl` compute what each held
    position realises at settlement.
- `whalecopy.whale_seeder` has the filters used to pick new whales:
  - `filter_leaderboard` skips the top N entries and keeps those with
    positive PnL and volume above 1,000.
  - `is_recently_active` checks when the latest trade happened.
  - `detect_bot_or_mm` flags high-frequency bots and market makers, meaning
    wallets with both buys and sells in more than 40% of their markets.
  - `classify_pnl` and `estimate_scores` give first scores for a new whale.
- `whalecopy.whale_trade_poller.TradePoller` remembers the last trade seen
  for each wallet. `new_trades` and `poll_wallet` return only newer trades,
  as `WhaleTradeEvent`s.
- `whalecopy.position_monitor` has the exit-check helpers:
  - `best_bid`;
  - `unrealized_pnl` and `pnl_percent`;
  - `exit_reason`, which returns a stop-loss or take-profit `ExitReason`.
    The defaults are 15% and 50%, and both bounds are inclusive.
- `whalecopy.order_fill_poller` handles submitted orders:
  - `slippage_pct` computes slippage, and `is_stale` is true after more
    than five minutes.
  - `entry_outcome` gives the held outcome after an entry fill.
  - `plan_fill_action` maps an `OrderStatus`, or a failed query, to a
    `FillAction`.

## What the package does not do

- It places, signs and cancels no orders. It holds no wallet or private
  key, and it does not query balances.
- It has no database or other storage. Persisting markets, whales, trades
  and positions is left to callbacks and code you supply.
- It has no command, web API, dashboard or WebSocket listener. Apart from
  `run_market_discovery`, it has no ready-made service loops.

## Install

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Examples

Find leaderboard traders worth following:

```python
import httpx

from whalecopy.data_client import DataClient
from whalecopy.whale_seeder import detect_bot_or_mm, filter_leaderboard

with httpx.Client() as http:
    client = DataClient(http)
    entries = client.get_leaderboard(200)
    for rank, entry in filter_leaderboard(entries, skip_top_n=10):
        if not entry.address:
            continue
        trades = client.get_user_trades(entry.address, 200)
        if detect_bot_or_mm(trades) is None:
            print(rank + 1, entry.address, entry.pnl)
```

Check a held position for an exit:

```python
from decimal import Decimal

from whalecopy.position_monitor import exit_reason, pnl_percent

pct = pnl_percent(Decimal("0.40"), Decimal("0.50"))
print(exit_reason(pct, Decimal("15"), Decimal("50")))  # ExitReason.STOP_LOSS
```