"""Telegram notifications and the message texts the bot sends."""

from __future__ import annotations

import logging
from decimal import ROUND_HALF_EVEN, Decimal

import httpx

from whalecopy.tokens import OrderSide

logger = logging.getLogger(__name__)

TELEGRAM_API_BASE = "https://api.telegram.org"


def _fmt(value: Decimal) -> str:
    """Plain positional text for a decimal, never in exponent form."""
    if value == 0:
        value = abs(value)
    return format(value, "f")


def _round_dp(value: Decimal, places: int) -> Decimal:
    """Round half-even to at most ``places`` decimals, keeping shorter values as they are."""
    exponent = value.as_tuple().exponent
    if isinstance(exponent, int) and exponent >= -places:
        return value
    return value.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_EVEN)


class Notifier:
    """Sends Telegram messages; failures are logged and never raised."""

    def __init__(self, bot_token: str, chat_id: str, http: httpx.Client | None = None):
        self._bot_token = bot_token
        self._chat_id = chat_id
        self._http = http if http is not None else httpx.Client()

    def send(self, message: str) -> bool:
        """Send ``message`` as Markdown. Returns whether the API accepted it."""
        url = f"{TELEGRAM_API_BASE}/bot{self._bot_token}/sendMessage"
        body = {"chat_id": self._chat_id, "text": message, "parse_mode": "Markdown"}
        try:
            response = self._http.post(url, json=body)
        except httpx.HTTPError as exc:
            logger.warning("Failed to send Telegram notification: %s", exc)
            return False
        if not response.is_success:
            logger.warning("Telegram sendMessage returned non-2xx: %s", response.status_code)
            return False
        return True


def shorten_wallet(wallet: str) -> str:
    """Abbreviate a wallet address to its first six and last four characters."""
    if len(wallet) > 10:
        return f"{wallet[:6]}...{wallet[-4:]}"
    return wallet


def side_label(side: str) -> str:
    if side.upper() == "BUY":
        return "买入 YES 🟢 看多"
    return "卖出 YES 🔴 看空"


def market_label(market_question: str | None, market_id: str) -> str:
    """The market question, or the start of its id when there is none."""
    if market_question:
        return market_question
    return f"{market_id[:20]}..."


def pnl_sign(value: Decimal) -> str:
    """A profit or loss with an explicit plus sign when not negative."""
    if value >= 0:
        return f"+{_fmt(value)}"
    return _fmt(value)


def _side_text(side: str | OrderSide) -> str:
    return side.value if isinstance(side, OrderSide) else str(side)


def format_copy_signal(
    wallet: str,
    market_id: str,
    side: str | OrderSide,
    size: Decimal,
    price: Decimal,
    notional: Decimal,
    win_rate: Decimal,
    kelly: Decimal,
    ev_copy: Decimal,
    market_question: str | None = None,
) -> str:
    """Message for a whale trade that passed every gate."""
    market = market_label(market_question, market_id)
    side_cn = side_label(_side_text(side))
    wr = _round_dp(win_rate * 100, 1)
    return (
        "🐋 *跟单信号*\n\n"
        f"📍 {market}\n"
        f"💰 {side_cn}  {_fmt(size)} 份 @ ${_fmt(price)}\n"
        f"💵 ${_fmt(_round_dp(notional, 2))} USDC\n\n"
        f"📊 巨鲸: `{shorten_wallet(wallet)}`\n"
        f"├ 胜率 {_fmt(wr)}% | 凯利 {_fmt(_round_dp(kelly, 3))}\n"
        f"└ 调整后EV ${_fmt(_round_dp(ev_copy, 2))}"
    )


def format_consensus_alert(
    basket_name: str,
    direction: str,
    consensus_pct: Decimal,
    participating: int,
    total: int,
    market_id: str,
    market_question: str | None,
    price: Decimal,
    notional: Decimal,
) -> str:
    """Message for a basket reaching consensus on a market."""
    market = market_label(market_question, market_id)
    side_cn = side_label(direction)
    pct = _round_dp(consensus_pct * 100, 0)
    dir_cn = "看多" if direction.upper() == "BUY" else "看空"
    return (
        "🎯 *篮子共识达成*\n\n"
        f"📦 {basket_name} | 共识 {_fmt(pct)}% ({participating}/{total})\n"
        f"📍 {market}\n"
        f"💰 {side_cn}  当前价 ${_fmt(price)}\n"
        f"💵 触发交易: ${_fmt(_round_dp(notional, 2))} USDC\n\n"
        f"{participating}位高手48小时内一致{dir_cn}"
    )


def format_order_result(
    market_id: str,
    side: str,
    size: Decimal,
    target_price: Decimal,
    fill_price: Decimal | None,
    success: bool,
    error: str | None = None,
    market_question: str | None = None,
) -> str:
    """Message for a copy order that filled or failed."""
    market = market_label(market_question, market_id)
    side_cn = side_label(side)
    if success:
        fill = fill_price if fill_price is not None else target_price
        return (
            "✅ *订单成交*\n\n"
            f"📍 {market}\n"
            f"💰 {side_cn}  {_fmt(size)} 份 @ ${_fmt(fill)}"
        )
    return (
        "❌ *订单失败*\n\n"
        f"📍 {market}\n"
        f"💰 {side_cn}  {_fmt(size)} 份\n"
        f"⚠️ 原因: {error if error is not None else 'unknown'}"
    )


_EXIT_REASONS = {"stop_loss": "止损", "take_profit": "止盈"}


def format_position_exit(
    market_question: str | None,
    market_id: str,
    reason: str,
    entry_price: Decimal,
    exit_price: Decimal,
    realized_pnl: Decimal,
    pnl_pct: Decimal,
) -> str:
    """Message for a position closed by stop-loss or take-profit."""
    market = market_label(market_question, market_id)
    reason_cn = _EXIT_REASONS.get(reason, reason)
    return (
        "📤 *持仓平仓*\n\n"
        f"📍 {market}\n"
        f"⚡ 触发: {reason_cn}\n"
        f"💰 入场 ${_fmt(entry_price)} → 出场 ${_fmt(exit_price)}\n"
        f"📊 盈亏: {pnl_sign(_round_dp(realized_pnl, 2))} USDC "
        f"({pnl_sign(_round_dp(pnl_pct, 2))}%)"
    )


_OUTCOMES = {
    "resolved_yes": "Yes ✅",
    "resolved yes": "Yes ✅",
    "resolved_no": "No ❎",
    "resolved no": "No ❎",
}


def format_market_settled(
    market_question: str | None,
    market_id: str,
    outcome: str,
    positions_closed: int,
    total_pnl: Decimal,
) -> str:
    """Message for a market that resolved and had its positions settled."""
    market = market_label(market_question, market_id)
    outcome_cn = _OUTCOMES.get(outcome, outcome)
    return (
        "🏁 *市场结算*\n\n"
        f"📍 {market}\n"
        f"🎯 结果: {outcome_cn}\n"
        f"📦 平仓: {positions_closed} 个持仓\n"
        f"📊 总盈亏: {pnl_sign(_round_dp(total_pnl, 2))} USDC"
    )