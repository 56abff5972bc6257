"""Token identifiers and order sides."""

from __future__ import annotations

import enum
import string

_U256_MAX = 2**256 - 1
_HEX_DIGITS = frozenset(string.hexdigits)


class OrderSide(enum.Enum):
    BUY = "BUY"
    SELL = "SELL"


def _parse_digits(text: str, base: int, original: str) -> int:
    allowed = frozenset(string.digits) if base == 10 else _HEX_DIGITS
    if not text or any(ch not in allowed for ch in text):
        raise ValueError(f"invalid token id: {original!r}")
    value = int(text, base)
    if value > _U256_MAX:
        raise ValueError(f"token id does not fit in 256 bits: {original!r}")
    return value


def parse_token_id(token_id: str) -> int:
    """Parse a token id as decimal, falling back to hex with or without 0x."""
    try:
        return _parse_digits(token_id, 10, token_id)
    except ValueError:
        pass
    hex_text = token_id[2:] if token_id.startswith("0x") else token_id
    return _parse_digits(hex_text, 16, token_id)


def parse_side(side: str) -> OrderSide:
    """"BUY" in any case is a buy; anything else is a sell."""
    return OrderSide.BUY if side.upper() == "BUY" else OrderSide.SELL