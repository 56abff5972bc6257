import pytest

from whalecopy.tokens import OrderSide, parse_side, parse_token_id


def test_decimal_token_id():
    assert parse_token_id("12345") == 12345


def test_decimal_preferred_over_hex():
    assert parse_token_id("10") == 10


def test_hex_round_trip():
    value = 2**200 + 77
    assert parse_token_id("0x" + format(value, "x")) == value


def test_bare_hex_matches_prefixed():
    assert parse_token_id("abcdef") == parse_token_id("0xabcdef")


def test_max_u256_accepted():
    top = 2**256 - 1
    assert parse_token_id(str(top)) == top


def test_overflow_rejected():
    with pytest.raises(ValueError):
        parse_token_id(str(2**256))


@pytest.mark.parametrize("bad", ["xyz", "", "0x", "12 34", "-5", "1_000"])
def test_invalid_token_ids(bad):
    with pytest.raises(ValueError):
        parse_token_id(bad)


@pytest.mark.parametrize(
    "text, expected",
    [
        ("BUY", OrderSide.BUY),
        ("buy", OrderSide.BUY),
        ("SELL", OrderSide.SELL),
        ("sell", OrderSide.SELL),
        ("hold", OrderSide.SELL),
    ],
)
def test_parse_side(text, expected):
    assert parse_side(text) is expected