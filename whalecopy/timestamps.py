"""Parsing of trade timestamps in the shapes the data API uses."""

from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone
from typing import Any

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_MILLIS_THRESHOLD = 1_000_000_000_000
_I64_MIN = -(2**63)
_I64_MAX = 2**63 - 1

_INTEGER = re.compile(r"[+-]?[0-9]+")
_RFC3339 = re.compile(
    r"([0-9]{4})-([0-9]{2})-([0-9]{2})[Tt ]([0-9]{2}):([0-9]{2}):([0-9]{2})"
    r"(?:\.([0-9]+))?([Zz]|[+-][0-9]{2}:[0-9]{2})"
)


def _from_epoch(number: int) -> datetime | None:
    if number > _MILLIS_THRESHOLD:
        seconds, millis = divmod(number, 1000)
    else:
        seconds, millis = number, 0
    try:
        return _EPOCH + timedelta(seconds=seconds, milliseconds=millis)
    except OverflowError:
        return None


def _from_rfc3339(text: str) -> datetime | None:
    match = _RFC3339.fullmatch(text)
    if match is None:
        return None
    year, month, day, hour, minute, second, fraction, offset = match.groups()
    micros = int((fraction or "0")[:6].ljust(6, "0"))
    if offset in ("Z", "z"):
        tz = timezone.utc
    else:
        sign = -1 if offset[0] == "-" else 1
        hours, minutes = int(offset[1:3]), int(offset[4:6])
        if hours > 23 or minutes > 59:
            return None
        tz = timezone(sign * timedelta(hours=hours, minutes=minutes))
    try:
        parsed = datetime(
            int(year), int(month), int(day), int(hour), int(minute), int(second), micros, tz
        )
        return parsed.astimezone(timezone.utc)
    except (ValueError, OverflowError):
        return None


def parse_trade_timestamp(value: Any) -> datetime | None:
    """Turn a JSON timestamp into an aware UTC datetime.

    Integers (or integer strings) above 10^12 are milliseconds, otherwise
    seconds; other strings are read as RFC 3339. Anything else gives None.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        if not _I64_MIN <= value <= _I64_MAX:
            return None
        return _from_epoch(value)
    if isinstance(value, str):
        if _INTEGER.fullmatch(value):
            number = int(value)
            if _I64_MIN <= number <= _I64_MAX:
                return _from_epoch(number)
        return _from_rfc3339(value)
    return None