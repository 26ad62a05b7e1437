# Overview: Display helpers for money and dates, registered as Jinja filters.

from __future__ import annotations

import re
from datetime import datetime
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

from .time_utils import coerce_datetime, utcnow


CURRENCIES = {
    "KES": {"symbol": "KSh", "name": "Kenyan Shilling"},
    "USD": {"symbol": "$", "name": "US Dollar"},
    "EUR": {"symbol": "€", "name": "Euro"},
    "GBP": {"symbol": "£", "name": "British Pound"},
}

DATE_FORMAT = "%b %d, %Y"
DATETIME_FORMAT = "%b %d, %Y %H:%M"
INVALID_DATE = "Invalid Date"

_NON_NUMERIC = re.compile(r"[^\d.\-]")


def format_currency(amount, code: str = "KES") -> str:
    """
    "KSh 1,234.50" style: symbol, space, grouped amount with two decimals.

    The API sends money as strings ("1234.5"); None and unparseable values
    render as zero. Unknown codes fall back to the code itself as symbol.
    """
    try:
        value = Decimal(str(amount)) if amount not in (None, "") else Decimal("0")
    except InvalidOperation:
        value = Decimal("0")
    if not value.is_finite():
        value = Decimal("0")
    value = value.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    symbol = CURRENCIES.get(code, {}).get("symbol", code)
    return f"{symbol} {value:,.2f}"


def parse_currency(text) -> float:
    """Strip everything but digits, '.' and '-'; 0 when nothing numeric is left."""
    if text is None:
        return 0.0
    cleaned = _NON_NUMERIC.sub("", str(text))
    try:
        return float(cleaned)
    except ValueError:
        return 0.0


def format_date(value, fmt: str = DATE_FORMAT) -> str:
    dt = coerce_datetime(value)
    if dt is None:
        return INVALID_DATE
    return dt.strftime(fmt)


def format_datetime(value, fmt: str = DATETIME_FORMAT) -> str:
    return format_date(value, fmt)


def _ago(count: int, unit: str) -> str:
    return f"{count} {unit}{'' if count == 1 else 's'} ago"


def relative_time(value, now: datetime | None = None) -> str:
    """
    "Just now", "5 minutes ago", "3 hours ago", "2 days ago"; older than
    30 days falls back to the plain date.
    """
    dt = coerce_datetime(value)
    if dt is None:
        return INVALID_DATE
    seconds = int(((now or utcnow()) - dt).total_seconds())
    if seconds < 60:
        return "Just now"
    if seconds < 3600:
        return _ago(seconds // 60, "minute")
    if seconds < 86400:
        return _ago(seconds // 3600, "hour")
    if seconds < 2592000:
        return _ago(seconds // 86400, "day")
    return format_date(dt)


def is_today(value, now: datetime | None = None) -> bool:
    dt = coerce_datetime(value)
    if dt is None:
        return False
    return dt.date() == (now or utcnow()).date()


def humanize_enum(value) -> str:
    """BANK_TRANSFER -> Bank Transfer"""
    if not value:
        return ""
    return str(value).replace("_", " ").title()


def humanize_key(value) -> str:
    """totalAmount -> Total amount"""
    words = re.sub(r"(?<!^)(?=[A-Z])", " ", str(value or "")).lower()
    return words[:1].upper() + words[1:]


def register_filters(app) -> None:
    app.jinja_env.filters["currency"] = lambda amount: format_currency(amount, app.config.get("CURRENCY", "KES"))
    app.jinja_env.filters["date"] = format_date
    app.jinja_env.filters["datetime"] = format_datetime
    app.jinja_env.filters["relative_time"] = relative_time
    app.jinja_env.filters["humanize"] = humanize_enum
    app.jinja_env.filters["humanize_key"] = humanize_key
    app.jinja_env.tests["today"] = is_today
