from __future__ import annotations

from datetime import datetime, timezone


def format_cents(amount: int | str | None, currency: str | None = None) -> str:
    if amount is None or amount == "":
        return "-"
    try:
        cents = int(amount)
    except (TypeError, ValueError):
        return str(amount)
    sign = "-" if cents < 0 else ""
    cents = abs(cents)
    value = f"{sign}{cents // 100}.{cents % 100:02d}"
    if currency:
        return f"{value} {currency.upper()}"
    return value


def format_list_timestamp(value: datetime | str | None) -> str:
    if value is None or value == "":
        return "-"
    if isinstance(value, datetime):
        dt = value
    else:
        text = str(value)
        try:
            dt = datetime.fromisoformat(text.replace("Z", "+00:00"))
        except ValueError:
            return text
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    dt = dt.astimezone(timezone.utc)
    return dt.strftime("%Y-%m-%dT%H:%M:%SZ")


def yes_no(value) -> str:
    if value is None:
        return "-"
    return "yes" if value else "no"
