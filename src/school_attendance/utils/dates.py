from __future__ import annotations

from datetime import date, timedelta

ISO_FORMAT = "%Y-%m-%d"


class InvalidDate(ValueError):
    pass


def parse_iso_date(value: date | str) -> date:
    if isinstance(value, date):
        return value

    try:
        moment = date.fromisoformat(value)
    except (TypeError, ValueError) as exc:
        raise InvalidDate(f"Expected a YYYY-MM-DD date, got {value!r}.") from exc

    # fromisoformat also takes compact forms such as 20240101
    if moment.isoformat() != value:
        raise InvalidDate(f"Expected a YYYY-MM-DD date, got {value!r}.")
    return moment


def today_iso(*, today: date | None = None) -> str:
    """Local wall-clock date as ``YYYY-MM-DD``."""
    return (today or date.today()).strftime(ISO_FORMAT)


def shift_iso_date(value: date | str, days: int) -> str:
    moment = parse_iso_date(value) + timedelta(days=days)
    return moment.strftime(ISO_FORMAT)
