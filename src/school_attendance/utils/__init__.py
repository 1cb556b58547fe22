from .dates import InvalidDate, parse_iso_date, shift_iso_date, today_iso

__all__ = ["InvalidDate", "parse_iso_date", "shift_iso_date", "today_iso"]
