from __future__ import annotations

from datetime import date, datetime, time

from ..core.exceptions import ValidationError


def parse_iso_date(value: str, field_name: str = "date") -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime((value or "").strip(), "%Y-%m-%d").date()
    except ValueError:
        raise ValidationError(f"{field_name} must be a YYYY-MM-DD date", field=field_name)


def parse_clock_time(value: str) -> time:
    """Parse HH:MM string into time."""
    return datetime.strptime(value.strip(), "%H:%M").time()


def now_local() -> datetime:
    """Current local time (naive).

    Note: Wrapped so tests can patch/mocked easier. Every punch and period
    boundary lives in this single local frame; dates are never derived from
    UTC instants.
    """
    return datetime.now()


def minutes_of_day(value: datetime | time) -> int:
    return value.hour * 60 + value.minute
