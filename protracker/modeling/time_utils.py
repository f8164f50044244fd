from __future__ import annotations

import re
from datetime import date, datetime
from typing import Any, Iterable
from zoneinfo import ZoneInfo

from protracker.core.config import settings
from protracker.core.errors import InvalidParameterError

ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def slate_zone() -> ZoneInfo:
    return ZoneInfo(settings.timezone)


def slate_now() -> datetime:
    return datetime.now(tz=slate_zone())


def slate_today() -> str:
    return slate_now().date().isoformat()


def parse_iso_date(value: Any) -> date | None:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None
    text = value.strip()
    if not ISO_DATE_RE.match(text):
        return None
    try:
        return date.fromisoformat(text)
    except ValueError:
        return None


def is_valid_iso_date(value: Any) -> bool:
    return isinstance(value, str) and parse_iso_date(value) is not None


def validate_iso_date(value: Any, *, name: str = "date") -> str:
    if not is_valid_iso_date(value):
        raise InvalidParameterError(name, value, "YYYY-MM-DD")
    return value.strip()


def unique_sorted_dates(values: Iterable[Any]) -> list[str]:
    return sorted({value.strip() for value in values if is_valid_iso_date(value)})


def resolve_active_date(dates: Iterable[Any], today: str) -> str:
    """Nearest date on or after ``today``; else the latest known date; else ``today``."""
    known = unique_sorted_dates(dates)
    if not known:
        return today
    for value in known:
        if value >= today:
            return value
    return known[-1]
