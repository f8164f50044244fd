"""Coercion helpers for loosely-shaped feed records.

NaN/Inf, booleans posing as numbers and float-typed ids are handled here
once so the record parsers can stay declarative.
"""
from __future__ import annotations

import math
from typing import Any, Iterable, Mapping


def to_float(value: Any) -> float | None:
    """Finite float from a number or numeric string, else None."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    elif not isinstance(value, (int, float)):
        return None
    try:
        number = float(value)
    except (ValueError, OverflowError):
        return None
    return number if math.isfinite(number) else None


def normalize_id(value: Any) -> str | None:
    """Canonical string id; ``2544``, ``2544.0`` and ``"2544.0"`` all map to ``"2544"``."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, float):
        if not math.isfinite(value):
            return None
        return str(int(value)) if value.is_integer() else repr(value)
    text = str(value).strip()
    head, dot, tail = text.rpartition(".")
    if dot and tail == "0" and head.isdigit():
        return head
    return text or None


def to_text(value: Any) -> str:
    return "" if value is None else str(value).strip()


def first_present(record: Mapping[str, Any], keys: Iterable[str]) -> Any:
    """Return the first value under ``keys`` that is neither missing nor blank."""
    for key in keys:
        value = record.get(key)
        if value is None or (isinstance(value, str) and not value.strip()):
            continue
        return value
    return None


def first_float(record: Mapping[str, Any], keys: Iterable[str]) -> float | None:
    """Return the first value under ``keys`` that parses to a finite number."""
    for key in keys:
        number = to_float(record.get(key))
        if number is not None:
            return number
    return None
