from __future__ import annotations

import copy
from datetime import datetime, timezone
from typing import Any, Iterable, Mapping

from protracker.modeling.records import extract_prop_date
from protracker.modeling.time_utils import validate_iso_date
from protracker.modeling.types import ArchiveSnapshot


def _lines_on(records: Iterable[Any], date: str) -> list[dict[str, Any]]:
    return [
        copy.deepcopy(dict(record))
        for record in records
        if isinstance(record, Mapping) and extract_prop_date(record) == date
    ]


def build_archive_snapshot(
    raw_sources: Mapping[str, Iterable[Any]],
    date: str,
    *,
    now: datetime | None = None,
) -> ArchiveSnapshot:
    """Freeze a copy of one date's prop lines from both books."""
    date = validate_iso_date(date)
    ts = (now or datetime.now(timezone.utc)).isoformat()
    return ArchiveSnapshot(
        ts=ts,
        sgo=_lines_on(raw_sources.get("sgo") or [], date),
        hardrock=_lines_on(raw_sources.get("hardrock") or [], date),
    )
