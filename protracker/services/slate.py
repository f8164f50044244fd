"""Request-level operations: load the store, run the pure core, shape results."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from protracker.core.config import settings
from protracker.core.errors import InvalidParameterError
from protracker.core.events import log_archive_written
from protracker.db.store import JsonStore
from protracker.modeling.archive import build_archive_snapshot
from protracker.modeling.edges import EdgeReport, TierThresholds, compute_edges
from protracker.modeling.leaders import compute_leaders
from protracker.modeling.line_moves import LineMoveReport, clamp_limit, diff_line_moves
from protracker.modeling.records import (
    ARCHIVE_COLLECTION,
    GAME_LOG_COLLECTION,
    SOURCE_COLLECTIONS,
    extract_prop_date,
)
from protracker.modeling.time_utils import (
    resolve_active_date,
    slate_today,
    unique_sorted_dates,
    validate_iso_date,
)
from protracker.modeling.types import PROP_SOURCES
from protracker.services.leaders_cache import LeadersCache

logger = logging.getLogger(__name__)


def configured_thresholds() -> TierThresholds:
    return TierThresholds(tier_a=settings.tier_a_min_edge, tier_b=settings.tier_b_min_edge)


def known_dates(store: JsonStore) -> list[str]:
    dataset = store.load()
    return unique_sorted_dates([*dataset.prop_dates(), *dataset.archive.keys()])


def active_date(store: JsonStore, *, today: str | None = None) -> dict[str, Any]:
    today = today or slate_today()
    dates = known_dates(store)
    return {
        "todayET": today,
        "activeDate": resolve_active_date(dates, today),
        "availableDates": dates,
    }


def props_for_date(store: JsonStore, source: str, date: str, *, limit: Any = 50) -> dict[str, Any]:
    if source not in PROP_SOURCES:
        raise InvalidParameterError("source", source, "|".join(PROP_SOURCES))
    date = validate_iso_date(date)
    limit = clamp_limit(limit, maximum=settings.props_max_limit)
    dataset = store.load()
    items = [prop.raw for prop in dataset.prop_lines[source] if prop.date == date][:limit]
    return {"date": date, "source": source, "limit": limit, "count": len(items), "props": items}


def tiered_edges(
    store: JsonStore,
    *,
    date: str | None = None,
    min_edge: Any = 0,
    games: Any = None,
    mode: str | None = None,
    today: str | None = None,
) -> EdgeReport:
    dataset = store.load()
    return compute_edges(
        dataset.game_logs,
        dataset.prop_lines,
        today=today or slate_today(),
        date=date or None,
        min_edge=min_edge,
        window=games if games is not None else settings.default_window,
        mode=mode or settings.default_projection_mode,
        thresholds=configured_thresholds(),
        max_window=settings.max_window,
    )


def archive_date(store: JsonStore, date: str | None = None, *, today: str | None = None) -> dict[str, Any]:
    """Snapshot one date's prop lines; re-archiving a date replaces the old copy."""
    with store.transaction() as document:
        if date:
            target = validate_iso_date(date)
        else:
            prop_dates = [
                extract_prop_date(record)
                for key in SOURCE_COLLECTIONS.values()
                for record in document[key]
                if isinstance(record, dict)
            ]
            target = resolve_active_date(prop_dates, today or slate_today())
        raw_sources = {source: document[key] for source, key in SOURCE_COLLECTIONS.items()}
        snapshot = build_archive_snapshot(raw_sources, target)
        replaced = target in document[ARCHIVE_COLLECTION]
        document[ARCHIVE_COLLECTION][target] = snapshot.to_dict()

    counts = {source: len(snapshot.lines_for(source)) for source in PROP_SOURCES}
    logger.info("Archived %s (%s)%s", target, counts, " replacing previous snapshot" if replaced else "")
    log_archive_written(target, counts=counts, replaced=replaced)
    return {"date": target, "ts": snapshot.ts, "counts": counts, "replaced": replaced}


def line_moves(
    store: JsonStore,
    *,
    date: str | None = None,
    source: str = "all",
    limit: Any = None,
    today: str | None = None,
) -> LineMoveReport:
    dataset = store.load()
    if date:
        target = validate_iso_date(date)
    else:
        target = resolve_active_date(dataset.prop_dates(), today or slate_today())
    return diff_line_moves(
        dataset.archive.get(target),
        dataset.prop_lines,
        date=target,
        source=source,
        limit=limit if limit is not None else settings.line_moves_default_limit,
    )


def _sample_keys(records: list[Any]) -> list[str]:
    if not records or not isinstance(records[0], dict):
        return []
    return list(records[0].keys())[:25]


def store_status(store: JsonStore, cache: LeadersCache) -> dict[str, Any]:
    document = store.read()
    collections = [GAME_LOG_COLLECTION, *SOURCE_COLLECTIONS.values()]
    return {
        "counts": {key: len(document[key]) for key in collections},
        "sampleKeys": {key: _sample_keys(document[key]) for key in collections},
        "archivedDates": sorted(document[ARCHIVE_COLLECTION].keys()),
        "cache": {"leaders": cache.status()},
    }


@dataclass(frozen=True)
class LeadersResult:
    cached: bool
    ts: str | None
    leaders: dict[str, Any]

    def to_dict(self) -> dict[str, Any]:
        return {"cached": self.cached, "ts": self.ts, "leaders": self.leaders}


def leaders(store: JsonStore, cache: LeadersCache) -> LeadersResult:
    cached, ts = cache.snapshot()
    if cached is not None:
        return LeadersResult(cached=True, ts=ts, leaders=cached.to_dict())
    computed = compute_leaders(store.load().game_logs, top_n=settings.leaders_top_n)
    return LeadersResult(cached=False, ts=None, leaders=computed.to_dict())


def warm_leaders(store: JsonStore, cache: LeadersCache) -> dict[str, Any]:
    warmed = cache.warm(store.load().game_logs)
    return {"ts": cache.ts, "players": warmed.players}
