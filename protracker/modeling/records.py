"""Canonical records from loosely-shaped game-log and prop-line dicts.

Upstream feeds disagree on field names, so every logical field is resolved
through an ordered list of alternatives. This is the only place that probes
raw keys; everything downstream works with ``GameLog`` / ``PropLine``.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping

from protracker.modeling.coerce import first_float, first_present, normalize_id, to_text
from protracker.modeling.stat_mappings import extract_log_stats, normalize_stat_type
from protracker.modeling.time_utils import parse_iso_date
from protracker.modeling.types import PROP_SOURCES, ArchiveSnapshot, GameLog, PropLine

PLAYER_ID_FIELDS = ("playerId", "player_id", "pid")
PROP_PLAYER_NAME_FIELDS = ("playerName", "player_name", "name")
LOG_PLAYER_NAME_FIELDS = ("playerName", "player_name", "name", "player")
LOG_DATE_FIELDS = ("gameDate", "game_date", "date", "gamedate", "day")
PROP_DATE_FIELDS = ("date", "slateDate", "gameDate", "eventDate", "day")
PROP_STAT_FIELDS = ("statType", "market", "propType", "category", "stat")
PROP_LINE_FIELDS = ("line", "value", "points", "total", "threshold", "number")
PROP_TEAM_FIELDS = ("team", "teamAbbr", "team_abbr")

# Raw document keys holding each source's prop lines.
SOURCE_COLLECTIONS: dict[str, str] = {
    "sgo": "sgoPropLines",
    "hardrock": "hardrockPropLines",
}
GAME_LOG_COLLECTION = "nbaPlayerGameLogs"
ARCHIVE_COLLECTION = "propsArchive"


def extract_prop_date(record: Mapping[str, Any]) -> str | None:
    value = first_present(record, PROP_DATE_FIELDS)
    return to_text(value) or None


def extract_prop_line(record: Mapping[str, Any]) -> float | None:
    return first_float(record, PROP_LINE_FIELDS)


def line_field(record: Mapping[str, Any]) -> str | None:
    """Name of the field ``extract_prop_line`` reads the line from."""
    for key in PROP_LINE_FIELDS:
        if first_float(record, (key,)) is not None:
            return key
    return None


def parse_game_log(record: Any) -> GameLog | None:
    if not isinstance(record, Mapping):
        return None
    player_id = normalize_id(first_present(record, PLAYER_ID_FIELDS))
    player_name = to_text(first_present(record, LOG_PLAYER_NAME_FIELDS))
    if not player_id and not player_name:
        return None
    return GameLog(
        player_id=player_id,
        player_name=player_name,
        game_date=parse_iso_date(first_present(record, LOG_DATE_FIELDS)),
        stats=extract_log_stats(record),
        raw=dict(record),
    )


def parse_prop_line(record: Any, *, source: str) -> PropLine | None:
    if not isinstance(record, Mapping):
        return None
    player_id = normalize_id(first_present(record, PLAYER_ID_FIELDS))
    player_name = to_text(first_present(record, PROP_PLAYER_NAME_FIELDS))
    if not player_id and not player_name:
        return None
    stat_type = to_text(first_present(record, PROP_STAT_FIELDS))
    return PropLine(
        source=source,
        date=extract_prop_date(record),
        player_id=player_id,
        player_name=player_name,
        stat_type=stat_type,
        stat=normalize_stat_type(stat_type),
        line=extract_prop_line(record),
        team=to_text(first_present(record, PROP_TEAM_FIELDS)),
        raw=dict(record),
    )


def parse_game_logs(records: Iterable[Any]) -> list[GameLog]:
    logs: list[GameLog] = []
    for record in records:
        log = parse_game_log(record)
        if log is not None:
            logs.append(log)
    return logs


def parse_prop_lines(records: Iterable[Any], *, source: str) -> list[PropLine]:
    lines: list[PropLine] = []
    for record in records:
        prop = parse_prop_line(record, source=source)
        if prop is not None:
            lines.append(prop)
    return lines


def parse_archive_snapshot(payload: Any) -> ArchiveSnapshot | None:
    if not isinstance(payload, Mapping):
        return None

    def _records(key: str) -> list[dict[str, Any]]:
        value = payload.get(key)
        if not isinstance(value, list):
            return []
        return [dict(item) for item in value if isinstance(item, Mapping)]

    return ArchiveSnapshot(
        ts=to_text(payload.get("ts")),
        sgo=_records("sgo"),
        hardrock=_records("hardrock"),
    )


@dataclass(frozen=True)
class Dataset:
    game_logs: list[GameLog]
    prop_lines: dict[str, list[PropLine]]
    archive: dict[str, ArchiveSnapshot] = field(default_factory=dict)

    def prop_dates(self) -> list[str]:
        return [prop.date for lines in self.prop_lines.values() for prop in lines if prop.date]


def load_dataset(document: Mapping[str, Any]) -> Dataset:
    """Normalize a raw store document into canonical collections."""
    prop_lines = {
        source: parse_prop_lines(document.get(key) or [], source=source)
        for source, key in SOURCE_COLLECTIONS.items()
    }
    archive: dict[str, ArchiveSnapshot] = {}
    raw_archive = document.get(ARCHIVE_COLLECTION)
    if isinstance(raw_archive, Mapping):
        for date_key, payload in raw_archive.items():
            snapshot = parse_archive_snapshot(payload)
            if snapshot is not None:
                archive[str(date_key)] = snapshot
    return Dataset(
        game_logs=parse_game_logs(document.get(GAME_LOG_COLLECTION) or []),
        prop_lines={source: prop_lines.get(source, []) for source in PROP_SOURCES},
        archive=archive,
    )
