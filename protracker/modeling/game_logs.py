from __future__ import annotations

import json
from datetime import date
from pathlib import Path
from typing import Any, Iterable, Mapping

from protracker.modeling.coerce import first_present, normalize_id, to_text
from protracker.modeling.name_utils import normalize_player_name, player_group_key
from protracker.modeling.records import LOG_DATE_FIELDS, LOG_PLAYER_NAME_FIELDS, PLAYER_ID_FIELDS
from protracker.modeling.time_utils import parse_iso_date
from protracker.modeling.types import GameLog, PlayerKey


def _load_jsonl(path: Path) -> Iterable[dict[str, Any]]:
    with path.open("r", encoding="utf-8") as handle:
        for line in handle:
            line = line.strip()
            if not line:
                continue
            yield json.loads(line)


def load_records(path: str | Path) -> list[dict[str, Any]]:
    """Read raw records from a ``.jsonl`` file or a ``.json`` array."""
    path = Path(path)
    if path.suffix == ".jsonl":
        rows = list(_load_jsonl(path))
    else:
        payload = json.loads(path.read_text(encoding="utf-8"))
        rows = payload if isinstance(payload, list) else [payload]
    return [row for row in rows if isinstance(row, dict)]


def matches_player(log: GameLog, player: PlayerKey) -> bool:
    if player.player_id:
        return log.player_id == player.player_id
    target = normalize_player_name(player.player_name)
    if not target:
        return False
    return normalize_player_name(log.player_name) == target


def select_player_logs(logs: Iterable[GameLog], player: PlayerKey) -> list[GameLog]:
    return [log for log in logs if matches_player(log, player)]


def sort_recent_first(logs: Iterable[GameLog]) -> list[GameLog]:
    """Newest first; undated logs trail in their original order."""
    dated = [log for log in logs if log.game_date is not None]
    undated = [log for log in logs if log.game_date is None]
    dated.sort(key=lambda entry: entry.game_date or date.min, reverse=True)
    return dated + undated


class GameLogIndex:
    """Game logs bucketed by player id and by folded name."""

    def __init__(self, logs: Iterable[GameLog]) -> None:
        self._by_id: dict[str, list[GameLog]] = {}
        self._by_name: dict[str, list[GameLog]] = {}
        for log in logs:
            if log.player_id:
                self._by_id.setdefault(log.player_id, []).append(log)
            name_key = normalize_player_name(log.player_name)
            if name_key:
                self._by_name.setdefault(name_key, []).append(log)

    def logs_for(self, player: PlayerKey) -> list[GameLog]:
        if player.player_id:
            return list(self._by_id.get(player.player_id, []))
        name_key = normalize_player_name(player.player_name)
        if not name_key:
            return []
        return list(self._by_name.get(name_key, []))


def _raw_log_key(record: Mapping[str, Any]) -> tuple[str, date | None] | None:
    player_key = player_group_key(
        normalize_id(first_present(record, PLAYER_ID_FIELDS)),
        to_text(first_present(record, LOG_PLAYER_NAME_FIELDS)),
    )
    if player_key is None:
        return None
    return player_key, parse_iso_date(first_present(record, LOG_DATE_FIELDS))


def merge_game_logs(
    existing: Iterable[dict[str, Any]],
    incoming: Iterable[dict[str, Any]],
) -> tuple[list[dict[str, Any]], int, int]:
    """Merge raw game-log records keyed on (player, game date); incoming wins.

    Returns ``(merged, added, replaced)``. Records without a player identity
    or a date cannot be deduplicated and are appended as-is.
    """
    merged: list[dict[str, Any]] = []
    positions: dict[tuple[str, date | None], int] = {}
    for record in existing:
        key = _raw_log_key(record)
        if key is not None and key[1] is not None:
            positions[key] = len(merged)
        merged.append(record)

    added = 0
    replaced = 0
    for record in incoming:
        key = _raw_log_key(record)
        if key is not None and key[1] is not None and key in positions:
            merged[positions[key]] = record
            replaced += 1
            continue
        if key is not None and key[1] is not None:
            positions[key] = len(merged)
        merged.append(record)
        added += 1
    return merged, added, replaced
