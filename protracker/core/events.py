"""Structured JSON logging for store and slate events.

Writes one JSON line per event to a configurable log file. Events include
archive writes, leaderboard cache warms, record imports, store recoveries
and simulated line changes.
"""
from __future__ import annotations

import json
import threading
from collections import Counter
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Iterator


_LOG_PATH: Path | None = None
_LOCK = threading.Lock()


def set_log_path(path: str | Path | None) -> None:
    global _LOG_PATH  # noqa: PLW0603
    if path is None:
        _LOG_PATH = None
        return
    _LOG_PATH = Path(path)
    _LOG_PATH.parent.mkdir(parents=True, exist_ok=True)


def _emit(event: dict[str, Any]) -> None:
    path = _LOG_PATH
    if path is None:
        return
    payload = {"ts": datetime.now(timezone.utc).isoformat(), **event}
    with _LOCK, path.open("a", encoding="utf-8") as handle:
        handle.write(json.dumps(payload, default=str) + "\n")


# ---------------------------------------------------------------------------
# Store events
# ---------------------------------------------------------------------------
def log_store_recovered(path: str, *, backup_path: str) -> None:
    _emit({"event": "store_recovered", "path": path, "backup_path": backup_path})


def log_import(*, game_logs_added: int, game_logs_replaced: int, prop_lines_added: dict[str, int]) -> None:
    _emit({
        "event": "import",
        "game_logs_added": game_logs_added,
        "game_logs_replaced": game_logs_replaced,
        "prop_lines_added": prop_lines_added,
    })


# ---------------------------------------------------------------------------
# Slate events
# ---------------------------------------------------------------------------
def log_archive_written(date: str, *, counts: dict[str, int], replaced: bool) -> None:
    _emit({"event": "archive_written", "date": date, "counts": counts, "replaced": replaced})


def log_leaders_warmed(*, players: int, elapsed_ms: float) -> None:
    _emit({"event": "leaders_warmed", "players": players, "elapsed_ms": round(elapsed_ms, 1)})


def log_line_simulated(
    source: str,
    date: str,
    *,
    player: str,
    stat: str,
    old_line: float,
    new_line: float,
) -> None:
    _emit({
        "event": "line_simulated",
        "source": source,
        "date": date,
        "player": player,
        "stat": stat,
        "old_line": old_line,
        "new_line": new_line,
    })


# ---------------------------------------------------------------------------
# Summary report
# ---------------------------------------------------------------------------
def _recent_entries(path: Path, since: datetime) -> Iterator[dict[str, Any]]:
    with path.open(encoding="utf-8") as handle:
        for raw in handle:
            try:
                entry = json.loads(raw)
                ts = datetime.fromisoformat(entry["ts"])
            except (json.JSONDecodeError, KeyError, TypeError, ValueError):
                continue
            if ts.tzinfo is None:
                ts = ts.replace(tzinfo=timezone.utc)
            if ts >= since:
                yield entry


def generate_event_report(log_path: str | Path, hours: int = 24) -> dict[str, Any]:
    """Count events by type over the last ``hours`` of the JSONL log."""
    path = Path(log_path)
    if not path.is_file():
        return {"error": "Log file not found", "path": str(path)}

    since = datetime.now(timezone.utc) - timedelta(hours=hours)
    counts: Counter[str] = Counter()
    archived_dates: set[str] = set()
    last_recovery: str | None = None
    for entry in _recent_entries(path, since):
        event = entry.get("event", "unknown")
        counts[event] += 1
        if event == "archive_written" and entry.get("date"):
            archived_dates.add(str(entry["date"]))
        elif event == "store_recovered":
            last_recovery = entry.get("backup_path")

    return {
        "hours": hours,
        "counts": dict(counts),
        "archived_dates": sorted(archived_dates),
        "last_recovery": last_recovery,
    }
