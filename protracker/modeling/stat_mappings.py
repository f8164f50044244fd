from __future__ import annotations

from typing import Any, Mapping

from protracker.modeling.coerce import first_float
from protracker.modeling.types import Stat

# Box-score field names probed per stat, in priority order.
LOG_STAT_FIELDS: dict[Stat, tuple[str, ...]] = {
    Stat.POINTS: ("pts", "points", "PTS"),
    Stat.REBOUNDS: ("reb", "rebounds", "REB", "trb", "totalRebounds"),
    Stat.ASSISTS: ("ast", "assists", "AST"),
    Stat.THREES: ("fg3m", "3pm", "threesMade", "threePointersMade", "FG3M"),
}

LEADERBOARD_KEYS: dict[Stat, str] = {
    Stat.POINTS: "points",
    Stat.REBOUNDS: "rebounds",
    Stat.ASSISTS: "assists",
    Stat.THREES: "threes",
}

_CANONICAL = {stat.value: stat for stat in Stat}


def normalize_stat_type(label: Any) -> Stat | None:
    """Map a free-text market label onto one of the four tracked stats."""
    if label is None:
        return None
    raw = str(label).strip()
    if raw in _CANONICAL:
        return _CANONICAL[raw]
    text = raw.lower()
    if not text:
        return None
    if "point" in text or text == "pts":
        return Stat.POINTS
    if "rebound" in text or text == "reb":
        return Stat.REBOUNDS
    if "assist" in text or text == "ast":
        return Stat.ASSISTS
    if "3" in text and ("made" in text or "pm" in text or "three" in text):
        return Stat.THREES
    if text == "3pm":
        return Stat.THREES
    return None


def extract_log_stats(record: Mapping[str, Any]) -> dict[Stat, float]:
    stats: dict[Stat, float] = {}
    for stat, keys in LOG_STAT_FIELDS.items():
        value = first_float(record, keys)
        if value is not None:
            stats[stat] = value
    return stats
