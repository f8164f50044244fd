from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Mapping

from protracker.core.errors import InvalidParameterError
from protracker.modeling.name_utils import normalize_player_name
from protracker.modeling.records import parse_prop_lines
from protracker.modeling.time_utils import validate_iso_date
from protracker.modeling.types import PROP_SOURCES, ArchiveSnapshot, LineMove, PropLine, Stat

ALL_SOURCES = "all"
DEFAULT_LIMIT = 50
MAX_LIMIT = 500

MoveKey = tuple[str, str, Stat]


@dataclass(frozen=True)
class LineMoveReport:
    date: str
    exists: bool
    source: str
    limit: int
    archived_at: str | None
    archived_counts: dict[str, int]
    current_counts: dict[str, int]
    total_moves: int
    moves: list[LineMove]

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "date": self.date,
            "exists": self.exists,
            "source": self.source,
            "limit": self.limit,
            "archivedAt": self.archived_at,
            "counts": {
                "archived": self.archived_counts,
                "current": self.current_counts,
                "moves": self.total_moves,
            },
            "moves": [move.to_dict() for move in self.moves],
        }
        if not self.exists:
            payload["message"] = f"No archive for {self.date}. Archive the slate before diffing line moves."
        return payload


def validate_source(value: Any) -> str:
    text = str(value or ALL_SOURCES).strip().lower()
    if text != ALL_SOURCES and text not in PROP_SOURCES:
        raise InvalidParameterError("source", value, "|".join((ALL_SOURCES, *PROP_SOURCES)))
    return text


def clamp_limit(value: Any, *, default: int = DEFAULT_LIMIT, maximum: int = MAX_LIMIT) -> int:
    if value is None or (isinstance(value, str) and not value.strip()):
        return default
    try:
        number = int(float(value))
    except (TypeError, ValueError, OverflowError):
        raise InvalidParameterError("limit", value, f"an integer between 1 and {maximum}") from None
    return max(1, min(maximum, number))


def move_key(prop: PropLine) -> MoveKey | None:
    """Identity of a prop line independent of its current value."""
    if prop.stat is None:
        return None
    player = prop.player_id or normalize_player_name(prop.player_name)
    if not player:
        return None
    return prop.source, player, prop.stat


def _selected_sources(source: str) -> tuple[str, ...]:
    return PROP_SOURCES if source == ALL_SOURCES else (source,)


def index_opening_lines(snapshot: ArchiveSnapshot, sources: Iterable[str]) -> dict[MoveKey, float]:
    opening: dict[MoveKey, float] = {}
    for source in sources:
        for prop in parse_prop_lines(snapshot.lines_for(source), source=source):
            key = move_key(prop)
            if key is None or prop.line is None:
                continue
            opening[key] = prop.line
    return opening


def diff_line_moves(
    snapshot: ArchiveSnapshot | None,
    live_lines: Mapping[str, Iterable[PropLine]],
    *,
    date: str,
    source: str = ALL_SOURCES,
    limit: Any = DEFAULT_LIMIT,
) -> LineMoveReport:
    """Compare an archived slate against the live lines for the same date.

    Only changed lines are reported, largest absolute move first.
    """
    date = validate_iso_date(date)
    source = validate_source(source)
    limit = clamp_limit(limit)
    live_for_date = {
        name: [prop for prop in live_lines.get(name, []) if prop.date == date]
        for name in PROP_SOURCES
    }
    current_counts = {name: len(lines) for name, lines in live_for_date.items()}

    if snapshot is None:
        return LineMoveReport(
            date=date,
            exists=False,
            source=source,
            limit=limit,
            archived_at=None,
            archived_counts={name: 0 for name in PROP_SOURCES},
            current_counts=current_counts,
            total_moves=0,
            moves=[],
        )

    sources = _selected_sources(source)
    opening = index_opening_lines(snapshot, sources)
    moves: list[LineMove] = []
    for name in sources:
        for prop in live_for_date[name]:
            key = move_key(prop)
            if key is None or prop.line is None:
                continue
            open_line = opening.get(key)
            if open_line is None:
                continue
            delta = prop.line - open_line
            if delta == 0:
                continue
            moves.append(
                LineMove(
                    source=name,
                    player_id=prop.player_id,
                    player_name=prop.player_name,
                    team=prop.team or None,
                    stat_type=prop.stat,
                    open_line=open_line,
                    cur_line=prop.line,
                    delta=delta,
                    abs_delta=abs(delta),
                )
            )

    moves.sort(key=lambda move: move.abs_delta, reverse=True)
    return LineMoveReport(
        date=date,
        exists=True,
        source=source,
        limit=limit,
        archived_at=snapshot.ts or None,
        archived_counts={name: len(snapshot.lines_for(name)) for name in PROP_SOURCES},
        current_counts=current_counts,
        total_moves=len(moves),
        moves=moves[:limit],
    )
