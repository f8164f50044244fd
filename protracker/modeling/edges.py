from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Iterable, Mapping

from protracker.core.errors import InvalidParameterError
from protracker.modeling.game_logs import GameLogIndex
from protracker.modeling.rolling import parse_projection_mode, project_from_logs
from protracker.modeling.time_utils import resolve_active_date, validate_iso_date
from protracker.modeling.types import Edge, GameLog, ProjectionMode, PropLine

TIERS: tuple[str, ...] = ("A", "B", "C")
DEFAULT_WINDOW = 10
MAX_WINDOW = 30


@dataclass(frozen=True)
class TierThresholds:
    tier_a: float = 3.0
    tier_b: float = 1.5

    @classmethod
    def strict(cls) -> "TierThresholds":
        return cls(tier_a=3.0, tier_b=2.0)

    def tier_for(self, abs_edge: float) -> str:
        if abs_edge >= self.tier_a:
            return "A"
        if abs_edge >= self.tier_b:
            return "B"
        return "C"

    def to_dict(self) -> dict[str, float]:
        return {"A": self.tier_a, "B": self.tier_b}


@dataclass(frozen=True)
class EdgeReport:
    today: str
    date: str
    min_edge: float
    window: int
    mode: ProjectionMode
    thresholds: TierThresholds
    tiered: dict[str, list[Edge]]

    @property
    def total(self) -> int:
        return sum(len(edges) for edges in self.tiered.values())

    def flattened(self) -> list[Edge]:
        return [edge for tier in TIERS for edge in self.tiered[tier]]

    def to_dict(self) -> dict[str, Any]:
        counts: dict[str, int] = {"total": self.total}
        counts.update({tier: len(self.tiered[tier]) for tier in TIERS})
        return {
            "todayET": self.today,
            "date": self.date,
            "minEdge": self.min_edge,
            "gamesN": self.window,
            "mode": self.mode.value,
            "thresholds": self.thresholds.to_dict(),
            "counts": counts,
            "tiered": {tier: [edge.to_dict() for edge in self.tiered[tier]] for tier in TIERS},
        }


def clamp_window(value: Any, *, default: int = DEFAULT_WINDOW, maximum: int = MAX_WINDOW) -> int:
    if value is None or (isinstance(value, str) and not value.strip()):
        return default
    if isinstance(value, bool):
        raise InvalidParameterError("games", value, f"an integer between 1 and {maximum}")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise InvalidParameterError("games", value, f"an integer between 1 and {maximum}") from None
    if not math.isfinite(number):
        raise InvalidParameterError("games", value, f"an integer between 1 and {maximum}")
    return max(1, min(maximum, int(number)))


def validate_min_edge(value: Any) -> float:
    if value is None or (isinstance(value, str) and not value.strip()):
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise InvalidParameterError("minEdge", value, "a non-negative number") from None
    if isinstance(value, bool) or not math.isfinite(number) or number < 0:
        raise InvalidParameterError("minEdge", value, "a non-negative number")
    return number


def props_for_date(prop_lines: Mapping[str, Iterable[PropLine]], date: str) -> list[PropLine]:
    return [prop for lines in prop_lines.values() for prop in lines if prop.date == date]


def build_edge(
    prop: PropLine,
    index: GameLogIndex,
    *,
    date: str,
    window: int,
    mode: ProjectionMode,
    min_edge: float,
    thresholds: TierThresholds,
) -> Edge | None:
    if prop.stat is None or prop.line is None:
        return None
    player_logs = index.logs_for(prop.player)
    if not player_logs:
        return None
    projection = project_from_logs(player_logs, prop.stat, window, mode)
    if projection is None:
        return None

    edge = projection.projection - prop.line
    abs_edge = abs(edge)
    if abs_edge < min_edge:
        return None
    return Edge(
        tier=thresholds.tier_for(abs_edge),
        source=prop.source,
        date=date,
        player_id=prop.player_id,
        player_name=prop.player_name or None,
        team=prop.team or None,
        stat=projection.stat,
        games_used=projection.games_used,
        projection=round(projection.projection, 2),
        line=round(prop.line, 2),
        edge=round(edge, 2),
        abs_edge=round(abs_edge, 2),
        raw_prop=prop.raw,
    )


def compute_edges(
    game_logs: Iterable[GameLog],
    prop_lines: Mapping[str, Iterable[PropLine]],
    *,
    today: str,
    date: str | None = None,
    min_edge: Any = 0,
    window: Any = DEFAULT_WINDOW,
    mode: ProjectionMode | str = ProjectionMode.WEIGHTED,
    thresholds: TierThresholds | None = None,
    max_window: int = MAX_WINDOW,
) -> EdgeReport:
    """Compare every prop line on the slate date against rolling projections.

    Props that cannot be resolved (unknown stat, no logs, no numeric line)
    are skipped. Raises InvalidParameterError for malformed parameters.
    """
    thresholds = thresholds or TierThresholds()
    projection_mode = parse_projection_mode(mode)
    games = clamp_window(window, maximum=max_window)
    floor = validate_min_edge(min_edge)
    prop_lines = {source: list(lines) for source, lines in prop_lines.items()}

    if date:
        slate_date = validate_iso_date(date)
    else:
        slate_date = resolve_active_date(
            (prop.date for lines in prop_lines.values() for prop in lines),
            today,
        )

    index = GameLogIndex(game_logs)
    tiered: dict[str, list[Edge]] = {tier: [] for tier in TIERS}
    for prop in props_for_date(prop_lines, slate_date):
        edge = build_edge(
            prop,
            index,
            date=slate_date,
            window=games,
            mode=projection_mode,
            min_edge=floor,
            thresholds=thresholds,
        )
        if edge is not None:
            tiered[edge.tier].append(edge)

    for edges in tiered.values():
        edges.sort(key=lambda entry: entry.abs_edge, reverse=True)

    return EdgeReport(
        today=today,
        date=slate_date,
        min_edge=floor,
        window=games,
        mode=projection_mode,
        thresholds=thresholds,
        tiered=tiered,
    )
