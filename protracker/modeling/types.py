from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any

PROP_SOURCES: tuple[str, ...] = ("sgo", "hardrock")


class Stat(str, Enum):
    POINTS = "PTS"
    REBOUNDS = "REB"
    ASSISTS = "AST"
    THREES = "3PM"


class ProjectionMode(str, Enum):
    FLAT = "flat"
    WEIGHTED = "weighted"


@dataclass(frozen=True)
class PlayerKey:
    player_id: str | None
    player_name: str


@dataclass(frozen=True)
class GameLog:
    player_id: str | None
    player_name: str
    game_date: date | None
    stats: dict[Stat, float]
    raw: dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @property
    def player(self) -> PlayerKey:
        return PlayerKey(self.player_id, self.player_name)


@dataclass(frozen=True)
class PropLine:
    source: str
    date: str | None
    player_id: str | None
    player_name: str
    stat_type: str
    stat: Stat | None
    line: float | None
    team: str
    raw: dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @property
    def player(self) -> PlayerKey:
        return PlayerKey(self.player_id, self.player_name)


@dataclass(frozen=True)
class Projection:
    stat: Stat
    games_used: int
    projection: float


@dataclass(frozen=True)
class Edge:
    tier: str
    source: str
    date: str
    player_id: str | None
    player_name: str | None
    team: str | None
    stat: Stat
    games_used: int
    projection: float
    line: float
    edge: float
    abs_edge: float
    raw_prop: dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    def to_dict(self) -> dict[str, Any]:
        return {
            "tier": self.tier,
            "source": self.source,
            "date": self.date,
            "playerId": self.player_id,
            "playerName": self.player_name,
            "team": self.team,
            "stat": self.stat.value,
            "gamesUsed": self.games_used,
            "projection": self.projection,
            "line": self.line,
            "edge": self.edge,
            "absEdge": self.abs_edge,
            "rawProp": self.raw_prop,
        }


@dataclass(frozen=True)
class ArchiveSnapshot:
    ts: str
    sgo: list[dict[str, Any]]
    hardrock: list[dict[str, Any]]

    def lines_for(self, source: str) -> list[dict[str, Any]]:
        if source == "sgo":
            return self.sgo
        if source == "hardrock":
            return self.hardrock
        return []

    def to_dict(self) -> dict[str, Any]:
        return {"ts": self.ts, "sgo": self.sgo, "hardrock": self.hardrock}


@dataclass(frozen=True)
class LineMove:
    source: str
    player_id: str | None
    player_name: str
    team: str | None
    stat_type: Stat
    open_line: float
    cur_line: float
    delta: float
    abs_delta: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "source": self.source,
            "playerId": self.player_id,
            "playerName": self.player_name,
            "team": self.team,
            "statType": self.stat_type.value,
            "openLine": self.open_line,
            "curLine": self.cur_line,
            "delta": self.delta,
            "absDelta": self.abs_delta,
        }
