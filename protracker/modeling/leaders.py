from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Iterable

from protracker.modeling.name_utils import player_group_key
from protracker.modeling.stat_mappings import LEADERBOARD_KEYS
from protracker.modeling.types import GameLog, Stat

DEFAULT_TOP_N = 25


@dataclass
class PlayerTotals:
    player_id: str | None
    player_name: str
    games_played: int = 0
    sums: dict[Stat, float] = field(default_factory=lambda: {stat: 0.0 for stat in Stat})

    def per_game(self, stat: Stat) -> float:
        return self.sums[stat] / self.games_played


@dataclass(frozen=True)
class LeaderEntry:
    player_id: str | None
    player_name: str
    gp: int
    per_game: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "playerId": self.player_id,
            "playerName": self.player_name,
            "gp": self.gp,
            "perGame": self.per_game,
        }


@dataclass(frozen=True)
class Leaderboards:
    generated_at: str
    boards: dict[Stat, list[LeaderEntry]]
    players: int

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"generatedAt": self.generated_at}
        for stat, key in LEADERBOARD_KEYS.items():
            payload[key] = [entry.to_dict() for entry in self.boards.get(stat, [])]
        return payload


def accumulate_totals(logs: Iterable[GameLog]) -> list[PlayerTotals]:
    """Season totals per player, in first-seen order.

    A log counts as a game played only when at least one tracked stat is
    numeric; missing stats in a counted game add zero.
    """
    by_player: dict[str, PlayerTotals] = {}
    for log in logs:
        key = player_group_key(log.player_id, log.player_name)
        if key is None:
            continue
        totals = by_player.get(key)
        if totals is None:
            totals = PlayerTotals(player_id=log.player_id, player_name=log.player_name)
            by_player[key] = totals
        if not log.stats:
            continue
        totals.games_played += 1
        for stat, value in log.stats.items():
            totals.sums[stat] += value
        if not totals.player_name and log.player_name:
            totals.player_name = log.player_name
    return [totals for totals in by_player.values() if totals.games_played > 0]


def top_players(totals: list[PlayerTotals], stat: Stat, top_n: int = DEFAULT_TOP_N) -> list[LeaderEntry]:
    entries = [
        LeaderEntry(
            player_id=player.player_id,
            player_name=player.player_name,
            gp=player.games_played,
            per_game=round(player.per_game(stat), 2),
        )
        for player in totals
    ]
    entries.sort(key=lambda entry: entry.per_game, reverse=True)
    return entries[:top_n]


def compute_leaders(
    logs: Iterable[GameLog],
    *,
    top_n: int = DEFAULT_TOP_N,
    now: datetime | None = None,
) -> Leaderboards:
    totals = accumulate_totals(logs)
    generated = now or datetime.now(timezone.utc)
    return Leaderboards(
        generated_at=generated.isoformat(),
        boards={stat: top_players(totals, stat, top_n) for stat in Stat},
        players=len(totals),
    )
