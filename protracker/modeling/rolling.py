from __future__ import annotations

from typing import Any, Iterable

import numpy as np

from protracker.core.errors import InvalidParameterError
from protracker.modeling.game_logs import select_player_logs, sort_recent_first
from protracker.modeling.stat_mappings import normalize_stat_type
from protracker.modeling.types import GameLog, PlayerKey, Projection, ProjectionMode, Stat


def parse_projection_mode(value: Any) -> ProjectionMode:
    if isinstance(value, ProjectionMode):
        return value
    text = str(value or "").strip().lower()
    try:
        return ProjectionMode(text)
    except ValueError:
        valid = "|".join(mode.value for mode in ProjectionMode)
        raise InvalidParameterError("mode", value, valid) from None


def recency_weights(window: int, count: int) -> list[int]:
    """Weights for ``count`` values ordered newest first: window, window - 1, ..."""
    return [window - i for i in range(count)]


def recent_values(logs: Iterable[GameLog], stat: Stat, window: int) -> list[float]:
    values: list[float] = []
    for log in sort_recent_first(logs):
        value = log.stats.get(stat)
        if value is not None:
            values.append(value)
        if len(values) >= window:
            break
    return values


def project_from_logs(
    player_logs: Iterable[GameLog],
    stat: Stat,
    window: int,
    mode: ProjectionMode = ProjectionMode.WEIGHTED,
) -> Projection | None:
    """Project ``stat`` from logs already narrowed to a single player."""
    if window < 1:
        raise InvalidParameterError("window", window, "a positive integer")
    values = recent_values(player_logs, stat, window)
    if not values:
        return None
    if mode is ProjectionMode.WEIGHTED:
        projection = float(np.average(values, weights=recency_weights(window, len(values))))
    else:
        projection = float(np.mean(values))
    return Projection(stat=stat, games_used=len(values), projection=projection)


def rolling_projection(
    logs: Iterable[GameLog],
    player: PlayerKey,
    stat_label: Any,
    window: int,
    mode: ProjectionMode | str = ProjectionMode.WEIGHTED,
) -> Projection | None:
    """Rolling projection over the player's ``window`` most recent games.

    Returns None when the stat label is unrecognized or the player has no
    game with a numeric value for it.
    """
    stat = normalize_stat_type(stat_label)
    if stat is None:
        return None
    return project_from_logs(
        select_player_logs(logs, player),
        stat,
        window,
        parse_projection_mode(mode),
    )
