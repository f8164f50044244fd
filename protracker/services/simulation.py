"""Test-support line perturbation.

Moves one stored prop line so downstream edges and line moves can be
exercised without a live feed. Never called by the projection or edge code.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from protracker.core.errors import InvalidParameterError
from protracker.core.events import log_line_simulated
from protracker.db.store import JsonStore
from protracker.modeling.coerce import normalize_id, to_float
from protracker.modeling.name_utils import normalize_player_name
from protracker.modeling.records import SOURCE_COLLECTIONS, line_field, parse_prop_line
from protracker.modeling.stat_mappings import normalize_stat_type
from protracker.modeling.time_utils import validate_iso_date


@dataclass(frozen=True)
class SimulatedLine:
    source: str
    date: str
    player_id: str | None
    player_name: str
    stat: str
    old_line: float
    new_line: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "source": self.source,
            "date": self.date,
            "playerId": self.player_id,
            "playerName": self.player_name,
            "stat": self.stat,
            "oldLine": self.old_line,
            "newLine": self.new_line,
        }


def simulate_line_move(
    store: JsonStore,
    *,
    source: str,
    date: str,
    stat_type: str,
    player_id: str | None = None,
    player_name: str | None = None,
    new_line: Any = None,
    delta: Any = None,
) -> SimulatedLine:
    """Rewrite the first matching stored line, either to ``new_line`` or by ``delta``.

    Raises LookupError when no stored record with a numeric line matches.
    """
    if source not in SOURCE_COLLECTIONS:
        raise InvalidParameterError("source", source, "|".join(SOURCE_COLLECTIONS))
    date = validate_iso_date(date)
    stat = normalize_stat_type(stat_type)
    if stat is None:
        raise InvalidParameterError("statType", stat_type, "a points/rebounds/assists/threes label")
    if not player_id and not player_name:
        raise InvalidParameterError("player", None, "a playerId or playerName")
    target_line = to_float(new_line)
    shift = to_float(delta)
    if (target_line is None) == (shift is None):
        raise InvalidParameterError("newLine/delta", (new_line, delta), "exactly one finite number")

    name_key = normalize_player_name(player_name)
    with store.transaction() as document:
        for record in document[SOURCE_COLLECTIONS[source]]:
            prop = parse_prop_line(record, source=source)
            if prop is None or prop.date != date or prop.stat is not stat or prop.line is None:
                continue
            if player_id:
                if prop.player_id != normalize_id(player_id):
                    continue
            elif normalize_player_name(prop.player_name) != name_key:
                continue
            field_name = line_field(record)
            updated = target_line if target_line is not None else prop.line + shift
            record[field_name] = updated
            result = SimulatedLine(
                source=source,
                date=date,
                player_id=prop.player_id,
                player_name=prop.player_name,
                stat=stat.value,
                old_line=prop.line,
                new_line=updated,
            )
            break
        else:
            raise LookupError(f"No {source} line for {player_id or player_name} {stat.value} on {date}")

    log_line_simulated(
        source,
        date,
        player=result.player_id or result.player_name,
        stat=result.stat,
        old_line=result.old_line,
        new_line=result.new_line,
    )
    return result
