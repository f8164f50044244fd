from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping

from protracker.core.errors import InvalidParameterError
from protracker.core.events import log_import
from protracker.db.store import JsonStore
from protracker.modeling.game_logs import merge_game_logs
from protracker.modeling.records import GAME_LOG_COLLECTION, SOURCE_COLLECTIONS
from protracker.services.leaders_cache import LeadersCache

logger = logging.getLogger(__name__)


def import_records(
    store: JsonStore,
    *,
    game_logs: Iterable[dict[str, Any]] = (),
    prop_lines: Mapping[str, Iterable[dict[str, Any]]] | None = None,
    cache: LeadersCache | None = None,
) -> dict[str, Any]:
    """Merge raw game logs (deduplicated per player and date) and append prop lines."""
    prop_lines = prop_lines or {}
    unknown = sorted(set(prop_lines) - set(SOURCE_COLLECTIONS))
    if unknown:
        raise InvalidParameterError("source", unknown[0], "|".join(SOURCE_COLLECTIONS))

    with store.transaction() as document:
        merged, added, replaced = merge_game_logs(document[GAME_LOG_COLLECTION], game_logs)
        document[GAME_LOG_COLLECTION] = merged
        props_added: dict[str, int] = {}
        for source, records in prop_lines.items():
            rows = [dict(record) for record in records if isinstance(record, Mapping)]
            document[SOURCE_COLLECTIONS[source]].extend(rows)
            props_added[source] = len(rows)

    if cache is not None:
        cache.invalidate()
    logger.info(
        "Imported %d new game logs (%d replaced), prop lines %s",
        added,
        replaced,
        props_added,
    )
    log_import(game_logs_added=added, game_logs_replaced=replaced, prop_lines_added=props_added)
    return {
        "gameLogsAdded": added,
        "gameLogsReplaced": replaced,
        "propLinesAdded": props_added,
    }
