"""In-process leaderboard cache with an explicit warm/invalidate lifecycle.

The aggregation itself stays pure; this only remembers its last result.
"""
from __future__ import annotations

import logging
import threading
import time
from datetime import datetime, timezone
from typing import Any, Iterable

from protracker.core.config import settings
from protracker.core.events import log_leaders_warmed
from protracker.modeling.leaders import Leaderboards, compute_leaders
from protracker.modeling.types import GameLog

logger = logging.getLogger(__name__)


class LeadersCache:
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._data: Leaderboards | None = None
        self._ts: str | None = None

    @property
    def ts(self) -> str | None:
        return self._ts

    @property
    def has_data(self) -> bool:
        return self._data is not None

    def get(self) -> Leaderboards | None:
        with self._lock:
            return self._data

    def snapshot(self) -> tuple[Leaderboards | None, str | None]:
        """Cached leaderboards and their warm timestamp, read together."""
        with self._lock:
            return self._data, self._ts

    def warm(self, logs: Iterable[GameLog]) -> Leaderboards:
        started = time.perf_counter()
        leaders = compute_leaders(logs, top_n=settings.leaders_top_n)
        with self._lock:
            self._data = leaders
            self._ts = datetime.now(timezone.utc).isoformat()
        elapsed_ms = (time.perf_counter() - started) * 1000.0
        logger.info("Leaders cache warmed for %d players in %.1fms", leaders.players, elapsed_ms)
        log_leaders_warmed(players=leaders.players, elapsed_ms=elapsed_ms)
        return leaders

    def invalidate(self) -> None:
        with self._lock:
            self._data = None
            self._ts = None

    def status(self) -> dict[str, Any]:
        data, ts = self.snapshot()
        return {"ts": ts, "hasData": data is not None}


leaders_cache = LeadersCache()
