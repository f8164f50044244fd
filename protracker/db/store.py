"""Single-document JSON store holding game logs, prop lines and archives."""
from __future__ import annotations

import json
import logging
import os
import threading
import time
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Iterator

from protracker.core.config import settings
from protracker.core.events import log_store_recovered
from protracker.modeling.records import (
    ARCHIVE_COLLECTION,
    GAME_LOG_COLLECTION,
    SOURCE_COLLECTIONS,
    Dataset,
    load_dataset,
)

logger = logging.getLogger(__name__)

SCHEMA_VERSION = 1


def default_document() -> dict[str, Any]:
    document: dict[str, Any] = {GAME_LOG_COLLECTION: []}
    for key in SOURCE_COLLECTIONS.values():
        document[key] = []
    document[ARCHIVE_COLLECTION] = {}
    document["meta"] = {
        "createdAt": datetime.now(timezone.utc).isoformat(),
        "version": SCHEMA_VERSION,
    }
    return document


def _coerce_document(document: dict[str, Any]) -> dict[str, Any]:
    for key in (GAME_LOG_COLLECTION, *SOURCE_COLLECTIONS.values()):
        if not isinstance(document.get(key), list):
            document[key] = []
    if not isinstance(document.get(ARCHIVE_COLLECTION), dict):
        document[ARCHIVE_COLLECTION] = {}
    if not isinstance(document.get("meta"), dict):
        document["meta"] = {
            "createdAt": datetime.now(timezone.utc).isoformat(),
            "version": SCHEMA_VERSION,
        }
    return document


class JsonStore:
    """Whole-document reads and atomic whole-document writes."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self._lock = threading.RLock()

    def _write_unlocked(self, document: dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        tmp_path.write_text(json.dumps(document, indent=2), encoding="utf-8")
        os.replace(tmp_path, self.path)

    def _recover(self, raw: bytes) -> dict[str, Any]:
        backup_path = self.path.with_name(f"{self.path.name}.corrupt.{int(time.time() * 1000)}")
        backup_path.write_bytes(raw)
        logger.warning("Store at %s was unreadable; backed up to %s", self.path, backup_path)
        log_store_recovered(str(self.path), backup_path=str(backup_path))
        document = default_document()
        self._write_unlocked(document)
        return document

    def read(self) -> dict[str, Any]:
        with self._lock:
            if not self.path.exists():
                document = default_document()
                self._write_unlocked(document)
                return document
            raw = self.path.read_bytes()
            try:
                document = json.loads(raw.decode("utf-8"))
            except (UnicodeDecodeError, json.JSONDecodeError):
                return self._recover(raw)
            # Valid JSON that is not an object is kept as a backup too.
            if not isinstance(document, dict):
                return self._recover(raw)
            return _coerce_document(document)

    def write(self, document: dict[str, Any]) -> None:
        with self._lock:
            self._write_unlocked(document)

    @contextmanager
    def transaction(self) -> Iterator[dict[str, Any]]:
        """Read-modify-write under the store lock; the document is written on clean exit."""
        with self._lock:
            document = self.read()
            yield document
            self._write_unlocked(document)

    def load(self) -> Dataset:
        return load_dataset(self.read())


_STORES: dict[str, JsonStore] = {}
_STORES_LOCK = threading.Lock()


def get_store(path: str | Path | None = None) -> JsonStore:
    """Shared store per path so concurrent requests serialize on one lock."""
    key = str(Path(path or settings.db_path).resolve())
    with _STORES_LOCK:
        store = _STORES.get(key)
        if store is None:
            store = JsonStore(key)
            _STORES[key] = store
        return store
