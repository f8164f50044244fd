"""Snapshot a slate date's prop lines so later line moves can be diffed.

Usage:
    python -m scripts.archive_props [--date 2025-01-05] [--db-path data/db.json]
"""
from __future__ import annotations

import argparse
import json
import sys

from protracker.core.config import settings
from protracker.core.errors import InvalidParameterError
from protracker.core.events import set_log_path
from protracker.db.store import get_store
from protracker.services.slate import archive_date


def main() -> None:
    parser = argparse.ArgumentParser(description="Archive prop lines for a date")
    parser.add_argument("--date", default=None, help="YYYY-MM-DD; defaults to the active slate date")
    parser.add_argument("--db-path", default=settings.db_path)
    args = parser.parse_args()

    if settings.event_log_path:
        set_log_path(settings.event_log_path)

    try:
        result = archive_date(get_store(args.db_path), args.date)
    except InvalidParameterError as exc:
        print(str(exc), file=sys.stderr)
        sys.exit(2)
    print(json.dumps(result, indent=2))


if __name__ == "__main__":
    main()
