"""Import raw game logs and prop lines into the JSON store.

Usage:
    python -m scripts.import_records --game-logs logs.jsonl --props sgo=sgo.json --props hardrock=hr.json
"""
from __future__ import annotations

import argparse
import json
from pathlib import Path

from protracker.core.config import settings
from protracker.core.events import set_log_path
from protracker.db.store import get_store
from protracker.modeling.game_logs import load_records
from protracker.modeling.records import SOURCE_COLLECTIONS
from protracker.services.imports import import_records


def _parse_props_arg(value: str) -> tuple[str, Path]:
    source, sep, path = value.partition("=")
    if not sep or source not in SOURCE_COLLECTIONS:
        valid = ", ".join(SOURCE_COLLECTIONS)
        raise argparse.ArgumentTypeError(f"Expected SOURCE=PATH with SOURCE in: {valid}")
    return source, Path(path)


def main() -> None:
    parser = argparse.ArgumentParser(description="Import game logs / prop lines into the store.")
    parser.add_argument("--db-path", default=settings.db_path)
    parser.add_argument(
        "--game-logs",
        type=Path,
        action="append",
        default=[],
        help="JSON array or JSONL file of box-score rows (repeatable)",
    )
    parser.add_argument(
        "--props",
        type=_parse_props_arg,
        action="append",
        default=[],
        help="SOURCE=PATH prop-line file, e.g. sgo=data/sgo.json (repeatable)",
    )
    args = parser.parse_args()

    if settings.event_log_path:
        set_log_path(settings.event_log_path)

    game_logs = [row for path in args.game_logs for row in load_records(path)]
    prop_lines: dict[str, list[dict]] = {}
    for source, path in args.props:
        prop_lines.setdefault(source, []).extend(load_records(path))

    result = import_records(get_store(args.db_path), game_logs=game_logs, prop_lines=prop_lines)
    print(json.dumps(result, indent=2))


if __name__ == "__main__":
    main()
