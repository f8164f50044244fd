"""Print (or export) the tiered edge board for a slate date.

Usage:
    python -m scripts.report_edges [--date 2025-01-05] [--games 10] [--mode weighted] [--min-edge 1.5] [--csv out.csv]
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

import pandas as pd

from protracker.core.config import settings
from protracker.core.errors import InvalidParameterError
from protracker.db.store import get_store
from protracker.modeling.edges import EdgeReport
from protracker.services.slate import tiered_edges

COLUMNS = [
    "tier",
    "source",
    "playerName",
    "team",
    "stat",
    "gamesUsed",
    "projection",
    "line",
    "edge",
    "absEdge",
]


def edges_frame(report: EdgeReport) -> pd.DataFrame:
    rows = [edge.to_dict() for edge in report.flattened()]
    if not rows:
        return pd.DataFrame(columns=COLUMNS)
    return pd.DataFrame(rows)[COLUMNS]


def main() -> None:
    parser = argparse.ArgumentParser(description="Tiered edges report")
    parser.add_argument("--date", default=None)
    parser.add_argument("--games", default=None)
    parser.add_argument("--mode", default=None, choices=("flat", "weighted"))
    parser.add_argument("--min-edge", default=0)
    parser.add_argument("--db-path", default=settings.db_path)
    parser.add_argument("--csv", type=Path, default=None, help="Write the board to this CSV path")
    args = parser.parse_args()

    try:
        report = tiered_edges(
            get_store(args.db_path),
            date=args.date,
            min_edge=args.min_edge,
            games=args.games,
            mode=args.mode,
        )
    except InvalidParameterError as exc:
        print(str(exc), file=sys.stderr)
        sys.exit(2)

    frame = edges_frame(report)
    counts = report.to_dict()["counts"]
    print(f"Date {report.date} | window {report.window} ({report.mode.value}) | min edge {report.min_edge}")
    print(f"Edges: {counts['total']} (A={counts['A']} B={counts['B']} C={counts['C']})")
    if frame.empty:
        print("No edges.")
    else:
        print(frame.to_string(index=False))

    if args.csv:
        args.csv.parent.mkdir(parents=True, exist_ok=True)
        frame.to_csv(args.csv, index=False)
        print(f"Wrote {len(frame)} rows -> {args.csv}")


if __name__ == "__main__":
    main()
