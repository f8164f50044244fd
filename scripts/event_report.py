"""Summarize the structured event log.

Usage:
    python -m scripts.event_report [--log-path logs/events.jsonl] [--hours 24]
"""
from __future__ import annotations

import argparse
import json
import sys

from protracker.core.config import settings
from protracker.core.events import generate_event_report


def main() -> None:
    parser = argparse.ArgumentParser(description="Event log report")
    parser.add_argument("--log-path", default=settings.event_log_path)
    parser.add_argument("--hours", type=int, default=24)
    args = parser.parse_args()

    report = generate_event_report(args.log_path, hours=args.hours)
    print(json.dumps(report, indent=2))

    if "error" in report:
        sys.exit(1)

    if report.get("last_recovery"):
        print(f"WARNING: store was recovered from corruption; backup at {report['last_recovery']}", file=sys.stderr)


if __name__ == "__main__":
    main()
