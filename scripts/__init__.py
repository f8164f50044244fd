"""Operational scripts.

Run them as modules from the repository root, e.g. `python -m scripts.archive_props --date 2025-01-05`.
"""
