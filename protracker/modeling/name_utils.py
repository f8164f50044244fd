from __future__ import annotations

from typing import Any


def normalize_player_name(name: Any) -> str:
    """Lowercase, trim and collapse internal whitespace.

    Used wherever player names are compared: exact match after folding case
    and spacing, no fuzzy matching.
    """
    if not name:
        return ""
    return " ".join(str(name).split()).lower()


def player_group_key(player_id: str | None, player_name: str | None) -> str | None:
    """Identity key that prefers the id and falls back to the folded name."""
    if player_id:
        return f"id:{player_id}"
    name_key = normalize_player_name(player_name)
    if name_key:
        return f"name:{name_key}"
    return None
