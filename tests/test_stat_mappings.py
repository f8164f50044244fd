import pytest

from protracker.modeling.stat_mappings import extract_log_stats, normalize_stat_type
from protracker.modeling.types import Stat


@pytest.mark.parametrize(
    ("label", "expected"),
    [
        ("points", Stat.POINTS),
        ("Player Points", Stat.POINTS),
        ("PTS", Stat.POINTS),
        ("pts", Stat.POINTS),
        ("Rebounds", Stat.REBOUNDS),
        ("reb", Stat.REBOUNDS),
        ("player_assists", Stat.ASSISTS),
        ("AST", Stat.ASSISTS),
        ("3-PT Made", Stat.THREES),
        ("3PM", Stat.THREES),
        ("3pt made", Stat.THREES),
        ("Threes Made (3)", Stat.THREES),
    ],
)
def test_normalize_stat_type_synonyms(label, expected):
    assert normalize_stat_type(label) is expected


@pytest.mark.parametrize("label", ["steals", "blocks", "3PA", "", None, "turnovers"])
def test_normalize_stat_type_unrecognized(label):
    assert normalize_stat_type(label) is None


def test_points_rule_wins_for_combined_labels():
    # Substring rules are evaluated in order: points before rebounds.
    assert normalize_stat_type("Points + Rebounds") is Stat.POINTS


def test_extract_log_stats_single_stats():
    stats = {"pts": 25, "reb": 10, "ast": 5, "fg3m": 4}
    assert extract_log_stats(stats) == {
        Stat.POINTS: 25.0,
        Stat.REBOUNDS: 10.0,
        Stat.ASSISTS: 5.0,
        Stat.THREES: 4.0,
    }


def test_extract_log_stats_alternate_names():
    stats = {"PTS": "18", "totalRebounds": 11, "assists": 2, "threePointersMade": 1}
    assert extract_log_stats(stats) == {
        Stat.POINTS: 18.0,
        Stat.REBOUNDS: 11.0,
        Stat.ASSISTS: 2.0,
        Stat.THREES: 1.0,
    }


def test_extract_log_stats_ignores_nonfinite_inputs():
    assert extract_log_stats({"pts": float("nan")}) == {}
    assert extract_log_stats({"pts": "nan", "reb": float("inf"), "ast": True}) == {}
