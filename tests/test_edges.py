import pytest

from protracker.core.errors import InvalidParameterError
from protracker.modeling.edges import TierThresholds, clamp_window, compute_edges, validate_min_edge
from protracker.modeling.records import parse_game_logs, parse_prop_lines

TODAY = "2025-01-04"


def _logs():
    return parse_game_logs(
        [
            {"playerId": "1", "playerName": "Alpha", "gameDate": "2025-01-01", "pts": 20, "reb": 4},
            {"playerId": "1", "playerName": "Alpha", "gameDate": "2025-01-03", "pts": 30, "reb": 6},
            {"playerName": "Bravo", "gameDate": "2025-01-02", "ast": 9},
            {"playerName": "Bravo", "gameDate": "2025-01-03", "ast": 11},
        ]
    )


def _props(sgo=(), hardrock=()):
    return {
        "sgo": parse_prop_lines(sgo, source="sgo"),
        "hardrock": parse_prop_lines(hardrock, source="hardrock"),
    }


class TestTierThresholds:
    def test_default_thresholds(self):
        thresholds = TierThresholds()
        assert thresholds.tier_for(3.0) == "A"
        assert thresholds.tier_for(2.67) == "B"
        assert thresholds.tier_for(1.5) == "B"
        assert thresholds.tier_for(1.49) == "C"

    def test_strict_variant(self):
        strict = TierThresholds.strict()
        assert strict.tier_for(2.67) == "B"
        assert strict.tier_for(1.99) == "C"
        assert strict.tier_for(3.5) == "A"


def test_scenario_edge_and_tier():
    props = _props(sgo=[{"date": "2025-01-05", "playerId": "1", "statType": "points", "line": 24}])
    report = compute_edges(_logs(), props, today=TODAY, date="2025-01-05", window=2, mode="weighted")
    [edge] = report.tiered["B"]
    assert edge.projection == 26.67
    assert edge.edge == 2.67
    assert edge.abs_edge == 2.67
    assert edge.source == "sgo"
    assert edge.games_used == 2

    strict = compute_edges(
        _logs(), props, today=TODAY, date="2025-01-05", window=2, thresholds=TierThresholds(3.0, 2.0)
    )
    # 2.67 clears the 2.0 bar as well; a 1.8 edge separates the variants.
    assert strict.tiered["B"][0].abs_edge == 2.67


def test_threshold_variants_diverge():
    props = _props(sgo=[{"date": "2025-01-05", "playerId": "1", "statType": "points", "line": 23.2}])
    default = compute_edges(_logs(), props, today=TODAY, date="2025-01-05", window=2, mode="flat")
    strict = compute_edges(
        _logs(), props, today=TODAY, date="2025-01-05", window=2, mode="flat", thresholds=TierThresholds.strict()
    )
    assert default.tiered["B"][0].abs_edge == 1.8
    assert strict.tiered["C"][0].abs_edge == 1.8


def test_edges_tiered_and_sorted():
    props = _props(
        sgo=[
            {"date": "2025-01-05", "playerId": "1", "statType": "points", "line": 20},
            {"date": "2025-01-05", "playerId": "1", "statType": "rebounds", "line": 5.2},
        ],
        hardrock=[
            {"date": "2025-01-05", "playerName": "bravo", "market": "Assists", "line": 6.5},
            {"date": "2025-01-05", "playerId": "1", "statType": "points", "line": 25},
        ],
    )
    report = compute_edges(_logs(), props, today=TODAY, date="2025-01-05", window=2, mode="flat")
    payload = report.to_dict()
    assert payload["counts"] == {"total": 4, "A": 2, "B": 0, "C": 2}
    assert [edge.abs_edge for edge in report.tiered["A"]] == [5.0, 3.5]
    assert [edge.abs_edge for edge in report.tiered["C"]] == [0.2, 0.0]
    flat = report.flattened()
    assert [edge.tier for edge in flat] == ["A", "A", "C", "C"]
    for edge in flat:
        assert edge.edge == pytest.approx(edge.projection - edge.line, abs=0.011)


def test_min_edge_filters():
    props = _props(
        sgo=[
            {"date": "2025-01-05", "playerId": "1", "statType": "points", "line": 20},
            {"date": "2025-01-05", "playerId": "1", "statType": "points", "line": 19},
            {"date": "2025-01-05", "playerName": "Bravo", "statType": "ast", "line": 4},
        ]
    )
    report = compute_edges(_logs(), props, today=TODAY, date="2025-01-05", window=2, mode="flat", min_edge=5)
    assert report.total == 3
    assert all(edge.abs_edge >= 5 for edge in report.flattened())
    report = compute_edges(_logs(), props, today=TODAY, date="2025-01-05", window=2, mode="flat", min_edge=5.5)
    assert report.total == 2


def test_unresolvable_props_are_skipped():
    props = _props(
        sgo=[
            {"date": "2025-01-05", "playerId": "1", "statType": "steals", "line": 1.5},
            {"date": "2025-01-05", "playerId": "404", "statType": "points", "line": 10},
            {"date": "2025-01-05", "playerId": "1", "statType": "points", "line": "off"},
            {"date": "2025-01-05", "playerId": "1", "statType": "threes", "line": 2.5},
            {"date": "2025-01-06", "playerId": "1", "statType": "points", "line": 10},
        ]
    )
    report = compute_edges(_logs(), props, today=TODAY, date="2025-01-05")
    assert report.total == 0


def test_date_defaults_to_active_date():
    props = _props(
        sgo=[{"date": "2025-01-02", "playerId": "1", "statType": "points", "line": 10}],
        hardrock=[{"date": "2025-01-06", "playerId": "1", "statType": "points", "line": 10}],
    )
    assert compute_edges(_logs(), props, today=TODAY).date == "2025-01-06"
    assert compute_edges(_logs(), props, today="2025-02-01").date == "2025-01-06"
    assert compute_edges(_logs(), _props(), today=TODAY).date == TODAY


def test_invalid_date_rejected():
    with pytest.raises(InvalidParameterError):
        compute_edges(_logs(), _props(), today=TODAY, date="2025-13-01")


def test_report_metadata():
    report = compute_edges(_logs(), _props(), today=TODAY, date="2025-01-05", window="99")
    payload = report.to_dict()
    assert payload["gamesN"] == 30
    assert payload["mode"] == "weighted"
    assert payload["minEdge"] == 0
    assert payload["thresholds"] == {"A": 3.0, "B": 1.5}
    assert payload["tiered"] == {"A": [], "B": [], "C": []}


def test_clamp_window():
    assert clamp_window(None) == 10
    assert clamp_window("") == 10
    assert clamp_window("0") == 1
    assert clamp_window(45) == 30
    assert clamp_window("7") == 7
    with pytest.raises(InvalidParameterError):
        clamp_window("ten")


def test_validate_min_edge():
    assert validate_min_edge(None) == 0
    assert validate_min_edge("2.5") == 2.5
    for bad in ("abc", "-1", "nan", True):
        with pytest.raises(InvalidParameterError):
            validate_min_edge(bad)
