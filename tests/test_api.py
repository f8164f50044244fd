from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from protracker.core.config import settings
from protracker.core.events import set_log_path
from protracker.db.store import get_store
from protracker.main import app
from protracker.services.leaders_cache import leaders_cache

DATE = "2025-01-05"


@pytest.fixture
def client(tmp_path, monkeypatch) -> TestClient:
    monkeypatch.setattr(settings, "db_path", str(tmp_path / "db.json"))
    monkeypatch.setattr(settings, "environment", "development")
    set_log_path(None)
    leaders_cache.invalidate()
    with get_store().transaction() as document:
        document["nbaPlayerGameLogs"] = [
            {"playerId": "1", "playerName": "Alpha", "gameDate": "2025-01-01", "pts": 20},
            {"playerId": "1", "playerName": "Alpha", "gameDate": "2025-01-03", "pts": 30},
        ]
        document["sgoPropLines"] = [
            {"date": DATE, "playerId": "1", "playerName": "Alpha", "statType": "points", "line": 24},
        ]
    yield TestClient(app)
    leaders_cache.invalidate()


def test_health(client) -> None:
    resp = client.get("/api/health")
    assert resp.status_code == 200
    assert resp.json() == {"ok": True}


def test_dates_and_props_for_date(client) -> None:
    assert client.get("/api/props/dates").json() == {"dates": [DATE]}
    resp = client.get(f"/api/odds/sgo/props-for-date?date={DATE}&limit=5")
    body = resp.json()
    assert body["ok"] is True
    assert body["count"] == 1
    assert body["props"][0]["line"] == 24

    assert client.get("/api/odds/fanduel/props-for-date?date=2025-01-05").status_code == 400
    assert client.get("/api/odds/sgo/props-for-date?date=01-05-2025").status_code == 400


def test_edges_weighted_projection(client) -> None:
    resp = client.get(f"/api/nba/edges-today-tiered?date={DATE}&games=2&mode=weighted")
    assert resp.status_code == 200
    body = resp.json()
    assert body["date"] == DATE
    assert body["gamesN"] == 2
    assert body["counts"] == {"total": 1, "A": 0, "B": 1, "C": 0}
    [edge] = body["tiered"]["B"]
    assert edge["projection"] == 26.67
    assert edge["edge"] == 2.67
    assert edge["rawProp"]["line"] == 24


def test_edges_min_edge_filters(client) -> None:
    body = client.get(f"/api/nba/edges-today-tiered?date={DATE}&games=2&minEdge=3").json()
    assert body["counts"]["total"] == 0


@pytest.mark.parametrize("query", ["date=2025/01/05", "mode=median", f"date={DATE}&minEdge=-1"])
def test_edges_rejects_bad_parameters(client, query) -> None:
    resp = client.get(f"/api/nba/edges-today-tiered?{query}")
    assert resp.status_code == 400


def test_line_moves_without_archive(client) -> None:
    body = client.get(f"/api/props/line-moves?date={DATE}").json()
    assert body["exists"] is False
    assert body["moves"] == []
    assert "message" in body


def test_archive_simulate_then_line_moves(client) -> None:
    resp = client.post(f"/api/props/archive?date={DATE}")
    assert resp.status_code == 200
    assert resp.json()["counts"] == {"sgo": 1, "hardrock": 0}

    body = client.get(f"/api/props/line-moves?date={DATE}").json()
    assert body["exists"] is True
    assert body["counts"]["moves"] == 0

    resp = client.post(
        "/api/dev/simulate-line",
        json={"source": "sgo", "date": DATE, "statType": "PTS", "playerId": "1", "delta": 1.5},
    )
    assert resp.status_code == 200
    assert resp.json()["newLine"] == 25.5

    body = client.get(f"/api/props/line-moves?date={DATE}").json()
    [move] = body["moves"]
    assert (move["openLine"], move["curLine"], move["delta"]) == (24.0, 25.5, 1.5)


def test_simulate_line_errors(client) -> None:
    missing = {"source": "sgo", "date": DATE, "statType": "PTS", "playerId": "9", "delta": 1}
    assert client.post("/api/dev/simulate-line", json=missing).status_code == 404
    both = {"source": "sgo", "date": DATE, "statType": "PTS", "playerId": "1", "delta": 1, "newLine": 20}
    assert client.post("/api/dev/simulate-line", json=both).status_code == 400


def test_simulate_line_hidden_in_production(client, monkeypatch) -> None:
    monkeypatch.setattr(settings, "environment", "production")
    body = {"source": "sgo", "date": DATE, "statType": "PTS", "playerId": "1", "delta": 1}
    assert client.post("/api/dev/simulate-line", json=body).status_code == 404


def test_leaders_cached_after_warm(client) -> None:
    body = client.get("/api/nba/stats/leaders").json()
    assert body["cached"] is False
    assert body["leaders"]["points"][0]["perGame"] == 25.0

    warm = client.post("/api/nba/stats/warm").json()
    assert warm["players"] == 1

    body = client.get("/api/nba/stats/leaders").json()
    assert body["cached"] is True
    assert body["ts"] == warm["ts"]

    status = client.get("/api/nba/stats/status").json()
    assert status["counts"]["nbaPlayerGameLogs"] == 2
    assert status["cache"]["leaders"]["hasData"] is True


def test_quick_links_and_routes(client) -> None:
    body = client.get("/api/pt/quick-links").json()
    assert body["activeDate"] == DATE
    assert body["links"]["health"].endswith("/api/health")

    routes = client.get("/api/pt/routes").json()["routes"]
    assert {"method": "GET", "path": "/api/nba/edges-today-tiered"} in routes
    assert {"method": "POST", "path": "/api/dev/simulate-line"} in routes


def test_active_date_includes_archive_dates_but_edges_do_not(client, monkeypatch) -> None:
    import protracker.services.slate as slate

    monkeypatch.setattr(slate, "slate_today", lambda: "2025-01-06")
    with get_store().transaction() as document:
        document["propsArchive"]["2025-01-07"] = {"ts": "2025-01-07T15:00:00+00:00", "sgo": [], "hardrock": []}

    body = client.get("/api/props/active-date").json()
    assert body["todayET"] == "2025-01-06"
    assert body["activeDate"] == "2025-01-07"
    assert body["availableDates"] == [DATE, "2025-01-07"]

    edges = client.get("/api/nba/edges-today-tiered?games=2").json()
    assert edges["date"] == DATE
    assert edges["counts"]["total"] == 1


def test_archive_and_line_moves_default_to_active_date(client, monkeypatch) -> None:
    import protracker.services.slate as slate

    monkeypatch.setattr(slate, "slate_today", lambda: "2025-01-04")
    resp = client.post("/api/props/archive")
    assert resp.status_code == 200
    assert resp.json()["date"] == DATE

    client.post(
        "/api/dev/simulate-line",
        json={"source": "sgo", "date": DATE, "statType": "PTS", "playerId": "1", "newLine": 22.5},
    )
    body = client.get("/api/props/line-moves").json()
    assert body["date"] == DATE
    assert body["exists"] is True
    [move] = body["moves"]
    assert (move["openLine"], move["curLine"], move["delta"]) == (24.0, 22.5, -1.5)
