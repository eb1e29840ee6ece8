from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from league_context import PLAYER_FREE_AGENT, LeagueContext, Phase
from league_repo import LeagueRepo


@pytest.fixture
def db_path(tmp_path, monkeypatch):
    path = tmp_path / "api.sqlite3"
    monkeypatch.setenv("LEAGUE_DB_PATH", str(path))
    monkeypatch.setenv("LEAGUE_RNG_SEED", "11")
    return path


@pytest.fixture
def client(db_path, make_teams):
    with LeagueRepo(db_path) as repo:
        repo.init_db()
        repo.set_league_context(LeagueContext(season=2013, phase=Phase.REGULAR_SEASON, starting_season=2013, num_teams=2))
        repo.upsert_teams(make_teams(2))

    from app.main import app

    with TestClient(app) as c:
        yield c


def _generate(client, **body):
    resp = client.post("/api/players/generate", json={"tid": 1, "age": 22, "pot": 60, "new_league": True, **body})
    assert resp.status_code == 200, resp.text
    return resp.json()


def test_generate_and_fetch(client) -> None:
    created = _generate(client, profile="big")
    assert created["pid"] >= 1
    assert created["tid"] == 1
    assert created["abbrev"] == "T01"
    assert created["age"] == 22
    assert created["ratings"][0]["pot"] == 60
    assert created["injury"] == {"type": "Healthy", "games_remaining": 0}

    fetched = client.get(f"/api/players/{created['pid']}")
    assert fetched.status_code == 200
    assert fetched.json() == created

    one_season = client.get(f"/api/players/{created['pid']}", params={"season": 2013}).json()
    assert one_season["ratings"]["season"] == 2013


def test_missing_player_is_404(client) -> None:
    resp = client.get("/api/players/999")
    assert resp.status_code == 404
    assert resp.json()["detail"]["code"] == "PLAYER_NOT_FOUND"


def test_filter_endpoint(client) -> None:
    _generate(client)
    _generate(client, tid=0)
    resp = client.post(
        "/api/players/filter",
        json={"season": 2013, "attributes": ["pid", "tid"], "stats": ["gp", "pts"], "roster_tid": 1},
    )
    assert resp.status_code == 200
    body = resp.json()
    assert body["count"] == 1
    assert body["players"][0]["tid"] == 1
    assert body["players"][0]["stats"] == {"gp": 0, "pts": 0}


def test_filter_rejects_unknown_fields(client) -> None:
    resp = client.post("/api/players/filter", json={"stats": ["points"]})
    assert resp.status_code == 400
    assert resp.json()["detail"]["code"] == "FILTER_UNKNOWN_FIELD"


def test_develop_endpoint_appends_season_row(client) -> None:
    pid = _generate(client, age=20)["pid"]
    resp = client.post(f"/api/players/{pid}/develop", json={"years": 1, "new_season_row": True})
    assert resp.status_code == 200
    ratings = resp.json()["ratings"]
    assert len(ratings) == 2
    assert ratings[-1]["pot"] >= ratings[-1]["ovr"]


def test_release_endpoint(client, db_path) -> None:
    pid = _generate(client)["pid"]
    resp = client.post(f"/api/players/{pid}/release")
    assert resp.status_code == 200, resp.text
    body = resp.json()
    assert body["tid"] == PLAYER_FREE_AGENT
    assert body["abbrev"] == "FA"
    assert body["released_from_tid"] == 1
    assert len(body["free_agent_mood"]) == 2

    with LeagueRepo(db_path) as repo:
        released = repo.list_released_players(pid=pid)
    assert len(released) == 1 and released[0].tid == 1


def test_injury_endpoint(client) -> None:
    pid = _generate(client)["pid"]
    resp = client.post(f"/api/players/{pid}/injury", json={"health_rank": 1})
    assert resp.status_code == 200
    body = resp.json()
    assert body["pid"] == pid
    assert body["injury"]["games_remaining"] >= 0

    stored = client.get(f"/api/players/{pid}").json()
    assert stored["injury"] == body["injury"]


def test_request_validation(client) -> None:
    assert client.post("/api/players/generate", json={"age": 3}).status_code == 422
    assert client.post("/api/players/1/injury", json={"health_rank": 31}).status_code == 422
