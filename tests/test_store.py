import json

import pytest

from protracker.db.store import JsonStore, get_store


@pytest.fixture
def store(tmp_path):
    return JsonStore(tmp_path / "data" / "db.json")


def test_read_creates_default_document(store):
    document = store.read()
    assert store.path.exists()
    assert document["nbaPlayerGameLogs"] == []
    assert document["sgoPropLines"] == []
    assert document["hardrockPropLines"] == []
    assert document["propsArchive"] == {}
    assert document["meta"]["version"] == 1


def test_write_then_read_round_trip(store):
    document = store.read()
    document["sgoPropLines"].append({"date": "2025-01-05", "playerId": "1", "line": 24})
    store.write(document)
    assert store.read()["sgoPropLines"] == [{"date": "2025-01-05", "playerId": "1", "line": 24}]
    assert not store.path.with_name("db.json.tmp").exists()


def test_corrupt_file_is_backed_up_and_reset(store):
    store.path.parent.mkdir(parents=True)
    store.path.write_text("{not json", encoding="utf-8")
    document = store.read()
    assert document["nbaPlayerGameLogs"] == []
    backups = list(store.path.parent.glob("db.json.corrupt.*"))
    assert len(backups) == 1
    assert backups[0].read_text(encoding="utf-8") == "{not json"
    assert json.loads(store.path.read_text(encoding="utf-8"))["propsArchive"] == {}


def test_invalid_containers_are_coerced(store):
    store.path.parent.mkdir(parents=True)
    store.path.write_text(json.dumps({"sgoPropLines": {"oops": 1}, "propsArchive": []}), encoding="utf-8")
    document = store.read()
    assert document["sgoPropLines"] == []
    assert document["propsArchive"] == {}
    assert document["hardrockPropLines"] == []


def test_transaction_writes_on_success_only(store):
    with store.transaction() as document:
        document["sgoPropLines"].append({"playerId": "1"})
    assert len(store.read()["sgoPropLines"]) == 1

    with pytest.raises(RuntimeError):
        with store.transaction() as document:
            document["sgoPropLines"].append({"playerId": "2"})
            raise RuntimeError("boom")
    assert len(store.read()["sgoPropLines"]) == 1


def test_load_returns_dataset(store):
    store.write(
        {
            "nbaPlayerGameLogs": [{"playerId": "1", "gameDate": "2025-01-01", "pts": 10}],
            "sgoPropLines": [],
            "hardrockPropLines": [],
            "propsArchive": {},
            "meta": {},
        }
    )
    dataset = store.load()
    assert len(dataset.game_logs) == 1


def test_get_store_is_shared_per_path(tmp_path):
    path = tmp_path / "db.json"
    assert get_store(path) is get_store(str(path))


def test_undecodable_file_is_backed_up_and_reset(store):
    raw = b'{"nbaPlayerGameLogs": [\xff\xfe'
    store.path.parent.mkdir(parents=True)
    store.path.write_bytes(raw)
    document = store.read()
    assert document["nbaPlayerGameLogs"] == []
    [backup] = store.path.parent.glob("db.json.corrupt.*")
    assert backup.read_bytes() == raw


def test_non_object_document_is_backed_up_before_reset(store):
    store.path.parent.mkdir(parents=True)
    store.path.write_text('[{"playerId": "1"}]', encoding="utf-8")
    with store.transaction() as document:
        document["sgoPropLines"].append({"playerId": "2"})
    [backup] = store.path.parent.glob("db.json.corrupt.*")
    assert json.loads(backup.read_text(encoding="utf-8")) == [{"playerId": "1"}]
    assert store.read()["sgoPropLines"] == [{"playerId": "2"}]
