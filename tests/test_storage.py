import json

import pytest

from conftest import make_user, run
from modules.shared.errors import StorageError
from modules.shared.storage import JsonFileStore


def test_missing_file_returns_default_copy(tmp_path):
    store = JsonFileStore(str(tmp_path / "nested" / "items.json"), default=[])

    first = run(store.read())
    first.append("mutated")

    assert run(store.read()) == []


def test_write_creates_directory_and_round_trips(tmp_path):
    path = tmp_path / "nested" / "items.json"
    store = JsonFileStore(str(path), default=[])

    run(store.write([{"id": 1}]))

    assert json.loads(path.read_text()) == [{"id": 1}]
    assert run(store.read()) == [{"id": 1}]
    assert [p.name for p in path.parent.iterdir()] == ["items.json"]


def test_corrupt_file_raises_storage_error(tmp_path):
    path = tmp_path / "items.json"
    path.write_text("[{")
    store = JsonFileStore(str(path), default=[])

    with pytest.raises(StorageError):
        run(store.read())


def test_user_cache_unchanged_when_write_fails(user_store, monkeypatch):
    run(user_store.add_user(make_user()))

    async def broken_write(data):
        raise StorageError("disk full")

    monkeypatch.setattr(user_store._file, "write", broken_write)

    with pytest.raises(StorageError):
        run(user_store.update_user_by_id("user-001", {"phone": "555"}))

    assert run(user_store.find_user_by_id("user-001")).phone is None


def test_user_store_reads_existing_file(tmp_path):
    from modules.users.store import UserStore

    path = tmp_path / "users.json"
    path.write_text(json.dumps([make_user().to_json()]))

    store = UserStore(str(path))

    assert run(store.find_user_by_username("alice@example.com")).id == "user-001"
    assert run(store.find_user_by_username("nobody")) is None


def test_user_store_refuses_duplicate_ids(user_store):
    run(user_store.add_user(make_user()))

    with pytest.raises(ValueError):
        run(user_store.add_user(make_user(username="other")))


def test_reset_token_lookup_needs_expiry(user_store):
    from modules.users.store import hash_token

    run(user_store.add_user(make_user(reset_token=hash_token("t0k3n"))))

    assert run(user_store.find_user_by_reset_token("t0k3n")) is None

    run(user_store.update_user_by_id("user-001", {"reset_token_expires_at": "2030-01-01T00:00:00.000Z"}))

    assert run(user_store.find_user_by_reset_token("t0k3n")).id == "user-001"
