from __future__ import annotations

import json

import pytest

from src.project_tracker.project_tracker.common.ids import IdGenerator
from src.project_tracker.project_tracker.core.exceptions import StorageError
from src.project_tracker.project_tracker.storage.json_file_repository import (
    JsonDocumentFile,
    JsonFileDocumentRepository,
)


def _repos(tmp_path, clock=None):
    ids = IdGenerator(clock=clock)
    db = JsonDocumentFile(tmp_path / "db.json", keys=("members", "projects"))
    return (
        JsonFileDocumentRepository(db, "members", ids),
        JsonFileDocumentRepository(db, "projects", ids),
    )


def test_missing_file_is_created_with_skeleton(tmp_path):
    members, _ = _repos(tmp_path)

    assert members.list_all() == []
    assert json.loads((tmp_path / "db.json").read_text(encoding="utf-8")) == {"members": [], "projects": []}


def test_create_assigns_distinct_ids_in_the_same_millisecond(tmp_path):
    members, _ = _repos(tmp_path, clock=lambda: 1700000000.0)

    a = members.create({"name": "A"})
    b = members.create({"name": "B"})

    assert a["id"] != b["id"]
    assert int(b["id"]) > int(a["id"])
    assert [m["name"] for m in members.list_all()] == ["A", "B"]


def test_create_skips_ids_already_stored(tmp_path):
    (tmp_path / "db.json").write_text(
        json.dumps({"members": [{"id": "1700000000000", "name": "old"}], "projects": []}), encoding="utf-8"
    )
    members, _ = _repos(tmp_path, clock=lambda: 1700000000.0)

    created = members.create({"name": "new"})

    assert created["id"] == "1700000000001"


def test_collections_share_one_document(tmp_path):
    members, projects = _repos(tmp_path)
    members.create({"name": "A"})
    projects.create({"name": "P"})

    data = json.loads((tmp_path / "db.json").read_text(encoding="utf-8"))
    assert [m["name"] for m in data["members"]] == ["A"]
    assert [p["name"] for p in data["projects"]] == ["P"]


def test_update_merges_and_keeps_id(tmp_path):
    members, _ = _repos(tmp_path)
    created = members.create({"name": "A", "role": "Team Leader"})

    updated = members.update(created["id"], {"name": "B", "id": "hijack"})

    assert updated == {"id": created["id"], "name": "B", "role": "Team Leader"}
    assert members.get_by_id(created["id"])["name"] == "B"


def test_update_and_delete_missing_record(tmp_path):
    members, _ = _repos(tmp_path)

    assert members.update("nope", {"name": "x"}) is None
    assert members.delete_by_id("nope") is False


def test_replace_or_merge(tmp_path):
    members, _ = _repos(tmp_path)
    members.replace_or_merge("7", {"name": "A", "role": "Team Leader"})

    assert members.replace_or_merge("7", {"name": "B"}) == {"id": "7", "name": "B"}
    assert members.replace_or_merge("7", {"role": "QA"}, merge=True) == {"id": "7", "name": "B", "role": "QA"}
    assert len(members.list_all()) == 1


def test_find_by(tmp_path):
    ids = IdGenerator()
    users = JsonFileDocumentRepository(JsonDocumentFile(tmp_path / "users.json", keys=("users",)), "users", ids)
    users.create({"username": "a"})
    users.create({"username": "b"})

    assert [u["username"] for u in users.find_by("username", "b")] == ["b"]
    assert users.find_by("username", "B") == []


def test_delete(tmp_path):
    members, _ = _repos(tmp_path)
    a = members.create({"name": "A"})
    b = members.create({"name": "B"})

    assert members.delete_by_id(a["id"]) is True
    assert [m["id"] for m in members.list_all()] == [b["id"]]


def test_corrupt_file_raises_storage_error(tmp_path):
    (tmp_path / "db.json").write_text("{not json", encoding="utf-8")
    members, _ = _repos(tmp_path)

    with pytest.raises(StorageError):
        members.list_all()


def test_failed_write_removes_temp_file_and_keeps_document(tmp_path):
    db = JsonDocumentFile(tmp_path / "db.json", keys=("members", "projects"))
    db.write({"members": [{"id": "1"}], "projects": []})

    with pytest.raises(TypeError):
        db.write({"members": [object()], "projects": []})

    assert list(tmp_path.glob("*.tmp")) == []
    assert json.loads((tmp_path / "db.json").read_text(encoding="utf-8"))["members"] == [{"id": "1"}]
