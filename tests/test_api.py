from __future__ import annotations

import json

import pytest

from src.project_tracker.project_tracker.main import create_app

ADMIN = {"id": "1", "username": "superadmin", "password": "admin123", "role": "Super Admin",
         "name": "Admin", "department": "Product Management"}


@pytest.fixture()
def client(tmp_path):
    (tmp_path / "users.json").write_text(json.dumps({"users": [ADMIN]}), encoding="utf-8")
    app = create_app(
        STORAGE_BACKEND="json",
        DATA_DIR=str(tmp_path),
        DEBUG=False,
        AUTO_INIT_DB=False,
        AUTO_SEED_DB=False,
        CORS_ORIGINS="*",
    )
    app.config["TESTING"] = True
    return app.test_client()


def _new_user(client, **overrides):
    payload = {"username": "a", "password": "pw", "name": "A", "role": "Team Member", "department": "QA"}
    payload.update(overrides)
    return client.post("/api/users", json=payload)


def test_list_users_omits_passwords(client):
    resp = client.get("/api/auth/users")

    assert resp.status_code == 200
    assert resp.get_json() == [{k: v for k, v in ADMIN.items() if k != "password"}]


def test_login_success_and_failure(client):
    ok = client.post("/api/auth/login", json={"username": "superadmin", "password": "admin123"})
    assert ok.status_code == 200
    body = ok.get_json()
    assert body["success"] is True
    assert body["user"]["view"] == "super_admin"
    assert "password" not in body["user"]

    bad = client.post("/api/auth/login", json={"username": "superadmin", "password": "nope"})
    assert bad.status_code == 401
    assert bad.get_json() == {"success": False, "message": "Invalid username or password"}

    missing = client.post("/api/auth/login", json={"username": "superadmin"})
    assert missing.status_code == 400


def test_create_user_twice_is_duplicate(client):
    first = _new_user(client)
    assert first.status_code == 201
    assert first.get_json()["user"]["username"] == "a"

    second = _new_user(client)
    assert second.status_code == 400
    assert second.get_json()["message"] == "Username already exists"


def test_create_user_missing_department(client):
    resp = _new_user(client, department="")

    assert resp.status_code == 400
    assert resp.get_json()["message"] == "Department is required"


def test_super_admin_cannot_be_deleted_or_edited(client):
    assert client.delete("/api/users/1").status_code == 403
    assert client.put("/api/users/1", json={"name": "x"}).status_code == 403
    assert len(client.get("/api/auth/users").get_json()) == 1


def test_update_and_delete_user(client):
    user_id = _new_user(client).get_json()["user"]["id"]

    updated = client.put(f"/api/users/{user_id}", json={"name": "Renamed"})
    assert updated.status_code == 200
    assert updated.get_json()["user"]["name"] == "Renamed"

    deleted = client.delete(f"/api/users/{user_id}")
    assert deleted.get_json() == {"success": True, "message": "User deleted successfully"}
    assert client.delete(f"/api/users/{user_id}").status_code == 404


def test_project_crud(client):
    created = client.post("/api/projects", json={"name": "Portal", "status": "Ongoing", "teamMembers": ["1"]})
    assert created.status_code == 201
    project = created.get_json()

    updated = client.put(f"/api/projects/{project['id']}", json={"status": "LIVE"})
    assert updated.status_code == 200
    assert updated.get_json()["status"] == "LIVE"

    assert client.delete(f"/api/projects/{project['id']}").status_code == 204
    assert client.get("/api/projects").get_json() == []


def test_put_nonexistent_project_is_404_and_collection_unchanged(client):
    client.post("/api/projects", json={"name": "Portal"})
    before = client.get("/api/projects").get_json()

    resp = client.put("/api/projects/does-not-exist", json={"name": "X"})

    assert resp.status_code == 404
    assert client.get("/api/projects").get_json() == before


def test_invalid_project_is_400(client):
    resp = client.post("/api/projects", json={"name": "P", "status": "Paused"})
    assert resp.status_code == 400


def test_infinite_page_count_is_400(client):
    resp = client.post("/api/projects", data='{"name": "P", "commonPages": Infinity}',
                       content_type="application/json")

    assert resp.status_code == 400
    assert resp.get_json()["success"] is False
    assert client.get("/api/projects").get_json() == []


def test_members_crud_and_roster(client):
    assert client.get("/api/members/roster").get_json() == [{"role": "Team Leader", "members": []}]

    created = client.post("/api/members", json={"name": "Tom", "role": "Team Leader", "department": "QA"})
    assert created.status_code == 201
    member_id = created.get_json()["id"]

    assert client.put(f"/api/members/{member_id}", json={"name": "Tim"}).get_json()["name"] == "Tim"
    assert client.delete(f"/api/members/{member_id}").status_code == 204
    assert client.delete(f"/api/members/{member_id}").status_code == 404


def test_dashboard_endpoint(client):
    member = _new_user(client, username="m", name="Mia").get_json()["user"]
    client.post("/api/projects", json={"name": "Portal", "status": "LIVE", "teamMembers": [member["id"]]})

    resp = client.get("/api/dashboard", query_string={"role": "Team Leader", "sortField": "live", "sortOrder": "desc"})

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["view"] == "team_leader"
    assert body["members"][0]["name"] == "Mia"
    assert body["members"][0]["live"] == 1
    assert client.get("/api/dashboard", query_string={"sortOrder": "up"}).status_code == 400


def test_unknown_route_and_method_are_json(client):
    missing = client.get("/api/nothing-here")
    assert missing.status_code == 404
    assert missing.get_json()["success"] is False

    wrong = client.patch("/api/projects")
    assert wrong.status_code == 405
    assert wrong.get_json()["success"] is False


def test_storage_failure_is_500(client, tmp_path):
    (tmp_path / "db.json").write_text("{broken", encoding="utf-8")

    resp = client.get("/api/projects")

    assert resp.status_code == 500
    assert resp.get_json()["success"] is False
    assert "error" not in resp.get_json()
