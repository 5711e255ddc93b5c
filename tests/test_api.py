# tests/test_api.py

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Callable, Dict

from fastapi.testclient import TestClient

from .conftest import USER_A, USER_B, make_token

Headers = Callable[[str], Dict[str, str]]


def _create(client: TestClient, headers: Dict[str, str], **body) -> dict:
    response = client.post("/api/tasks", json=body, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()["task"]


def test_health(client: TestClient) -> None:
    assert client.get("/health").json()["status"] == "healthy"


def test_requests_without_token_are_rejected(client: TestClient) -> None:
    assert client.get("/api/tasks").status_code == 401
    bad = client.get("/api/tasks", headers={"Authorization": "Bearer not-a-jwt"})
    assert bad.status_code == 401


def test_expired_token_is_rejected(client: TestClient) -> None:
    token = make_token(USER_A, expires_in=timedelta(minutes=-5))
    response = client.get("/api/tasks", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 401
    assert response.json()["detail"] == "Token has expired"


def test_me_registers_user_on_first_request(client: TestClient, auth_headers: Headers) -> None:
    response = client.get("/api/me", headers=auth_headers("new-user"))

    assert response.status_code == 200
    assert response.json()["user"]["id"] == "new-user"
    assert response.json()["user"]["email"] == "new-user@example.com"


def test_create_and_get_task_with_tags(client: TestClient, auth_headers: Headers) -> None:
    headers = auth_headers(USER_A)
    created = _create(client, headers, title="Plan sprint", priority="high", tags=["work", "planning"])

    assert created["status"] == "todo"
    assert created["priority"] == "high"
    assert sorted(t["name"] for t in created["tags"]) == ["planning", "work"]

    fetched = client.get(f"/api/tasks/{created['id']}", headers=headers)
    assert fetched.status_code == 200
    assert fetched.json()["task"]["id"] == created["id"]


def test_create_validation_errors(client: TestClient, auth_headers: Headers) -> None:
    headers = auth_headers(USER_A)

    assert client.post("/api/tasks", json={"title": ""}, headers=headers).status_code == 422
    assert client.post("/api/tasks", json={"title": "x", "status": "done"}, headers=headers).status_code == 422

    blank = client.post("/api/tasks", json={"title": "   "}, headers=headers)
    assert blank.status_code == 422
    assert blank.json()["error"]["code"] == "VALIDATION_ERROR"

    assert client.get("/api/tasks", headers=headers).json()["tasks"] == []


def test_patch_is_partial_and_replaces_tags(client: TestClient, auth_headers: Headers) -> None:
    headers = auth_headers(USER_A)
    task = _create(client, headers, title="Read", description="chapter 1", tags=["x"])

    renamed = client.patch(f"/api/tasks/{task['id']}", json={"title": "Read more"}, headers=headers).json()["task"]
    assert renamed["description"] == "chapter 1"
    assert [t["name"] for t in renamed["tags"]] == ["x"]

    cleared = client.patch(f"/api/tasks/{task['id']}", json={"tags": []}, headers=headers).json()["task"]
    assert cleared["tags"] == []
    assert cleared["title"] == "Read more"


def test_patch_with_null_tags_is_rejected(client: TestClient, auth_headers: Headers) -> None:
    headers = auth_headers(USER_A)
    task = _create(client, headers, title="Tagged", tags=["keep"])

    response = client.patch(f"/api/tasks/{task['id']}", json={"tags": None}, headers=headers)

    assert response.status_code == 422
    assert response.json()["error"]["details"]["field"] == "tags"
    kept = client.get(f"/api/tasks/{task['id']}", headers=headers).json()["task"]
    assert [t["name"] for t in kept["tags"]] == ["keep"]


def test_timestamps_are_serialized_as_utc(client: TestClient, auth_headers: Headers) -> None:
    task = _create(client, auth_headers(USER_A), title="When", deadline="2024-06-01T09:30:00", tags=["t"])

    for value in (task["created_at"], task["updated_at"], task["deadline"], task["tags"][0]["created_at"]):
        assert datetime.fromisoformat(value.replace("Z", "+00:00")).utcoffset() == timedelta(0)
    assert task["deadline"].startswith("2024-06-01T09:30:00")


def test_users_may_share_an_email(client: TestClient) -> None:
    for user_id in ("first-account", "second-account"):
        token = make_token(user_id, "shared@example.com")
        response = client.get("/api/me", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 200
        assert response.json()["user"]["email"] == "shared@example.com"


def test_other_users_tasks_are_not_found(client: TestClient, auth_headers: Headers) -> None:
    task = _create(client, auth_headers(USER_A), title="Mine")
    intruder = auth_headers(USER_B)

    for response in (
        client.get(f"/api/tasks/{task['id']}", headers=intruder),
        client.patch(f"/api/tasks/{task['id']}", json={"title": "x"}, headers=intruder),
        client.delete(f"/api/tasks/{task['id']}", headers=intruder),
    ):
        assert response.status_code == 404
        assert response.json()["error"]["code"] == "NOT_FOUND"

    assert client.get("/api/tasks", headers=intruder).json()["tasks"] == []


def test_delete_task_keeps_tags(client: TestClient, auth_headers: Headers) -> None:
    headers = auth_headers(USER_A)
    task = _create(client, headers, title="Gone soon", tags=["keeper"])

    response = client.delete(f"/api/tasks/{task['id']}", headers=headers)
    assert response.status_code == 200
    assert response.json()["message"] == "Task deleted successfully"

    assert client.get(f"/api/tasks/{task['id']}", headers=headers).status_code == 404
    assert [t["name"] for t in client.get("/api/tags", headers=headers).json()["tags"]] == ["keeper"]


def test_list_filters_by_tag(client: TestClient, auth_headers: Headers) -> None:
    headers = auth_headers(USER_A)
    _create(client, headers, title="a", tags=["work"])
    _create(client, headers, title="b", tags=["home"])

    response = client.get("/api/tasks", params={"tag": "home"}, headers=headers)
    assert [t["title"] for t in response.json()["tasks"]] == ["b"]


def test_move_and_board(client: TestClient, auth_headers: Headers) -> None:
    headers = auth_headers(USER_A)
    target = _create(client, headers, title="Doing", status="in_progress")
    card = _create(client, headers, title="Todo card")

    moved = client.post(f"/api/tasks/{card['id']}/move", json={"over_id": target["id"]}, headers=headers)
    assert moved.status_code == 200
    assert moved.json()["changed"] is True
    assert moved.json()["task"]["status"] == "in_progress"

    again = client.post(f"/api/tasks/{card['id']}/move", json={"over_id": "in_progress"}, headers=headers)
    assert again.json()["changed"] is False

    board = client.get("/api/board", headers=headers).json()["columns"]
    assert board["todo"] == []
    assert sorted(t["title"] for t in board["in_progress"]) == ["Doing", "Todo card"]
    assert board["completed"] == []


def test_tags_are_listed_per_user(client: TestClient, auth_headers: Headers) -> None:
    _create(client, auth_headers(USER_A), title="a", tags=["alpha"])
    _create(client, auth_headers(USER_B), title="b", tags=["beta"])

    names = [t["name"] for t in client.get("/api/tags", headers=auth_headers(USER_B)).json()["tags"]]
    assert names == ["beta"]


def test_dashboard_activity_and_summary(client: TestClient, auth_headers: Headers) -> None:
    headers = auth_headers(USER_A)
    _create(client, headers, title="a")
    _create(client, headers, title="b", status="in_progress")
    _create(client, headers, title="c", status="completed")

    activity = client.get("/api/dashboard/activity", params={"window_days": 7}, headers=headers).json()
    assert activity["window_days"] == 7
    assert len(activity["buckets"]) == 1
    assert activity["buckets"][0]["total"] == 3
    assert activity["buckets"][0]["active"] == 1
    assert activity["buckets"][0]["completed"] == 1

    summary = client.get("/api/dashboard/summary", headers=headers).json()
    assert summary == {"total": 3, "pending": 1, "active": 1, "completed": 1, "completion_rate": 33.3}


def test_dashboard_rejects_unsupported_window(client: TestClient, auth_headers: Headers) -> None:
    response = client.get("/api/dashboard/activity", params={"window_days": 14}, headers=auth_headers(USER_A))

    assert response.status_code == 422
    assert response.json()["error"]["details"]["field"] == "window_days"
