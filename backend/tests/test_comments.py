from datetime import datetime

import pytest


@pytest.fixture()
def task(client, project):
    resp = client.post("/tasks", json={"title": "File permit", "project_id": project["id"]})
    return resp.json()


def test_create_and_list_comments_newest_first(client, task):
    first = client.post("/comments", json={"task_id": task["id"], "text": "Called the county"}).json()
    second = client.post("/comments", json={"task_id": task["id"], "text": " Site plan sent "}).json()
    assert second["text"] == "Site plan sent"

    rows = client.get("/comments", params={"task_id": task["id"]}).json()
    assert [c["id"] for c in rows] == [second["id"], first["id"]]
    assert client.get(f"/tasks/{task['id']}/comments").json() == rows


def test_comment_requires_text_and_task(client, task):
    resp = client.post("/comments", json={"task_id": task["id"], "text": ""})
    assert resp.status_code == 400

    resp = client.post("/comments", json={"task_id": 999, "text": "Hello"})
    assert resp.status_code == 404
    assert resp.json()["detail"] == "Task not found"


def test_update_comment_moves_timestamp(client, task):
    comment = client.post("/comments", json={"task_id": task["id"], "text": "Draft"}).json()

    resp = client.put(f"/comments/{comment['id']}", json={"text": "Final"})
    assert resp.status_code == 200
    assert resp.json()["text"] == "Final"
    assert datetime.fromisoformat(resp.json()["timestamp"]) > datetime.fromisoformat(comment["timestamp"])

    resp = client.put(f"/comments/{comment['id']}", json={"text": "Backdated", "timestamp": "2024-01-02T03:04:05"})
    assert resp.json()["timestamp"].startswith("2024-01-02T03:04:05")


def test_delete_comment(client, task):
    comment = client.post("/comments", json={"task_id": task["id"], "text": "Remove me"}).json()
    assert client.delete(f"/comments/{comment['id']}").status_code == 204
    assert client.get(f"/comments/{comment['id']}").status_code == 404
