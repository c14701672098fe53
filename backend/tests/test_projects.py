def test_create_project(client, project):
    assert project["title"] == "Greenhouse expansion"
    assert project["status"] == "active"
    assert project["priority"] == "medium"


def test_project_title_rules(client):
    resp = client.post("/projects", json={"title": "   "})
    assert resp.status_code == 400
    assert resp.json()["detail"] == "title must not be empty"

    resp = client.post("/projects", json={"title": "ab"})
    assert resp.status_code == 400
    assert resp.json()["detail"] == "title must be at least 3 characters"


def test_project_dates_in_order(client, project):
    resp = client.post("/projects", json={"title": "Backwards", "start_date": "2024-05-10", "end_date": "2024-05-01"})
    assert resp.status_code == 422

    client.put(f"/projects/{project['id']}", json={"start_date": "2024-05-10"})
    resp = client.put(f"/projects/{project['id']}", json={"end_date": "2024-05-01"})
    assert resp.status_code == 400
    assert resp.json()["detail"] == "end_date must be on or after start_date"


def test_project_detail_progress(client, project):
    for status in ("completed", "to-do", "in-progress"):
        client.post("/tasks", json={"title": f"Task {status}", "project_id": project["id"], "status": status})

    resp = client.get(f"/projects/{project['id']}")
    assert resp.status_code == 200
    detail = resp.json()
    assert detail["total_tasks"] == 3
    assert detail["completed_tasks"] == 1
    assert detail["progress"] == 33
    assert len(detail["tasks"]) == 3


def test_empty_project_has_zero_progress(client, project):
    detail = client.get(f"/projects/{project['id']}").json()
    assert detail["progress"] == 0
    assert detail["tasks"] == []


def test_list_projects_most_recently_updated_first(client, project):
    other = client.post("/projects", json={"title": "Farm stand website"}).json()
    assert [p["id"] for p in client.get("/projects").json()] == [other["id"], project["id"]]

    client.put(f"/projects/{project['id']}", json={"owner": "Maria"})
    assert [p["id"] for p in client.get("/projects").json()] == [project["id"], other["id"]]

    rows = client.get("/projects", params={"status": "active"}).json()
    assert [p["id"] for p in rows] == [project["id"]]


def test_delete_project_with_tasks_conflicts(client, project):
    task = client.post("/tasks", json={"title": "Order frame", "project_id": project["id"]}).json()

    assert client.delete(f"/projects/{project['id']}").status_code == 409

    client.delete(f"/tasks/{task['id']}")
    assert client.delete(f"/projects/{project['id']}").status_code == 204
    assert client.get(f"/projects/{project['id']}").status_code == 404


def test_update_can_clear_dates_and_owner(client):
    project = client.post("/projects", json={
        "title": "Irrigation upgrade", "start_date": "2024-01-01",
        "end_date": "2024-02-01", "owner": "Sam",
    }).json()

    resp = client.put(f"/projects/{project['id']}", json={"status": "on-hold"})
    assert resp.json()["end_date"] == "2024-02-01"

    resp = client.put(f"/projects/{project['id']}", json={"end_date": None, "owner": None})
    assert resp.status_code == 200
    body = resp.json()
    assert body["end_date"] is None
    assert body["owner"] is None
    assert body["start_date"] == "2024-01-01"
