from datetime import date, timedelta


def _create_task(client, **fields):
    resp = client.post("/tasks", json={"title": "Weed the beds", **fields})
    assert resp.status_code == 201, resp.text
    return resp.json()


def test_task_needs_a_parent(client):
    resp = client.post("/tasks", json={"title": "Orphan"})
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Task must belong to a project or a farm"


def test_task_parent_must_exist(client):
    resp = client.post("/tasks", json={"title": "Lost", "project_id": 77})
    assert resp.status_code == 404
    assert resp.json()["detail"] == "Project not found"


def test_create_task_defaults(client, farm):
    task = _create_task(client, farm_id=farm["id"], category="  ")
    assert task["status"] == "to-do"
    assert task["completed"] is False
    assert task["priority"] == "medium"
    assert task["category"] == "General"
    assert task["urgency"] == "none"


def test_created_completed_task_is_marked_completed(client, project):
    task = _create_task(client, project_id=project["id"], status="completed")
    assert task["completed"] is True
    assert task["urgency"] == "completed"


def test_task_urgency_labels(client, farm):
    today = date.today()
    overdue = _create_task(client, farm_id=farm["id"], due_date=(today - timedelta(days=1)).isoformat())
    due_today = _create_task(client, farm_id=farm["id"], due_date=today.isoformat())
    soon = _create_task(client, farm_id=farm["id"], due_date=(today + timedelta(days=3)).isoformat())
    later = _create_task(client, farm_id=farm["id"], due_date=(today + timedelta(days=4)).isoformat())

    assert overdue["urgency"] == "overdue"
    assert due_today["urgency"] == "due-today"
    assert soon["urgency"] == "due-soon"
    assert later["urgency"] == "upcoming"


def test_toggle_keeps_status_in_sync(client, project):
    task = _create_task(client, project_id=project["id"], status="in-progress")

    resp = client.post(f"/tasks/{task['id']}/toggle")
    assert resp.status_code == 200
    assert resp.json()["completed"] is True
    assert resp.json()["status"] == "completed"

    resp = client.post(f"/tasks/{task['id']}/toggle")
    assert resp.json()["completed"] is False
    assert resp.json()["status"] == "to-do"


def test_update_status_wins_over_completed(client, project):
    task = _create_task(client, project_id=project["id"])

    resp = client.put(f"/tasks/{task['id']}", json={"completed": True, "status": "blocked"})
    assert resp.status_code == 200
    assert resp.json()["status"] == "blocked"
    assert resp.json()["completed"] is False

    resp = client.put(f"/tasks/{task['id']}", json={"completed": True})
    assert resp.json()["status"] == "completed"
    assert resp.json()["completed"] is True


def test_update_task_fields(client, project):
    task = _create_task(client, project_id=project["id"])
    resp = client.put(f"/tasks/{task['id']}", json={"title": " Mulch beds ", "priority": "high"})
    assert resp.status_code == 200
    assert resp.json()["title"] == "Mulch beds"
    assert resp.json()["priority"] == "high"
    assert resp.json()["id"] == task["id"]

    resp = client.put(f"/tasks/{task['id']}", json={"title": ""})
    assert resp.status_code == 400


def test_list_tasks_filters(client, farm, project):
    _create_task(client, farm_id=farm["id"], priority="high")
    _create_task(client, project_id=project["id"], status="completed")

    assert len(client.get("/tasks").json()) == 2
    assert len(client.get("/tasks", params={"farm_id": farm["id"]}).json()) == 1
    assert len(client.get("/tasks", params={"project_id": project["id"]}).json()) == 1
    assert len(client.get("/tasks", params={"completed": "true"}).json()) == 1
    assert len(client.get("/tasks", params={"priority": "high"}).json()) == 1
    assert len(client.get("/tasks", params={"status": "to-do"}).json()) == 1


def test_delete_task_removes_comments(client, project):
    task = _create_task(client, project_id=project["id"])
    comment = client.post("/comments", json={"task_id": task["id"], "text": "On it"}).json()

    assert client.delete(f"/tasks/{task['id']}").status_code == 204
    assert client.get(f"/tasks/{task['id']}").status_code == 404
    assert client.get(f"/comments/{comment['id']}").status_code == 404


def test_update_can_clear_due_date(client, farm):
    overdue = (date.today() - timedelta(days=2)).isoformat()
    task = _create_task(client, farm_id=farm["id"], due_date=overdue)
    assert task["urgency"] == "overdue"

    resp = client.put(f"/tasks/{task['id']}", json={"priority": "low"})
    assert resp.json()["due_date"] == overdue

    resp = client.put(f"/tasks/{task['id']}", json={"due_date": None})
    assert resp.status_code == 200
    assert resp.json()["due_date"] is None
    assert resp.json()["urgency"] == "none"


def test_delete_task_audits_its_comments(client, project):
    task = _create_task(client, project_id=project["id"])
    comment = client.post("/comments", json={"task_id": task["id"], "text": "On it"}).json()

    client.delete(f"/tasks/{task['id']}")

    rows = client.get("/audit", params={"entity_type": "comment", "entity_id": comment["id"]}).json()
    assert [row["action"] for row in rows] == ["DELETE", "CREATE"]
    assert rows[0]["diff_json"]["before"]["text"] == "On it"
