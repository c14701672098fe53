import pytest


def _farm(client):
    return client.post("/farms", json={"name": "North Field", "size": 10, "location": "Davis, CA"}).json()


def _project(client):
    return client.post("/projects", json={"title": "Cold storage"}).json()


def _task(client):
    return client.post("/tasks", json={"title": "Sharpen tools", "project_id": _project(client)["id"]}).json()


def _create_crop(client):
    payload = {
        "farm_id": _farm(client)["id"], "name": "Beans", "variety": "Pole",
        "planting_date": "2024-04-01", "expected_harvest": "2024-06-15", "area": 2,
    }
    return "crops", client.post("/crops", json=payload).json(), {"status": "Growing"}


def _create_task(client):
    return "tasks", _task(client), {"priority": "high"}


def _create_transaction(client):
    payload = {
        "farm_id": _farm(client)["id"], "type": "expense", "category": "Labor",
        "amount": "80", "description": "Pickers", "date": "2024-05-02",
    }
    return "transactions", client.post("/transactions", json=payload).json(), {"amount": "95"}


def _create_project(client):
    return "projects", _project(client), {"status": "active"}


def _create_comment(client):
    comment = client.post("/comments", json={"task_id": _task(client)["id"], "text": "Done by Friday"}).json()
    return "comments", comment, {"text": "Done by Thursday"}


def _create_farm(client):
    return "farms", _farm(client), {"size": 12}


@pytest.mark.parametrize(
    "entity_type, create",
    [
        ("farm", _create_farm),
        ("crop", _create_crop),
        ("task", _create_task),
        ("transaction", _create_transaction),
        ("project", _create_project),
        ("comment", _create_comment),
    ],
)
def test_every_write_is_audited(client, entity_type, create):
    path, entity, changes = create(client)

    assert client.put(f"/{path}/{entity['id']}", json=changes).status_code == 200
    assert client.delete(f"/{path}/{entity['id']}").status_code == 204

    rows = client.get("/audit", params={"entity_type": entity_type, "entity_id": entity["id"]}).json()
    assert [row["action"] for row in rows] == ["DELETE", "UPDATE", "CREATE"]
    assert rows[0]["diff_json"]["after"] is None
    assert rows[0]["diff_json"]["before"]["id"] == entity["id"]
    assert rows[2]["diff_json"]["before"] is None


def test_audit_limit(client):
    for _ in range(3):
        _farm(client)
    rows = client.get("/audit", params={"entity_type": "farm", "limit": 2}).json()
    assert len(rows) == 2
    assert client.get("/audit", params={"limit": 0}).status_code == 422
