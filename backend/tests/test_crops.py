from datetime import date, timedelta


def test_create_crop_derives_progress(client, farm, crop_payload):
    resp = client.post("/crops", json=crop_payload)
    assert resp.status_code == 201, resp.text
    crop = resp.json()
    assert crop["farm_name"] == farm["name"]
    assert crop["progress"] == 25.0
    assert crop["days_to_harvest"] == 30


def test_create_crop_requires_harvest_after_planting(client, crop_payload):
    payload = {**crop_payload, "expected_harvest": crop_payload["planting_date"]}
    resp = client.post("/crops", json=payload)
    assert resp.status_code == 422


def test_create_crop_unknown_farm(client, crop_payload):
    resp = client.post("/crops", json={**crop_payload, "farm_id": 999})
    assert resp.status_code == 404
    assert resp.json()["detail"] == "Farm not found"


def test_create_crop_rejects_non_positive_area(client, crop_payload):
    resp = client.post("/crops", json={**crop_payload, "area": 0})
    assert resp.status_code == 422


def test_update_crop_checks_merged_dates(client, crop_payload):
    crop = client.post("/crops", json=crop_payload).json()
    too_early = (date.today() - timedelta(days=20)).isoformat()

    resp = client.put(f"/crops/{crop['id']}", json={"expected_harvest": too_early})
    assert resp.status_code == 400
    assert resp.json()["detail"] == "expected_harvest must be after planting_date"

    resp = client.put(f"/crops/{crop['id']}", json={"status": "Mature", "notes": " staked "})
    assert resp.status_code == 200
    assert resp.json()["status"] == "Mature"
    assert resp.json()["notes"] == "staked"


def test_finished_crop_is_fully_grown(client, crop_payload):
    today = date.today()
    payload = {
        **crop_payload,
        "planting_date": (today - timedelta(days=90)).isoformat(),
        "expected_harvest": (today - timedelta(days=5)).isoformat(),
    }
    crop = client.post("/crops", json=payload).json()
    assert crop["progress"] == 100.0
    assert crop["days_to_harvest"] == -5


def test_list_crops_filters(client, farm, crop_payload):
    client.post("/crops", json=crop_payload)
    client.post("/crops", json={**crop_payload, "name": "Lettuce", "variety": "Butterhead", "status": "Seedling"})

    assert len(client.get("/crops").json()) == 2
    assert [c["name"] for c in client.get("/crops", params={"status": "Seedling"}).json()] == ["Lettuce"]
    assert [c["name"] for c in client.get("/crops", params={"q": "roma"}).json()] == ["Tomatoes"]
    assert len(client.get("/crops", params={"q": "green valley"}).json()) == 2
    assert client.get("/crops", params={"farm_id": farm["id"] + 1}).json() == []


def test_delete_crop(client, crop_payload):
    crop = client.post("/crops", json=crop_payload).json()
    assert client.delete(f"/crops/{crop['id']}").status_code == 204
    assert client.get(f"/crops/{crop['id']}").status_code == 404
    assert client.delete(f"/crops/{crop['id']}").status_code == 404


def test_update_can_clear_notes(client, crop_payload):
    crop = client.post("/crops", json={**crop_payload, "notes": "Drip line on row 3"}).json()
    resp = client.put(f"/crops/{crop['id']}", json={"notes": None})
    assert resp.status_code == 200
    assert resp.json()["notes"] is None
