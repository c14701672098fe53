"""Test fixtures for the FarmHub API tests.

Settings are pinned through the environment before ``farmhub`` is imported:
an in-memory SQLite database, no background scheduler and a write rate
limit high enough not to interfere.
"""
from __future__ import annotations

import os
from datetime import date, timedelta
from typing import Any, Dict

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SCHEDULER_ENABLED"] = "false"
os.environ["WRITE_RATE_LIMIT"] = "10000/minute"

import pytest
from fastapi.testclient import TestClient

from farmhub.database import Base, SessionLocal, engine, get_db
from farmhub.main import app


@pytest.fixture()
def db_session():
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def client(db_session) -> TestClient:
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture()
def farm(client: TestClient) -> Dict[str, Any]:
    resp = client.post(
        "/farms",
        json={"name": "Green Valley Farm", "size": 120, "unit": "acres", "location": "Salinas, CA"},
    )
    assert resp.status_code == 201, resp.text
    return resp.json()


@pytest.fixture()
def project(client: TestClient) -> Dict[str, Any]:
    resp = client.post(
        "/projects",
        json={"title": "Greenhouse expansion", "description": "Second hoop house", "status": "active"},
    )
    assert resp.status_code == 201, resp.text
    return resp.json()


@pytest.fixture()
def crop_payload(farm: Dict[str, Any]) -> Dict[str, Any]:
    today = date.today()
    return {
        "farm_id": farm["id"],
        "name": "Tomatoes",
        "variety": "Roma",
        "planting_date": (today - timedelta(days=10)).isoformat(),
        "expected_harvest": (today + timedelta(days=30)).isoformat(),
        "status": "Growing",
        "area": 12.5,
    }
