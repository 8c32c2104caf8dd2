"""Application tracker endpoints backed by SQLite."""

import asyncio

from dal.guidance_dal import GuidanceDAL
from models.guidance_records import Application

BERKELEY = {
    "university": "University of California, Berkeley",
    "program": "Computer Science",
    "deadline": "2025-12-01",
}


def test_list_is_empty_before_any_application(client):
    response = client.get("/api/applications")

    assert response.status_code == 200
    assert response.json() == []


def test_create_then_list_application(client):
    created = client.post("/api/applications", json={**BERKELEY, "documents": ["Transcript"]})

    assert created.status_code == 201
    body = created.json()
    assert body["id"] is not None
    assert body["userId"] == 1
    assert body["status"] == "not-started"
    assert body["documents"] == ["Transcript"]
    assert body["createdAt"] is not None

    listed = client.get("/api/applications").json()
    assert [app["university"] for app in listed] == [BERKELEY["university"]]


def test_patch_updates_only_given_fields(app, client):
    created = client.post("/api/applications", json={**BERKELEY, "notes": "Ask for a fee waiver"}).json()

    response = client.patch(f"/api/applications/{created['id']}", json={"status": "submitted"})

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "submitted"
    assert body["notes"] == "Ask for a fee waiver"
    assert body["deadline"] == BERKELEY["deadline"]

    stored = asyncio.run(GuidanceDAL(app.state.db_initializer).get_by_id(Application, created["id"]))
    assert stored.status == "submitted"


def test_patch_ignores_null_for_required_fields(client):
    created = client.post("/api/applications", json=BERKELEY).json()

    response = client.patch(
        f"/api/applications/{created['id']}", json={"deadline": None, "notes": "Interview booked"}
    )

    assert response.status_code == 200
    assert response.json()["deadline"] == BERKELEY["deadline"]
    assert response.json()["notes"] == "Interview booked"


def test_patch_unknown_application_returns_404(client):
    response = client.patch("/api/applications/999", json={"status": "accepted"})

    assert response.status_code == 404
    assert response.json() == {"detail": "Application not found"}


def test_invalid_status_is_rejected(client):
    assert client.post("/api/applications", json={**BERKELEY, "status": "pending"}).status_code == 422

    created = client.post("/api/applications", json=BERKELEY).json()
    response = client.patch(f"/api/applications/{created['id']}", json={"status": "done"})
    assert response.status_code == 422
