"""
End-to-end walkthroughs over HTTP against the in-memory database.
"""
import pytest
from fastapi import status

from pizza_pension.client.api import PizzaPensionClient
from pizza_pension.client.dashboard import AdminDashboard

from conftest import valid_submission


@pytest.mark.asyncio
async def test_anna_registers_and_admin_sees_exactly_her(admin_client):
    response = await admin_client.post("/api/v1/register", json=valid_submission())

    assert response.status_code == status.HTTP_201_CREATED
    created = response.json()
    assert created["id"]
    assert created["createdAt"]

    listing = await admin_client.get("/api/v1/registrations")
    assert listing.status_code == status.HTTP_200_OK
    assert listing.json() == [created]


@pytest.mark.asyncio
async def test_missing_email_leaves_store_unchanged(admin_client):
    payload = valid_submission()
    del payload["email"]

    response = await admin_client.post("/api/v1/register", json=payload)

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert "email" in response.json()["detail"]
    assert (await admin_client.get("/api/v1/registrations")).json() == []


@pytest.mark.asyncio
async def test_nineteenth_registration_is_accepted(admin_client):
    for i in range(18):
        response = await admin_client.post(
            "/api/v1/register", json=valid_submission(firstName=f"Guest {i + 1}")
        )
        assert response.status_code == status.HTTP_201_CREATED

    response = await admin_client.post("/api/v1/register", json=valid_submission(firstName="Guest 19"))
    assert response.status_code == status.HTTP_201_CREATED

    dashboard = AdminDashboard(PizzaPensionClient(admin_client))
    await dashboard.load()
    assert dashboard.counter.label == "19 / 18"
    assert dashboard.counter.remaining == -1

    summary = (await admin_client.get("/api/v1/registrations/summary")).json()
    assert summary["counter"]["label"] == "19 / 18"
    assert summary["counter"]["remaining"] == -1


@pytest.mark.asyncio
async def test_ids_are_unique(admin_client):
    ids = set()
    for i in range(5):
        response = await admin_client.post("/api/v1/register", json=valid_submission(firstName=f"Guest {i}"))
        ids.add(response.json()["id"])

    assert len(ids) == 5
    assert {r["id"] for r in (await admin_client.get("/api/v1/registrations")).json()} == ids
