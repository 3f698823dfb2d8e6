import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio


# ── USERS ─────────────────────────────────────────────────────────────────────

async def test_create_user(async_client: AsyncClient, auth_headers: dict):
    resp = await async_client.post("/users", json={"email": "a@example.com", "name": "A", "photoURL": "x.png"})
    assert resp.status_code == 200
    assert resp.json()["acknowledged"] is True

    users = (await async_client.get("/users", headers=auth_headers)).json()
    assert [u["email"] for u in users] == ["a@example.com"]


async def test_duplicate_email_conflicts(async_client: AsyncClient):
    first = await async_client.post("/users", json={"email": "dup@example.com"})
    assert first.status_code == 200

    second = await async_client.post("/users", json={"email": "dup@example.com", "name": "Other"})
    assert second.status_code == 409
    assert second.json()["error"] == "User already exists"


async def test_list_users_unauthorized(async_client: AsyncClient):
    """Unauthenticated request returns 401."""
    resp = await async_client.get("/users")
    assert resp.status_code == 401


async def test_create_user_invalid_email(async_client: AsyncClient):
    resp = await async_client.post("/users", json={"email": "not-an-email"})
    assert resp.status_code == 400


# ── SERVICES ──────────────────────────────────────────────────────────────────

async def test_services_round_trip(async_client: AsyncClient, auth_headers: dict):
    for title in ("Web Design", "SEO"):
        resp = await async_client.post("/services", json={"title": title, "price": 100}, headers=auth_headers)
        assert resp.status_code == 200

    services = (await async_client.get("/services")).json()
    assert [s["title"] for s in services] == ["Web Design", "SEO"]
    assert services[0]["price"] == 100


async def test_create_service_requires_admin(async_client: AsyncClient):
    resp = await async_client.post("/services", json={"title": "SEO"})
    assert resp.status_code == 401


async def test_empty_service_rejected(async_client: AsyncClient, auth_headers: dict):
    resp = await async_client.post("/services", json={}, headers=auth_headers)
    assert resp.status_code == 400
