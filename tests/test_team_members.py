import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio


async def _create_member(ac: AsyncClient, headers: dict, **overrides) -> str:
    payload = {"name": "Rafi", "position": "Engineer", **overrides}
    resp = await ac.post("/team-members", json=payload, headers=headers)
    assert resp.status_code == 200, resp.text
    return resp.json()["insertedId"]


async def test_create_defaults(async_client: AsyncClient, auth_headers: dict):
    member_id = await _create_member(async_client, auth_headers, email="")

    data = (await async_client.get(f"/team-members/{member_id}")).json()
    assert data["isActive"] is True
    assert data["displayOrder"] == 0
    assert "email" not in data


async def test_display_order_from_string(async_client: AsyncClient, auth_headers: dict):
    member_id = await _create_member(async_client, auth_headers, displayOrder="3")
    assert (await async_client.get(f"/team-members/{member_id}")).json()["displayOrder"] == 3


async def test_invalid_email_rejected(async_client: AsyncClient, auth_headers: dict):
    resp = await async_client.post("/team-members", json={"name": "X", "email": "nope"}, headers=auth_headers)
    assert resp.status_code == 400


async def test_sorted_by_display_order(async_client: AsyncClient, auth_headers: dict):
    await _create_member(async_client, auth_headers, name="Third", displayOrder=3)
    await _create_member(async_client, auth_headers, name="First", displayOrder=1)
    await _create_member(async_client, auth_headers, name="Second", displayOrder=2)

    names = [m["name"] for m in (await async_client.get("/team-members")).json()["teamMembers"]]
    assert names == ["First", "Second", "Third"]


async def test_active_filter_and_expertise_search(async_client: AsyncClient, auth_headers: dict):
    await _create_member(async_client, auth_headers, name="A", expertise=["React", "Node"])
    await _create_member(async_client, auth_headers, name="B", expertise=["Django"], isActive=False)

    active = (await async_client.get("/team-members", params={"active": "true"})).json()
    assert [m["name"] for m in active["teamMembers"]] == ["A"]

    everyone = (await async_client.get("/team-members", params={"active": "all"})).json()
    assert everyone["total"] == 2

    found = (await async_client.get("/team-members", params={"search": "django"})).json()
    assert [m["name"] for m in found["teamMembers"]] == ["B"]


async def test_update_and_delete(async_client: AsyncClient, auth_headers: dict):
    member_id = await _create_member(async_client, auth_headers)

    resp = await async_client.put(f"/team-members/{member_id}", json={"position": "Lead"}, headers=auth_headers)
    assert resp.status_code == 200
    data = (await async_client.get(f"/team-members/{member_id}")).json()
    assert data["position"] == "Lead"
    assert data["name"] == "Rafi"

    assert (await async_client.delete(f"/team-members/{member_id}", headers=auth_headers)).status_code == 200
    assert (await async_client.get(f"/team-members/{member_id}")).status_code == 404
