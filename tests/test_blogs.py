import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio


async def _create_blog(ac: AsyncClient, headers: dict, **overrides) -> str:
    payload = {"title": "Hello", "excerpt": "intro", "author": "Amin", "category": "News", **overrides}
    resp = await ac.post("/blogs", json=payload, headers=headers)
    assert resp.status_code == 200
    return resp.json()["insertedId"]


async def test_publish_immediately_sets_status(async_client: AsyncClient, auth_headers: dict):
    blog_id = await _create_blog(async_client, auth_headers, publishImmediately=True)

    data = (await async_client.get(f"/blogs/{blog_id}")).json()
    assert data["status"] == "Published"
    assert data["views"] == 0
    assert data["tags"] == []
    assert "publishImmediately" not in data


async def test_default_status_is_draft(async_client: AsyncClient, auth_headers: dict):
    blog_id = await _create_blog(async_client, auth_headers, status="Published")
    data = (await async_client.get(f"/blogs/{blog_id}")).json()
    assert data["status"] == "Draft"


async def test_status_filter(async_client: AsyncClient, auth_headers: dict):
    await _create_blog(async_client, auth_headers, title="Draft one")
    await _create_blog(async_client, auth_headers, title="Live one", publishImmediately=True)

    resp = await async_client.get("/blogs", params={"status": "Published"})
    data = resp.json()
    assert data["total"] == 1
    assert data["blogs"][0]["title"] == "Live one"

    assert (await async_client.get("/blogs", params={"status": "All Status"})).json()["total"] == 2


async def test_update_publish_flag(async_client: AsyncClient, auth_headers: dict):
    blog_id = await _create_blog(async_client, auth_headers)

    resp = await async_client.put(f"/blogs/{blog_id}", json={"publishImmediately": True}, headers=auth_headers)
    assert resp.status_code == 200
    assert (await async_client.get(f"/blogs/{blog_id}")).json()["status"] == "Published"

    # Without the flag the status is left alone
    await async_client.put(f"/blogs/{blog_id}", json={"title": "Renamed"}, headers=auth_headers)
    data = (await async_client.get(f"/blogs/{blog_id}")).json()
    assert data["status"] == "Published"
    assert data["title"] == "Renamed"


async def test_increment_views(async_client: AsyncClient, auth_headers: dict):
    blog_id = await _create_blog(async_client, auth_headers)

    for _ in range(3):
        resp = await async_client.put(f"/blogs/{blog_id}/views")
        assert resp.status_code == 200

    assert (await async_client.get(f"/blogs/{blog_id}")).json()["views"] == 3


async def test_increment_views_missing_blog(async_client: AsyncClient):
    resp = await async_client.put("/blogs/64b7f0c2a1b2c3d4e5f60718/views")
    assert resp.status_code == 404


async def test_delete_requires_admin(async_client: AsyncClient, auth_headers: dict):
    blog_id = await _create_blog(async_client, auth_headers)
    assert (await async_client.delete(f"/blogs/{blog_id}")).status_code == 401
    assert (await async_client.delete(f"/blogs/{blog_id}", headers=auth_headers)).status_code == 200
