import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio


async def _create(ac: AsyncClient, headers: dict, **overrides) -> dict:
    payload = {"name": " hero.png ", "type": "Image", "size": 1000, "url": "/uploads/hero.png", **overrides}
    resp = await ac.post("/api/media", json=payload, headers=headers)
    assert resp.status_code == 201, resp.text
    return resp.json()


async def test_health(async_client: AsyncClient):
    resp = await async_client.get("/api/media/test")
    assert resp.status_code == 200
    assert resp.json()["message"] == "Media API is working!"


async def test_create_defaults(async_client: AsyncClient, auth_headers: dict):
    data = await _create(async_client, auth_headers)
    assert data["name"] == "hero.png"
    assert data["originalName"] == "hero.png"
    assert data["display_url"] == "/uploads/hero.png"
    assert data["storage_provider"] == "local"
    assert data["message"] == "Media file uploaded successfully"


async def test_create_imgbb_message(async_client: AsyncClient, auth_headers: dict):
    data = await _create(async_client, auth_headers, storage_provider="imgbb", imgbb_id="x1")
    assert data["message"].endswith("to ImgBB")


async def test_invalid_type(async_client: AsyncClient, auth_headers: dict):
    resp = await async_client.post(
        "/api/media", json={"name": "a", "type": "Spreadsheet", "size": 1}, headers=auth_headers
    )
    assert resp.status_code == 400


async def test_list_with_stats(async_client: AsyncClient, auth_headers: dict):
    await _create(async_client, auth_headers, name="a.png", size=100)
    await _create(async_client, auth_headers, name="b.png", size=200)
    await _create(async_client, auth_headers, name="c.pdf", type="Document", size=50)

    data = (await async_client.get("/api/media", params={"type": "Image"}, headers=auth_headers)).json()
    assert data["total"] == 2
    assert data["stats"]["total"] == 2
    assert data["stats"]["images"] == 2
    assert data["stats"]["documents"] == 1
    assert data["stats"]["totalSize"] == 350

    by_size = (await async_client.get(
        "/api/media", params={"sortBy": "size", "sortOrder": "asc"}, headers=auth_headers
    )).json()
    assert [m["name"] for m in by_size["media"]] == ["c.pdf", "a.png", "b.png"]


async def test_sort_by_unknown_field_rejected(async_client: AsyncClient, auth_headers: dict):
    await _create(async_client, auth_headers)
    for sort_by in ("$bad", "password", "name.$"):
        resp = await async_client.get("/api/media", params={"sortBy": sort_by}, headers=auth_headers)
        assert resp.status_code == 400, sort_by
        assert resp.json()["code"] == "VALIDATION_ERROR"


async def test_update_and_get(async_client: AsyncClient, auth_headers: dict):
    created = await _create(async_client, auth_headers)
    resp = await async_client.put(
        f"/api/media/{created['_id']}", json={"alt": "Hero", "bogus": 1}, headers=auth_headers
    )
    assert resp.status_code == 200

    data = (await async_client.get(f"/api/media/{created['_id']}", headers=auth_headers)).json()
    assert data["alt"] == "Hero"
    assert data["name"] == "hero.png"
    assert data["size"] == 1000
    assert "bogus" not in data


async def test_update_rejects_invalid_type(async_client: AsyncClient, auth_headers: dict):
    created = await _create(async_client, auth_headers)
    resp = await async_client.put(
        f"/api/media/{created['_id']}", json={"type": "Spreadsheet"}, headers=auth_headers
    )
    assert resp.status_code == 400

    data = (await async_client.get(f"/api/media/{created['_id']}", headers=auth_headers)).json()
    assert data["type"] == "Image"


async def test_bulk_delete(async_client: AsyncClient, auth_headers: dict):
    a = await _create(async_client, auth_headers, name="a.png")
    b = await _create(async_client, auth_headers, name="b.png")
    await _create(async_client, auth_headers, name="keep.png")

    resp = await async_client.request(
        "DELETE", "/api/media", json={"ids": [a["_id"], b["_id"], "not-an-id"]}, headers=auth_headers
    )
    assert resp.status_code == 200
    assert resp.json()["deletedCount"] == 2

    remaining = (await async_client.get("/api/media", headers=auth_headers)).json()
    assert [m["name"] for m in remaining["media"]] == ["keep.png"]


async def test_bulk_delete_empty_ids(async_client: AsyncClient, auth_headers: dict):
    resp = await async_client.request("DELETE", "/api/media", json={"ids": []}, headers=auth_headers)
    assert resp.status_code == 400
    assert resp.json()["error"] == "Invalid or empty ids array"


async def test_delete_missing(async_client: AsyncClient, auth_headers: dict):
    resp = await async_client.delete("/api/media/64b7f0c2a1b2c3d4e5f60718", headers=auth_headers)
    assert resp.status_code == 404
