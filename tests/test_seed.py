import pytest
from constants import Collections
from seed import seed_collections

pytestmark = pytest.mark.asyncio


async def test_seeds_empty_collections(test_db):
    inserted = await seed_collections(test_db)

    assert inserted == {Collections.TESTIMONIALS: 5, Collections.CONTACTS: 3}
    assert await test_db[Collections.TESTIMONIALS].count_documents({"featured": True}) == 2
    assert await test_db[Collections.CONTACTS].count_documents({"status": "new"}) == 1


async def test_seeding_is_idempotent(test_db):
    await seed_collections(test_db)
    again = await seed_collections(test_db)

    assert again == {Collections.TESTIMONIALS: 0, Collections.CONTACTS: 0}
    assert await test_db[Collections.TESTIMONIALS].count_documents({}) == 5


async def test_non_empty_collection_is_left_alone(test_db):
    await test_db[Collections.CONTACTS].insert_one({"name": "Real", "status": "new"})

    inserted = await seed_collections(test_db)

    assert inserted[Collections.CONTACTS] == 0
    assert inserted[Collections.TESTIMONIALS] == 5
    assert await test_db[Collections.CONTACTS].count_documents({}) == 1


async def test_seeded_rows_show_up_publicly(async_client, test_db):
    await seed_collections(test_db)
    resp = await async_client.get("/testimonials", params={"featured": "true"})
    assert [t["name"] for t in resp.json()] == ["Sarah Johnson", "Emily Rodriguez"]
