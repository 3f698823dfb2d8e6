import asyncio
from typing import Dict, List
from motor.motor_asyncio import AsyncIOMotorDatabase
from defaults import SAMPLE_TESTIMONIALS, SAMPLE_CONTACTS
from constants import Collections
from logging_config import get_logger

logger = get_logger("seed")

SEEDS: Dict[str, List[dict]] = {
    Collections.TESTIMONIALS: SAMPLE_TESTIMONIALS,
    Collections.CONTACTS: SAMPLE_CONTACTS,
}


async def seed_collections(db: AsyncIOMotorDatabase) -> Dict[str, int]:
    """
    Insert the sample rows into each seedable collection that is completely empty.
    A collection holding any document is left alone, partial seeds included.
    Returns inserted row counts per collection.
    """
    inserted = {}
    for name, rows in SEEDS.items():
        count = await db[name].count_documents({})
        if count > 0:
            inserted[name] = 0
            continue

        # insert_many writes _id into the dicts it is given
        result = await db[name].insert_many([dict(row) for row in rows])
        inserted[name] = len(result.inserted_ids)
        logger.info(f"Seeded {name}", extra={"data": {"rows": inserted[name]}})

    return inserted


if __name__ == "__main__":
    from logging_config import setup_logging
    from database import database

    setup_logging()

    async def main():
        print(await seed_collections(database.db))
        database.close()

    asyncio.run(main())
