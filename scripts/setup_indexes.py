import sys
import os
import asyncio

# Add parent directory to path to import database
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from database import database, ensure_indexes
from logging_config import setup_logging, get_logger

logger = get_logger("setup_indexes")


async def create_indexes():
    print("🚀 Starting Index Creation...")
    db = database.db
    await ensure_indexes(db)

    for name in await db.list_collection_names():
        indexes = await db[name].index_information()
        print(f"\n📦 {name}:")
        for index_name, info in indexes.items():
            unique = " UNIQUE" if info.get("unique") else ""
            print(f"✅ {index_name}: {info['key']}{unique}")

    database.close()
    print("\n✨ All indexes created successfully!")


if __name__ == "__main__":
    setup_logging()
    asyncio.run(create_indexes())
