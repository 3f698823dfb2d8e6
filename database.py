from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo import ASCENDING, DESCENDING
from logging_config import get_logger
from constants import Collections
from config import config
import certifi

logger = get_logger("database")


class Database:
    """
    Owns the process-wide Motor client.
    connect()/close() are driven by the FastAPI lifespan; handlers reach the
    database only through the get_db dependency.
    """

    def __init__(self):
        self._client = None
        self._db = None

    def connect(self):
        if self._client is not None:
            return
        uri = config.MONGO_URI
        if not uri:
            logger.error("MONGO_URI not found in configuration!")
            raise RuntimeError("MONGO_URI is not configured")

        logger.info(f"MongoDB connection string found: {uri[:20]}...")
        if config.ENV == "production":
            self._client = AsyncIOMotorClient(uri, tlsCAFile=certifi.where())
        else:
            self._client = AsyncIOMotorClient(uri)
        self._db = self._client[config.DB_NAME]
        logger.info(f"Database initialized on DB: {config.DB_NAME}")

    def use_client(self, client):
        """Swap in an already constructed client (e.g. an in-memory one). The caller owns its lifetime."""
        self._client = client
        self._db = client[config.DB_NAME]

    def close(self):
        if self._client is not None:
            self._client.close()
            self._client = None
            self._db = None
            logger.info("Database connection closed")

    @property
    def db(self) -> AsyncIOMotorDatabase:
        if self._db is None:
            self.connect()
        return self._db


database = Database()


async def get_db() -> AsyncIOMotorDatabase:
    """FastAPI dependency returning the active database handle."""
    return database.db


async def ensure_indexes(db: AsyncIOMotorDatabase):
    # Email uniqueness is enforced by the store, not by a read-then-insert check
    await db[Collections.USERS].create_index([("email", ASCENDING)], unique=True)

    await db[Collections.VISITORS].create_index([("uniqueVisitorId", ASCENDING)])
    await db[Collections.VISITORS].create_index([("ipAddress", ASCENDING)])
    await db[Collections.VISITORS].create_index([("lastActivity", DESCENDING)])

    await db[Collections.PAGE_VIEWS].create_index([("createdAt", DESCENDING)])
    await db[Collections.PAGE_VIEWS].create_index([("visitorId", ASCENDING), ("path", ASCENDING)])

    await db[Collections.REPLIES].create_index([("contactId", ASCENDING)])
    logger.info("Indexes ensured")
