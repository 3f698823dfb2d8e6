import pytest
from httpx import AsyncClient, ASGITransport
import os
import tempfile
from datetime import timedelta

# Set up test environment variables before anything else
os.environ["ENV"] = "testing"
os.environ["DB_NAME"] = "aminwebtech_test"
os.environ["SECRET_KEY"] = "test_secret_key_12345"
os.environ["SEED_ON_STARTUP"] = "false"
os.environ.setdefault("LOG_DIR", os.path.join(tempfile.gettempdir(), "aminwebtech-test-logs"))
os.environ.pop("RESEND_API_KEY", None)

from config import config
config.ENV = "testing"
config.DB_NAME = "aminwebtech_test"
config.RESEND_API_KEY = None

from mongomock_motor import AsyncMongoMockClient
from main import app
from database import database, ensure_indexes
from routes.deps import create_access_token

ADMIN_CLAIMS = {"id": 1, "username": "admin", "role": "admin"}


@pytest.fixture(scope="function", autouse=True)
def test_db():
    """Fresh in-memory database per test."""
    database.use_client(AsyncMongoMockClient())
    yield database.db


@pytest.fixture(scope="function")
async def async_client(test_db):
    # ASGITransport does not run the lifespan, so indexes are built here
    await ensure_indexes(test_db)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as test_client:
        yield test_client


@pytest.fixture(scope="function")
def auth_token():
    return create_access_token(data=ADMIN_CLAIMS, expires_delta=timedelta(minutes=60))


@pytest.fixture(scope="function")
def auth_headers(auth_token):
    return {"Authorization": f"Bearer {auth_token}"}


@pytest.fixture(scope="function")
def expired_auth_headers():
    token = create_access_token(data=ADMIN_CLAIMS, expires_delta=timedelta(seconds=-10))
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture(scope="function")
def member_auth_headers():
    """Valid signature, but not an admin."""
    token = create_access_token(
        data={"id": 2, "username": "editor", "role": "editor"},
        expires_delta=timedelta(minutes=60)
    )
    return {"Authorization": f"Bearer {token}"}
