from fastapi import APIRouter, Depends
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import DuplicateKeyError
from models.user import UserCreate
from repository import Repository, insert_ack
from middleware.error_handlers import ConflictError
from routes.deps import get_db, require_admin
from constants import Collections
from logging_config import get_logger

router = APIRouter(prefix="/users", tags=["Users"])
logger = get_logger("users")


def get_repo(db: AsyncIOMotorDatabase = Depends(get_db)) -> Repository:
    return Repository(db, Collections.USERS, list_key="users", label="User")


@router.get("")
async def list_users(repo: Repository = Depends(get_repo), _admin: dict = Depends(require_admin)):
    return await repo.list_all()


@router.post("")
async def create_user(user: UserCreate, repo: Repository = Depends(get_repo)):
    """CREATE: email uniqueness comes from the unique index on users.email"""
    try:
        result, _ = await repo.create(user.model_dump(exclude_none=True))
    except DuplicateKeyError:
        logger.info("User already exists", extra={"data": {"email": user.email}})
        raise ConflictError("User already exists")

    logger.info("User created", extra={"data": {"id": str(result.inserted_id), "email": user.email}})
    return insert_ack(result)
