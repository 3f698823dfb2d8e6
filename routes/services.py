from fastapi import APIRouter, Body, Depends
from motor.motor_asyncio import AsyncIOMotorDatabase
from repository import Repository, insert_ack
from middleware.error_handlers import ValidationFailed
from routes.deps import get_db, require_admin
from constants import Collections
from logging_config import get_logger

router = APIRouter(prefix="/services", tags=["Services"])
logger = get_logger("services")


def get_repo(db: AsyncIOMotorDatabase = Depends(get_db)) -> Repository:
    return Repository(db, Collections.SERVICES, list_key="services", label="Service")


@router.get("")
async def list_services(repo: Repository = Depends(get_repo)):
    """Services are free-form and returned whole, oldest first."""
    return await repo.list_all(sort=[("createdAt", 1)])


@router.post("")
async def create_service(
    service: dict = Body(...),
    repo: Repository = Depends(get_repo),
    _admin: dict = Depends(require_admin),
):
    if not service:
        raise ValidationFailed("Service body must not be empty")
    result, _ = await repo.create(service)
    logger.info("Service created", extra={"data": {"id": str(result.inserted_id), "title": service.get("title")}})
    return insert_ack(result)
