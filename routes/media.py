from fastapi import APIRouter, Body, Depends, Query
from motor.motor_asyncio import AsyncIOMotorDatabase
from datetime import datetime
from typing import Any
from models.media import MediaCreate, MediaUpdate
from repository import Repository, parse_mongo_data
from middleware.error_handlers import ValidationFailed
from routes.deps import get_db, require_admin
from constants import Collections, MediaTypes
from logging_config import get_logger

router = APIRouter(prefix="/api/media", tags=["Media"])
logger = get_logger("media")

# Sortable media fields; anything else is rejected before reaching the store
SORT_FIELDS = ("createdAt", "updatedAt", "name", "originalName", "size", "type")
SORT_FIELD_PATTERN = "^(" + "|".join(SORT_FIELDS) + ")$"

STAT_KEYS = {
    MediaTypes.IMAGE: "images",
    MediaTypes.DOCUMENT: "documents",
    MediaTypes.VIDEO: "videos",
    MediaTypes.AUDIO: "audio",
}


def get_repo(db: AsyncIOMotorDatabase = Depends(get_db)) -> Repository:
    return Repository(
        db,
        Collections.MEDIA,
        list_key="media",
        search_fields=("name", "originalName", "alt"),
        default_sort=[("createdAt", -1)],
        label="Media file",
    )


async def media_stats(repo: Repository, total: int) -> dict:
    """Per-type counts and the summed size over the whole library."""
    pipeline = [
        {"$group": {"_id": "$type", "count": {"$sum": 1}, "totalSize": {"$sum": "$size"}}}
    ]
    grouped = await repo.collection.aggregate(pipeline).to_list(length=None)

    stats = {"total": total, "images": 0, "documents": 0, "videos": 0, "audio": 0, "totalSize": 0}
    for row in grouped:
        stats["totalSize"] += row.get("totalSize") or 0
        key = STAT_KEYS.get(row["_id"])
        if key:
            stats[key] = row["count"]
    return stats


# Declared before /{id} so it is not captured as an id
@router.get("/test")
async def media_health():
    return {"message": "Media API is working!", "timestamp": datetime.now()}


@router.get("")
async def list_media(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    search: str = Query(None, description="Search name, original name or alt text"),
    type: str = Query(None, description="Image, Document, Video, Audio or 'All Types'"),
    sortBy: str = Query("createdAt", pattern=SORT_FIELD_PATTERN),
    sortOrder: str = Query("desc", pattern="^(asc|desc)$"),
    repo: Repository = Depends(get_repo),
    _admin: dict = Depends(require_admin),
):
    filters = {}
    if type and type != "All Types":
        filters["type"] = type

    sort = [(sortBy, -1 if sortOrder == "desc" else 1)]
    result = await repo.list_page(filters, search, page, limit, sort=sort)
    result["stats"] = await media_stats(repo, result["total"])
    logger.debug("Media listed", extra={"data": {"total": result["total"], "returned": len(result["media"])}})
    return result


@router.post("", status_code=201)
async def create_media(media: MediaCreate, repo: Repository = Depends(get_repo), _admin: dict = Depends(require_admin)):
    """CREATE: registers an already uploaded file (local or ImgBB)"""
    _, doc = await repo.create(media.to_document())
    logger.info(
        "Media file created",
        extra={"data": {"id": str(doc["_id"]), "storage_provider": doc["storage_provider"], "imgbb": bool(doc["imgbb_id"])}}
    )
    suffix = " to ImgBB" if doc["storage_provider"] == "imgbb" else ""
    return {**parse_mongo_data(doc), "message": f"Media file uploaded successfully{suffix}"}


@router.delete("")
async def delete_media_bulk(
    body: dict = Body(...),
    repo: Repository = Depends(get_repo),
    _admin: dict = Depends(require_admin),
):
    ids: Any = body.get("ids")
    if not isinstance(ids, list) or not ids:
        raise ValidationFailed("Invalid or empty ids array")

    deleted = await repo.delete_many(ids)
    logger.info("Media files deleted", extra={"data": {"requested": len(ids), "deleted": deleted}})
    return {"message": f"{deleted} media files deleted successfully", "deletedCount": deleted}


@router.get("/{id}")
async def get_media(id: str, repo: Repository = Depends(get_repo), _admin: dict = Depends(require_admin)):
    return await repo.get(id)


@router.put("/{id}")
async def update_media(
    id: str,
    media: MediaUpdate,
    repo: Repository = Depends(get_repo),
    _admin: dict = Depends(require_admin),
):
    fields = media.model_dump(exclude_unset=True)
    await repo.update(id, fields)
    logger.info("Media file updated", extra={"data": {"id": id, "fields": list(fields.keys())}})
    return {"message": "Media file updated successfully"}


@router.delete("/{id}")
async def delete_media(id: str, repo: Repository = Depends(get_repo), _admin: dict = Depends(require_admin)):
    await repo.delete(id)
    logger.info("Media file deleted", extra={"data": {"id": id}})
    return {"message": "Media file deleted successfully"}
