from fastapi import APIRouter, Depends, Query
from motor.motor_asyncio import AsyncIOMotorDatabase
from models.blog import BlogCreate, BlogUpdate
from repository import Repository, insert_ack, update_ack
from middleware.error_handlers import NotFoundError
from routes.deps import get_db, require_admin
from constants import Collections
from logging_config import get_logger

router = APIRouter(prefix="/blogs", tags=["Blogs"])
logger = get_logger("blogs")


def get_repo(db: AsyncIOMotorDatabase = Depends(get_db)) -> Repository:
    return Repository(
        db,
        Collections.BLOGS,
        list_key="blogs",
        search_fields=("title", "excerpt", "author", "category"),
        default_sort=[("createdAt", -1)],
        label="Blog post",
    )


@router.get("")
async def list_blogs(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    search: str = Query(None, description="Search title, excerpt, author or category"),
    status: str = Query(None, description="Draft, Published or 'All Status'"),
    repo: Repository = Depends(get_repo),
):
    filters = {}
    if status and status != "All Status":
        filters["status"] = status

    return await repo.list_page(filters, search, page, limit)


@router.get("/{id}")
async def get_blog(id: str, repo: Repository = Depends(get_repo)):
    return await repo.get(id)


@router.post("")
async def create_blog(blog: BlogCreate, repo: Repository = Depends(get_repo), _admin: dict = Depends(require_admin)):
    """CREATE: status comes from publishImmediately, which is not stored"""
    doc = blog.to_document()
    result, _ = await repo.create(doc)
    logger.info("Blog post created", extra={"data": {"id": str(result.inserted_id), "status": doc["status"]}})
    return insert_ack(result)


@router.put("/{id}")
async def update_blog(
    id: str,
    blog: BlogUpdate,
    repo: Repository = Depends(get_repo),
    _admin: dict = Depends(require_admin),
):
    fields = blog.to_document()
    result = await repo.update(id, fields)
    logger.info("Blog post updated", extra={"data": {"id": id, "fields": list(fields.keys())}})
    return update_ack(result)


@router.delete("/{id}")
async def delete_blog(id: str, repo: Repository = Depends(get_repo), _admin: dict = Depends(require_admin)):
    await repo.delete(id)
    logger.info("Blog post deleted", extra={"data": {"id": id}})
    return {"message": "Blog post deleted successfully"}


@router.put("/{id}/views")
async def increment_views(id: str, repo: Repository = Depends(get_repo)):
    """Public read counter; only ever incremented."""
    result = await repo.collection.update_one({"_id": repo.object_id(id)}, {"$inc": {"views": 1}})
    if result.matched_count == 0:
        raise NotFoundError(repo.not_found_message)
    return {"message": "Views updated successfully"}
