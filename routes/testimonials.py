from fastapi import APIRouter, Depends, Query
from motor.motor_asyncio import AsyncIOMotorDatabase
from datetime import date
from models.testimonial import TestimonialCreate, TestimonialUpdate, FeaturedToggle, ActiveToggle
from models.common import parse_bool_filter
from repository import Repository
from routes.deps import get_db, require_admin
from constants import Collections
from logging_config import get_logger

# Admin management lives under /api; the website reads the public listing
router = APIRouter(prefix="/api/testimonials", tags=["Testimonials"], dependencies=[Depends(require_admin)])
public_router = APIRouter(prefix="/testimonials", tags=["Testimonials"])
logger = get_logger("testimonials")

DISPLAY_SORT = [("displayOrder", 1), ("createdAt", -1)]


def get_repo(db: AsyncIOMotorDatabase = Depends(get_db)) -> Repository:
    return Repository(
        db,
        Collections.TESTIMONIALS,
        list_key="testimonials",
        search_fields=("name", "company", "position", "testimonial"),
        default_sort=DISPLAY_SORT,
        label="Testimonial",
    )


def flag_filters(featured: str = None, active: str = None) -> dict:
    filters = {}
    is_featured = parse_bool_filter(featured)
    if is_featured is not None:
        filters["featured"] = is_featured
    is_active = parse_bool_filter(active)
    if is_active is not None:
        filters["active"] = is_active
    return filters


@public_router.get("")
async def list_public_testimonials(
    featured: str = Query(None, description="true, false or all"),
    active: str = Query("true", description="Defaults to active only; 'all' disables"),
    repo: Repository = Depends(get_repo),
):
    """Unpaginated listing for the website"""
    return await repo.list_all(flag_filters(featured, active), DISPLAY_SORT)


@router.get("")
async def list_testimonials(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    search: str = Query(None),
    featured: str = Query(None, description="true, false or all"),
    active: str = Query(None, description="true, false or all"),
    repo: Repository = Depends(get_repo),
):
    return await repo.list_page(flag_filters(featured, active), search, page, limit)


@router.get("/{id}")
async def get_testimonial(id: str, repo: Repository = Depends(get_repo)):
    return await repo.get(id)


@router.post("")
async def create_testimonial(testimonial: TestimonialCreate, repo: Repository = Depends(get_repo)):
    """CREATE: returns the stored testimonial"""
    doc = testimonial.model_dump(exclude_none=True)
    doc["date"] = date.today().isoformat()
    result, _ = await repo.create(doc)
    logger.info("Testimonial created", extra={"data": {"id": str(result.inserted_id), "name": testimonial.name}})
    return await repo.get(str(result.inserted_id))


@router.put("/{id}")
async def update_testimonial(id: str, testimonial: TestimonialUpdate, repo: Repository = Depends(get_repo)):
    """UPDATE: returns the updated testimonial"""
    fields = testimonial.model_dump(exclude_unset=True)
    await repo.update(id, fields)
    logger.info("Testimonial updated", extra={"data": {"id": id, "fields": list(fields.keys())}})
    return await repo.get(id)


@router.delete("/{id}")
async def delete_testimonial(id: str, repo: Repository = Depends(get_repo)):
    await repo.delete(id)
    logger.info("Testimonial deleted", extra={"data": {"id": id}})
    return {"message": "Testimonial deleted successfully"}


@router.put("/{id}/featured")
async def set_featured(id: str, body: FeaturedToggle, repo: Repository = Depends(get_repo)):
    await repo.update(id, {"featured": body.featured})
    return {"message": "Testimonial featured status updated successfully"}


@router.put("/{id}/active")
async def set_active(id: str, body: ActiveToggle, repo: Repository = Depends(get_repo)):
    await repo.update(id, {"active": body.active})
    return {"message": "Testimonial active status updated successfully"}
