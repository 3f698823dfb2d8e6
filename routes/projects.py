from fastapi import APIRouter, Depends, Query
from motor.motor_asyncio import AsyncIOMotorDatabase
from models.project import ProjectCreate, ProjectUpdate
from repository import Repository, insert_ack, update_ack
from routes.deps import get_db, require_admin
from constants import Collections
from logging_config import get_logger

router = APIRouter(prefix="/projects", tags=["Projects"])
logger = get_logger("projects")

STATUS_FILTERS = {"Active": True, "Inactive": False}


def get_repo(db: AsyncIOMotorDatabase = Depends(get_db)) -> Repository:
    return Repository(
        db,
        Collections.PROJECTS,
        list_key="projects",
        search_fields=("title", "description", "clientName"),
        default_sort=[("createdAt", -1)],
        label="Project",
    )


@router.get("")
async def list_projects(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    search: str = Query(None, description="Search title, description or client name"),
    status: str = Query(None, description="Active, Inactive or 'All Status'"),
    category: str = Query(None),
    repo: Repository = Depends(get_repo),
):
    filters = {}
    if status in STATUS_FILTERS:
        filters["isActive"] = STATUS_FILTERS[status]
    if category and category != "All Categories":
        filters["category"] = category

    return await repo.list_page(filters, search, page, limit)


@router.get("/{id}")
async def get_project(id: str, repo: Repository = Depends(get_repo)):
    return await repo.get(id)


@router.post("")
async def create_project(
    project: ProjectCreate,
    repo: Repository = Depends(get_repo),
    _admin: dict = Depends(require_admin),
):
    result, _ = await repo.create(project.model_dump(exclude_none=True))
    logger.info("Project created", extra={"data": {"id": str(result.inserted_id), "title": project.title}})
    return insert_ack(result)


@router.put("/{id}")
async def update_project(
    id: str,
    project: ProjectUpdate,
    repo: Repository = Depends(get_repo),
    _admin: dict = Depends(require_admin),
):
    fields = project.model_dump(exclude_unset=True)
    result = await repo.update(id, fields)
    logger.info("Project updated", extra={"data": {"id": id, "fields": list(fields.keys())}})
    return update_ack(result)


@router.delete("/{id}")
async def delete_project(id: str, repo: Repository = Depends(get_repo), _admin: dict = Depends(require_admin)):
    await repo.delete(id)
    logger.info("Project deleted", extra={"data": {"id": id}})
    return {"message": "Project deleted successfully"}
