from fastapi import APIRouter, Depends, Query
from motor.motor_asyncio import AsyncIOMotorDatabase
from models.team_member import TeamMemberCreate, TeamMemberUpdate
from models.common import parse_bool_filter
from repository import Repository, insert_ack, update_ack
from routes.deps import get_db, require_admin
from constants import Collections
from logging_config import get_logger

router = APIRouter(prefix="/team-members", tags=["Team Members"])
logger = get_logger("team_members")


def get_repo(db: AsyncIOMotorDatabase = Depends(get_db)) -> Repository:
    return Repository(
        db,
        Collections.TEAM_MEMBERS,
        list_key="teamMembers",
        # regex on an array field matches any element, so expertise works as-is
        search_fields=("name", "position", "email", "expertise"),
        default_sort=[("displayOrder", 1), ("createdAt", -1)],
        label="Team member",
    )


@router.get("")
async def list_team_members(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    search: str = Query(None, description="Search name, position, email or expertise"),
    active: str = Query(None, description="true, false or all"),
    repo: Repository = Depends(get_repo),
):
    filters = {}
    is_active = parse_bool_filter(active)
    if is_active is not None:
        filters["isActive"] = is_active

    return await repo.list_page(filters, search, page, limit)


@router.get("/{id}")
async def get_team_member(id: str, repo: Repository = Depends(get_repo)):
    return await repo.get(id)


@router.post("")
async def create_team_member(
    member: TeamMemberCreate,
    repo: Repository = Depends(get_repo),
    _admin: dict = Depends(require_admin),
):
    result, _ = await repo.create(member.model_dump(exclude_none=True))
    logger.info("Team member created", extra={"data": {"id": str(result.inserted_id), "name": member.name}})
    return insert_ack(result)


@router.put("/{id}")
async def update_team_member(
    id: str,
    member: TeamMemberUpdate,
    repo: Repository = Depends(get_repo),
    _admin: dict = Depends(require_admin),
):
    fields = member.model_dump(exclude_unset=True)
    result = await repo.update(id, fields)
    logger.info("Team member updated", extra={"data": {"id": id, "fields": list(fields.keys())}})
    return update_ack(result)


@router.delete("/{id}")
async def delete_team_member(id: str, repo: Repository = Depends(get_repo), _admin: dict = Depends(require_admin)):
    await repo.delete(id)
    logger.info("Team member deleted", extra={"data": {"id": id}})
    return {"message": "Team member deleted successfully"}
