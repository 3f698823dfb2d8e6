from fastapi import APIRouter, Depends, Query, Request
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ReturnDocument
from datetime import datetime, timedelta
import math
from models.analytics import TrackVisitorRequest, PageTimeUpdate
from repository import to_object_id
from middleware.error_handlers import NotFoundError
from routes.deps import get_db, require_admin
from constants import Collections
from defaults import DISTRIBUTION_COLORS, COUNTRY_FLAGS, DEFAULT_FLAG, TOP_PAGE_COLORS
from utils.ip_generator import ip_generator, REGIONS
from logging_config import get_logger
from config import config

router = APIRouter(prefix="/analytics", tags=["Analytics"])
logger = get_logger("analytics")

TIME_RANGES = {
    "1d": timedelta(days=1),
    "7d": timedelta(days=7),
    "30d": timedelta(days=30),
}
DEFAULT_TIME_RANGE = "7d"
ACTIVE_WINDOW = timedelta(minutes=5)


def window_start(time_range: str, now: datetime = None) -> datetime:
    """Unknown ranges fall back to 7 days."""
    now = now or datetime.now()
    return now - TIME_RANGES.get(time_range, TIME_RANGES[DEFAULT_TIME_RANGE])


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def format_duration(seconds: float) -> str:
    total = round_half_up(seconds or 0)
    return f"{total // 60}m {total % 60}s"


def percentage(part: int, whole: int) -> float:
    """part/whole as a percentage clamped to [0, 100]; 0 when whole is 0."""
    if whole <= 0:
        return 0.0
    return max(0.0, min(100.0, part / whole * 100))


# --- VISITOR TRACKING (public) ---

@router.post("/track-visitor")
async def track_visitor(body: TrackVisitorRequest, request: Request, db: AsyncIOMotorDatabase = Depends(get_db)):
    """
    Upsert the visitor for (address, deviceId) and log one page view.
    Rows created before device ids were captured are matched on address alone
    and get the device id backfilled.
    """
    visitors = db[Collections.VISITORS]
    ip = body.ipAddress or (request.client.host if request.client else "unknown")
    device_id = body.deviceId
    unique_visitor_id = f"{ip}_{device_id or 'unknown'}"
    now = datetime.now()

    visitor = await visitors.find_one({"uniqueVisitorId": unique_visitor_id})
    if not visitor:
        visitor = await visitors.find_one({"ipAddress": ip, "deviceId": {"$exists": False}})

    is_new = visitor is None
    if is_new:
        visitor = {
            "uniqueVisitorId": unique_visitor_id,
            "ipAddress": ip,
            "userAgent": body.userAgent,
            "country": body.country or "Unknown",
            "city": body.city or "Unknown",
            "countryCode": body.countryCode or "XX",
            "device": body.device or "Desktop",
            "browser": body.browser or "Unknown",
            "isNewVisitor": True,
            "pageViews": 1,
            "createdAt": now,
            "lastActivity": now,
        }
        if device_id:
            visitor["deviceId"] = device_id
        result = await visitors.insert_one(visitor)
        visitor["_id"] = result.inserted_id
        logger.info("New visitor tracked", extra={"data": {"device": body.device, "device_id": device_id, "ip": ip}})
    else:
        updates = {"lastActivity": now, "isNewVisitor": False}
        if device_id and not visitor.get("deviceId"):
            updates.update({"deviceId": device_id, "uniqueVisitorId": unique_visitor_id})
        await visitors.update_one({"_id": visitor["_id"]}, {"$set": updates, "$inc": {"pageViews": 1}})
        logger.debug("Existing visitor updated", extra={"data": {"device_id": device_id, "ip": ip}})

    await db[Collections.PAGE_VIEWS].insert_one({
        "visitorId": visitor["_id"],
        "uniqueVisitorId": unique_visitor_id,
        "path": body.path or "/",
        "referrer": body.referrer or "",
        "createdAt": now,
        "timeOnPage": 0,  # filled in by update-page-time when the page is left
    })

    return {
        "success": True,
        "visitorId": str(visitor["_id"]),
        "uniqueVisitorId": unique_visitor_id,
        "isNewDevice": is_new,
    }


@router.put("/update-page-time")
async def update_page_time(body: PageTimeUpdate, db: AsyncIOMotorDatabase = Depends(get_db)):
    """Best effort: stamps the newest still-open view of this page for the visitor."""
    visitor_oid = to_object_id(body.visitorId)
    updated = None
    if visitor_oid is not None:
        updated = await db[Collections.PAGE_VIEWS].find_one_and_update(
            {"visitorId": visitor_oid, "path": body.path, "timeOnPage": 0},
            {"$set": {"timeOnPage": body.timeOnPage}},
            sort=[("createdAt", -1), ("_id", -1)],
            return_document=ReturnDocument.AFTER,
        )
    if updated is None:
        logger.debug("No open page view to update", extra={"data": {"visitor_id": body.visitorId, "path": body.path}})
    return {"success": True, "updated": updated is not None}


# --- REPORTS (admin) ---

@router.get("/overview")
async def get_overview(
    timeRange: str = Query(DEFAULT_TIME_RANGE, description="1d, 7d or 30d"),
    db: AsyncIOMotorDatabase = Depends(get_db),
    _admin: dict = Depends(require_admin),
):
    visitors = db[Collections.VISITORS]
    now = datetime.now()
    in_window = {"createdAt": {"$gte": window_start(timeRange, now)}}

    total_visitors = await visitors.count_documents(in_window)
    new_visitors = await visitors.count_documents({**in_window, "isNewVisitor": True})
    active_now = await visitors.count_documents({"lastActivity": {"$gte": now - ACTIVE_WINDOW}})
    bounced = await visitors.count_documents({**in_window, "pageViews": {"$lte": 1}})

    bounce_rate = f"{percentage(bounced, total_visitors):.1f}%" if total_visitors > 0 else "0%"
    return {
        "totalVisitors": total_visitors,
        "newVisitors": new_visitors,
        "activeNow": active_now,
        "bounceRate": bounce_rate,
    }


@router.get("/visitor-distribution")
async def get_visitor_distribution(
    timeRange: str = Query(DEFAULT_TIME_RANGE, description="1d, 7d or 30d"),
    db: AsyncIOMotorDatabase = Depends(get_db),
    _admin: dict = Depends(require_admin),
):
    """Top 10 countries; percentages are of the returned rows, not of all visitors."""
    pipeline = [
        {"$match": {"createdAt": {"$gte": window_start(timeRange)}}},
        {"$group": {"_id": "$country", "count": {"$sum": 1}, "countryCode": {"$first": "$countryCode"}}},
        {"$sort": {"count": -1, "_id": 1}},
        {"$limit": 10},
    ]
    distribution = await db[Collections.VISITORS].aggregate(pipeline).to_list(length=None)
    total = sum(row["count"] for row in distribution)

    return [
        {
            "name": row["_id"],
            "value": row["count"],
            "countryCode": row.get("countryCode"),
            "color": DISTRIBUTION_COLORS[index % len(DISTRIBUTION_COLORS)],
            "flag": COUNTRY_FLAGS.get(row["_id"], DEFAULT_FLAG),
            "percentage": round_half_up(percentage(row["count"], total)),
        }
        for index, row in enumerate(distribution)
    ]


@router.get("/recent-visitors")
async def get_recent_visitors(
    limit: int = Query(10, ge=1, le=100),
    db: AsyncIOMotorDatabase = Depends(get_db),
    _admin: dict = Depends(require_admin),
):
    cursor = db[Collections.VISITORS].find({}).sort([("lastActivity", -1), ("_id", -1)]).limit(limit)
    recent = await cursor.to_list(length=limit)

    return [
        {
            "id": str(v["_id"]),
            "ip": v.get("ipAddress"),
            "country": v.get("country"),
            "city": v.get("city"),
            "device": v.get("device"),
            "browser": v.get("browser"),
            "pages": v.get("pageViews") or 1,
            "lastActivity": v.get("lastActivity"),
            "uniqueVisitorId": v.get("uniqueVisitorId"),
            "deviceId": v.get("deviceId"),
        }
        for v in recent
    ]


@router.get("/top-pages")
async def get_top_pages(
    timeRange: str = Query(DEFAULT_TIME_RANGE, description="1d, 7d or 30d"),
    limit: int = Query(10, ge=1, le=100),
    db: AsyncIOMotorDatabase = Depends(get_db),
    _admin: dict = Depends(require_admin),
):
    """
    Views, distinct visitors and average time per path. A page's bounce rate
    is the share of its visitors who viewed exactly one page in the window.
    """
    page_views = db[Collections.PAGE_VIEWS]
    in_window = {"createdAt": {"$gte": window_start(timeRange)}}

    pages = await page_views.aggregate([
        {"$match": in_window},
        {"$group": {
            "_id": "$path",
            "views": {"$sum": 1},
            "visitors": {"$addToSet": "$visitorId"},
            "totalTime": {"$sum": "$timeOnPage"},
        }},
        {"$sort": {"views": -1, "_id": 1}},
        {"$limit": limit},
    ]).to_list(length=None)

    # Second pass over the same window: how many pages each of those visitors saw
    visitor_ids = list({vid for page in pages for vid in page["visitors"]})
    per_visitor = await page_views.aggregate([
        {"$match": {**in_window, "visitorId": {"$in": visitor_ids}}},
        {"$group": {"_id": "$visitorId", "pageCount": {"$sum": 1}}},
    ]).to_list(length=None)
    page_counts = {row["_id"]: row["pageCount"] for row in per_visitor}

    formatted = []
    for index, page in enumerate(pages):
        visitors = page["visitors"]
        single_page = sum(1 for vid in visitors if page_counts.get(vid) == 1)
        avg_time = page["totalTime"] / page["views"] if page["views"] else 0
        bounce = percentage(single_page, len(visitors))

        formatted.append({
            "id": index + 1,
            "url": page["_id"],
            "path": page["_id"],
            "views": page["views"],
            "visitors": len(visitors),
            "avgTime": format_duration(avg_time),
            "bounceRate": f"{round_half_up(bounce)}%",
            "color": TOP_PAGE_COLORS[index % len(TOP_PAGE_COLORS)],
        })

    logger.debug(
        "Top pages calculated",
        extra={"data": [{"path": p["path"], "views": p["views"], "bounceRate": p["bounceRate"]} for p in formatted]}
    )
    return formatted


# --- DEV ONLY ---

@router.get("/dev/ip")
async def dev_generate_ip(
    sessionId: str = Query(None, description="Stable address per session when given"),
    region: str = Query("random", description="random, us, eu or asia"),
):
    """[DEV ONLY] Synthetic client address and mock geo data for local tracking."""
    if config.ENV == "production":
        raise NotFoundError("Not Found")

    if sessionId:
        ip = ip_generator.generate_session_ip(sessionId)
    else:
        ip = ip_generator.generate_realistic_ip(region if region in REGIONS else "random")

    info = ip_generator.get_ip_info(ip)
    return {
        "ipAddress": ip,
        "country": info["country"],
        "countryCode": info["code"],
        "city": info["city"],
    }
