"""
Generic collection repository shared by every resource router.

Each entity gets one Repository configured with its collection, the fields
free-text search runs over, and its default sort. Entity specific defaulting
stays in the routers and models; this module only knows about documents.
"""

import math
import re
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from bson import ObjectId
from bson.errors import InvalidId
from motor.motor_asyncio import AsyncIOMotorDatabase

from middleware.error_handlers import NotFoundError

SortSpec = List[Tuple[str, int]]

# Fields a client may never overwrite through an update body
PROTECTED_FIELDS = ("_id", "createdAt")


def parse_mongo_data(data):
    """Recursively turn ObjectIds into strings so documents are JSON-safe."""
    if isinstance(data, list):
        return [parse_mongo_data(item) for item in data]
    if isinstance(data, dict):
        return {k: (str(v) if isinstance(v, ObjectId) else parse_mongo_data(v)) for k, v in data.items()}
    if isinstance(data, ObjectId):
        return str(data)
    return data


def to_object_id(value: Any) -> Optional[ObjectId]:
    """Returns None for anything that is not a valid ObjectId instead of raising."""
    if isinstance(value, ObjectId):
        return value
    try:
        return ObjectId(str(value))
    except (InvalidId, TypeError):
        return None


def insert_ack(result) -> dict:
    return {"acknowledged": result.acknowledged, "insertedId": str(result.inserted_id)}


def update_ack(result) -> dict:
    return {
        "acknowledged": result.acknowledged,
        "matchedCount": result.matched_count,
        "modifiedCount": result.modified_count,
        "upsertedId": str(result.upserted_id) if result.upserted_id is not None else None,
        "upsertedCount": 1 if result.upserted_id is not None else 0,
    }


def build_search_filter(search: Optional[str], fields: Iterable[str]) -> dict:
    """Case-insensitive substring match OR'ed across `fields`."""
    if not search:
        return {}
    pattern = re.escape(search)
    return {"$or": [{field: {"$regex": pattern, "$options": "i"}} for field in fields]}


def with_tiebreaker(sort: SortSpec) -> SortSpec:
    """Appends _id so equal sort keys still page deterministically."""
    if any(key == "_id" for key, _ in sort):
        return list(sort)
    direction = sort[-1][1] if sort else -1
    return list(sort) + [("_id", direction)]


class Repository:
    def __init__(
        self,
        db: AsyncIOMotorDatabase,
        collection: str,
        list_key: str,
        search_fields: Sequence[str] = (),
        default_sort: SortSpec = None,
        label: str = "Document",
    ):
        self.collection = db[collection]
        self.list_key = list_key
        self.search_fields = tuple(search_fields)
        self.default_sort = default_sort or [("createdAt", -1)]
        self.label = label

    @property
    def not_found_message(self) -> str:
        return f"{self.label} not found"

    def build_query(self, filters: Optional[Dict] = None, search: Optional[str] = None) -> dict:
        query = dict(filters or {})
        query.update(build_search_filter(search, self.search_fields))
        return query

    async def list_page(
        self,
        filters: Optional[Dict] = None,
        search: Optional[str] = None,
        page: int = 1,
        limit: int = 10,
        sort: Optional[SortSpec] = None,
    ) -> dict:
        query = self.build_query(filters, search)
        skip = (page - 1) * limit

        cursor = (
            self.collection.find(query)
            .sort(with_tiebreaker(sort or self.default_sort))
            .skip(skip)
            .limit(limit)
        )
        items = await cursor.to_list(length=limit)
        total = await self.collection.count_documents(query)

        return {
            self.list_key: parse_mongo_data(items),
            "total": total,
            "page": page,
            "limit": limit,
            "totalPages": math.ceil(total / limit),
        }

    async def list_all(self, filters: Optional[Dict] = None, sort: Optional[SortSpec] = None) -> List[dict]:
        cursor = self.collection.find(filters or {}).sort(with_tiebreaker(sort or self.default_sort))
        return parse_mongo_data(await cursor.to_list(length=None))

    def object_id(self, id: str) -> ObjectId:
        oid = to_object_id(id)
        if oid is None:
            raise NotFoundError(self.not_found_message)
        return oid

    async def get(self, id: str) -> dict:
        doc = await self.collection.find_one({"_id": self.object_id(id)})
        if not doc:
            raise NotFoundError(self.not_found_message)
        return parse_mongo_data(doc)

    async def create(self, doc: dict):
        now = datetime.now()
        doc = {k: v for k, v in doc.items() if k != "_id"}
        doc["createdAt"] = now
        doc["updatedAt"] = now
        result = await self.collection.insert_one(doc)
        doc["_id"] = result.inserted_id
        return result, doc

    async def update(self, id: str, fields: dict, extra_ops: Optional[dict] = None):
        oid = self.object_id(id)
        update_data = {k: v for k, v in fields.items() if k not in PROTECTED_FIELDS}
        update_data["updatedAt"] = datetime.now()

        operations = {"$set": update_data}
        if extra_ops:
            operations.update(extra_ops)

        result = await self.collection.update_one({"_id": oid}, operations)
        if result.matched_count == 0:
            raise NotFoundError(self.not_found_message)
        return result

    async def delete(self, id: str):
        result = await self.collection.delete_one({"_id": self.object_id(id)})
        if result.deleted_count == 0:
            raise NotFoundError(self.not_found_message)
        return result

    async def delete_many(self, ids: Iterable[str]) -> int:
        object_ids = [oid for oid in (to_object_id(i) for i in ids) if oid is not None]
        if not object_ids:
            return 0
        result = await self.collection.delete_many({"_id": {"$in": object_ids}})
        return result.deleted_count

    async def count(self, filters: Optional[Dict] = None) -> int:
        return await self.collection.count_documents(filters or {})
