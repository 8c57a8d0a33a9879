# carefund/repos/mongo.py
import logging
from datetime import datetime, timezone
from functools import wraps
from typing import List, Optional, Tuple

from bson import ObjectId
from pymongo import DESCENDING, ReturnDocument
from pymongo.errors import DuplicateKeyError, PyMongoError

from carefund.core.errors import Internal, InvalidArgument, NotFound
from carefund.repos.kinds import timestamp_field

logger = logging.getLogger(__name__)


def _oid(doc_id: str) -> ObjectId:
    if not isinstance(doc_id, str) or not ObjectId.is_valid(doc_id):
        raise InvalidArgument(f"Invalid id: {doc_id!r}")
    return ObjectId(doc_id)


def _out(doc: Optional[dict]) -> Optional[dict]:
    if doc is None:
        return None
    doc["id"] = str(doc.pop("_id"))
    return doc


def _storage_errors(fn):
    @wraps(fn)
    async def wrapper(*args, **kwargs):
        try:
            return await fn(*args, **kwargs)
        except PyMongoError as e:
            logger.error(f"Storage error in {fn.__name__}: {e}")
            raise Internal("Storage error") from e
    return wrapper


class MongoStore:
    def __init__(self, db):
        self.db = db

    def col(self, kind: str):
        timestamp_field(kind)
        return self.db[kind]

    @_storage_errors
    async def create(self, kind: str, record: dict) -> dict:
        doc = dict(record)
        doc.pop("id", None)
        doc.setdefault(timestamp_field(kind), datetime.now(timezone.utc))
        res = await self.col(kind).insert_one(doc)
        doc["_id"] = res.inserted_id
        return _out(doc)

    @_storage_errors
    async def find(self, kind: str, filter: Optional[dict] = None, sort_newest: bool = True) -> List[dict]:
        cur = self.col(kind).find(filter or {})
        if sort_newest:
            cur = cur.sort([(timestamp_field(kind), DESCENDING), ("_id", DESCENDING)])
        return [_out(d) async for d in cur]

    @_storage_errors
    async def find_by_id(self, kind: str, doc_id: str) -> Optional[dict]:
        return _out(await self.col(kind).find_one({"_id": _oid(doc_id)}))

    @_storage_errors
    async def update(self, kind: str, doc_id: str, fields: dict, where: Optional[dict] = None) -> Optional[dict]:
        _id = _oid(doc_id)
        c = self.col(kind)
        doc = await c.find_one_and_update(
            {**(where or {}), "_id": _id},
            {"$set": fields},
            return_document=ReturnDocument.AFTER,
        )
        if doc is not None:
            return _out(doc)
        if await c.count_documents({"_id": _id}, limit=1) == 0:
            raise NotFound(f"{kind[:-1].capitalize()} not found")
        return None

    @_storage_errors
    async def find_or_create(self, kind: str, key: dict, record: dict) -> Tuple[dict, bool]:
        c = self.col(kind)
        on_insert = {k: v for k, v in record.items() if k not in key and k != "id"}
        on_insert.setdefault(timestamp_field(kind), datetime.now(timezone.utc))
        try:
            before = await c.find_one_and_update(
                key,
                {"$setOnInsert": on_insert},
                upsert=True,
                return_document=ReturnDocument.BEFORE,
            )
        except DuplicateKeyError:
            # lost a concurrent upsert race on the unique index; the winner's doc is there now
            return _out(await c.find_one(key)), False
        if before is not None:
            return _out(before), False
        return _out(await c.find_one(key)), True

    @_storage_errors
    async def count(self, kind: str, filter: Optional[dict] = None) -> int:
        return await self.col(kind).count_documents(filter or {})
