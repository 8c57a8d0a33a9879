# carefund/core/db.py
from functools import lru_cache

from motor.motor_asyncio import AsyncIOMotorClient
from pymongo import ASCENDING, DESCENDING

from carefund.core.config import settings
from carefund.repos.kinds import CASES, DONATIONS, DONATORS


@lru_cache
def get_client() -> AsyncIOMotorClient:
    # Cached to play nicely with uvicorn --reload
    return AsyncIOMotorClient(settings.mongo_uri, tz_aware=True)


def get_db():
    return get_client()[settings.mongo_db]


async def ensure_index(col, keys, name: str, **kwargs):
    existing = [ix["name"] async for ix in col.list_indexes()]
    if name in existing:
        return
    await col.create_index(keys, name=name, **kwargs)


async def ensure_indexes(db):
    # one Donator per email; find_or_create relies on this under concurrent upserts
    await ensure_index(db[DONATORS], [("email", ASCENDING)], "email_1", unique=True)
    await ensure_index(db[DONATORS], [("registration_date", DESCENDING)], "registration_date_-1")
    await ensure_index(db[DONATIONS], [("email", ASCENDING), ("date", DESCENDING)], "email_1_date_-1")
    await ensure_index(db[DONATIONS], [("status", ASCENDING)], "status_1")
    await ensure_index(db[DONATIONS], [("date", DESCENDING)], "date_-1")
    await ensure_index(db[CASES], [("date_added", DESCENDING)], "date_added_-1")
