from functools import lru_cache

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from app.core.config import settings


@lru_cache(maxsize=1)
def get_client() -> AsyncIOMotorClient:
    return AsyncIOMotorClient(settings.MONGODB_URI)


def get_db() -> AsyncIOMotorDatabase:
    return get_client()[settings.MONGODB_DB]
