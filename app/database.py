import logging
from fastapi import Request
from motor.motor_asyncio import AsyncIOMotorClient

from app.config import REPOSITORY_MONGODB, Settings
from app.repositories.base import UserRepository
from app.repositories.in_memory_user_repo import InMemoryUserRepository
from app.repositories.user_repo import MongoUserRepository

logger = logging.getLogger(__name__)


def create_client(settings: Settings) -> AsyncIOMotorClient:
    # motor connects lazily; nothing is sent until the first operation
    return AsyncIOMotorClient(
        settings.mongodb_uri,
        serverSelectionTimeoutMS=settings.mongodb_timeout_ms,
        tz_aware=True,
    )


def create_user_repository(
    settings: Settings, client: AsyncIOMotorClient | None = None
) -> UserRepository:
    """Build the configured store. `client` is required for MongoDB."""
    if settings.user_repository == REPOSITORY_MONGODB:
        if client is None:
            raise ValueError("a motor client is required when USER_REPOSITORY=mongodb")
        logger.info(f"Using MongoDB user repository, database={settings.mongodb_database}")
        return MongoUserRepository(client[settings.mongodb_database])
    logger.info("Using in-memory user repository")
    return InMemoryUserRepository()


async def get_user_repository(request: Request) -> UserRepository:
    repo = request.app.state.user_repository
    # no-op after the first successful call
    await repo.ensure_indexes()
    return repo
