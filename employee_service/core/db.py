import logging

from fastapi import Request
from motor.motor_asyncio import (
    AsyncIOMotorClient,
    AsyncIOMotorCollection,
    AsyncIOMotorDatabase,
)
from pymongo.errors import PyMongoError

from employee_service.core.config import Settings

logger = logging.getLogger(__name__)


def create_client(settings: Settings) -> AsyncIOMotorClient:
    return AsyncIOMotorClient(
        settings.MONGODB_URI,
        tz_aware=True,
        serverSelectionTimeoutMS=settings.MONGODB_SERVER_SELECTION_TIMEOUT_MS,
    )


def get_database(client: AsyncIOMotorClient, settings: Settings) -> AsyncIOMotorDatabase:
    return client[settings.MONGODB_DB_NAME]


def get_collection(
    client: AsyncIOMotorClient, settings: Settings
) -> AsyncIOMotorCollection:
    return get_database(client, settings)[settings.MONGODB_COLLECTION_NAME]


async def connect(settings: Settings) -> AsyncIOMotorClient:
    """
    애플리케이션 시작 시 한 번 호출.
    ping이 실패하면 로그를 남기고 예외를 그대로 올려서 기동을 중단시킨다.
    """
    client = create_client(settings)
    try:
        await client.admin.command("ping")
    except PyMongoError as exc:
        logger.error("Error connecting to MongoDB: %s", exc)
        client.close()
        raise

    hosts = ", ".join(f"{host}:{port}" for host, port in client.nodes)
    logger.info("MongoDB Connected: %s", hosts or settings.MONGODB_URI)
    return client


async def ping(client: AsyncIOMotorClient) -> bool:
    try:
        await client.admin.command("ping")
    except PyMongoError as exc:
        logger.warning("MongoDB ping failed: %s", exc)
        return False
    return True


def get_mongo_client(request: Request) -> AsyncIOMotorClient | None:
    return getattr(request.app.state, "mongo_client", None)
