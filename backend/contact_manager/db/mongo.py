"""
MongoDB access via motor. One client per process, created at startup and
handed to the API layer as a database handle.
"""

import logging

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from contact_manager.core.config import Settings

logger = logging.getLogger(__name__)

CONTACTS_COLLECTION = "contacts"


def create_mongo_client(settings: Settings) -> AsyncIOMotorClient:
    """Build the process-wide client. Raises ValueError when MONGODB_URI is unset."""
    if not settings.mongodb_uri:
        raise ValueError("MONGODB_URI is not set")
    return AsyncIOMotorClient(settings.mongodb_uri, tz_aware=True)


def get_database(client: AsyncIOMotorClient, settings: Settings) -> AsyncIOMotorDatabase:
    """Database named in the connection string, else MONGODB_DB."""
    return client.get_default_database(default=settings.mongodb_db)


def get_contacts_collection(database):
    return database[CONTACTS_COLLECTION]


async def ping(client: AsyncIOMotorClient) -> bool:
    """Round-trip to the server; logs and returns False instead of raising."""
    try:
        await client.admin.command("ping")
    except Exception as e:
        logger.error("MongoDB connection error: %s", e)
        return False
    logger.info("Connected to MongoDB")
    return True
