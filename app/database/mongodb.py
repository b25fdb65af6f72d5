from motor.motor_asyncio import AsyncIOMotorClient
from pymongo import ASCENDING, DESCENDING
from typing import Optional
import logging

from app.core.config import Settings

logger = logging.getLogger(__name__)

CONTACTS_COLLECTION = "contacts"
CREATED_AT = "createdAt"


class MongoDB:
    client: AsyncIOMotorClient = None
    database = None

    @property
    def connected(self) -> bool:
        return self.client is not None and self.database is not None


class ContactStore:
    """Append-only record store for contact submissions."""

    def __init__(self, mongodb: MongoDB):
        self.mongodb = mongodb

    @property
    def connected(self) -> bool:
        return self.mongodb.connected

    @property
    def collection(self):
        return self.mongodb.database[CONTACTS_COLLECTION]

    async def insert_contact(self, record: dict) -> str:
        result = await self.collection.insert_one(dict(record))
        return str(result.inserted_id)

    async def list_contacts(self) -> list:
        contacts = await self.collection.find().sort(CREATED_AT, DESCENDING).to_list(None)

        for contact in contacts:
            contact["_id"] = str(contact["_id"])

        return contacts


async def connect_to_mongo(settings: Settings) -> Optional[MongoDB]:
    """
    Open the shared Motor client when MONGODB_URI is configured.

    Returns None when persistence is disabled or the server cannot be
    reached; the app keeps serving contact submissions without storing them.
    """
    if not settings.persistence_enabled:
        logger.info("💤 MONGODB_URI not set, contact messages will not be stored")
        return None

    mongodb = MongoDB()
    try:
        mongodb.client = AsyncIOMotorClient(
            settings.MONGODB_URI,
            serverSelectionTimeoutMS=settings.MONGODB_TIMEOUT_MS,
            tz_aware=True,
        )

        # Test connection
        await mongodb.client.admin.command('ping')

        mongodb.database = mongodb.client[settings.MONGODB_DB_NAME]
        await create_indexes(mongodb.database)

        logger.info("📦 Connected to MongoDB")
        return mongodb

    except Exception as e:
        logger.error(f"❌ MongoDB connection error: {e}")
        if mongodb.client:
            mongodb.client.close()
        return None


async def close_mongo_connection(mongodb: Optional[MongoDB]):
    if mongodb and mongodb.client:
        mongodb.client.close()
        mongodb.client = None
        mongodb.database = None
        logger.info("✅ MongoDB connection closed")


async def create_indexes(database):
    await database[CONTACTS_COLLECTION].create_index([(CREATED_AT, DESCENDING)])
    await database[CONTACTS_COLLECTION].create_index([("status", ASCENDING)])
    logger.info("✅ Database indexes created successfully")
