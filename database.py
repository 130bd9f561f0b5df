# database.py
import logging
from typing import Optional

from fastapi import Request
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

logger = logging.getLogger(__name__)


class Database:
    """Owns the Motor client. Opened at startup, closed at shutdown."""

    def __init__(self, uri: Optional[str], db_name: str):
        self.uri = uri
        self.db_name = db_name
        self.client: Optional[AsyncIOMotorClient] = None
        self.db: Optional[AsyncIOMotorDatabase] = None

    async def connect(self):
        if not self.uri:
            raise RuntimeError("MONGODB_URI is not defined in environment variables")
        self.client = AsyncIOMotorClient(self.uri, tz_aware=True)
        # Motor connects lazily, ping so an unreachable server fails startup
        await self.client.admin.command("ping")
        self.db = self.client[self.db_name]
        await self.init_indexes()
        logger.info(f"Connected to MongoDB database '{self.db_name}'")

    async def init_indexes(self):
        await self.db.questions.create_index([("updatedAt", -1), ("_id", -1)])
        await self.db.questions.create_index("category")
        await self.db.questions.create_index("tags")
        await self.db.questions.create_index("authorEmail")

    def close(self):
        if self.client is not None:
            self.client.close()
            logger.info("MongoDB connection closed")
        self.client = None
        self.db = None


def get_database(request: Request) -> AsyncIOMotorDatabase:
    database: Database = request.app.state.database
    if database.db is None:
        raise RuntimeError("Database is not connected")
    return database.db
