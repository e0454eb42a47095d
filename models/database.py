"""Database connection setup."""

from typing import Optional

from fastapi import Request
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection, AsyncIOMotorDatabase
from pymongo import ASCENDING

from config.settings import Settings
from utils.logger import setup_logger

logger = setup_logger(__name__)

USERS_COLLECTION = "users"
EXERCISES_COLLECTION = "exercises"


class ExerciseStore:
    """MongoDB connection manager.

    Opened once by the application lifespan and handed to request handlers
    through ``get_store``; nothing else holds the client.
    """

    def __init__(self, settings: Settings):
        self.settings = settings
        self.client: Optional[AsyncIOMotorClient] = None

    async def connect(self) -> None:
        """Create database connection and indexes."""
        self.client = AsyncIOMotorClient(self.settings.mongodb_url)
        logger.info(f"Connected to MongoDB database: {self.settings.database_name}")
        await self.init_indexes()

    async def init_indexes(self) -> None:
        """Index exercises by owner; the reference itself is not enforced."""
        await self.exercises.create_index([("userId", ASCENDING)])
        logger.info("MongoDB initialized: indexes created")

    async def close(self) -> None:
        """Close database connection."""
        if self.client:
            self.client.close()
            self.client = None
            logger.info("Disconnected from MongoDB")

    @property
    def database(self) -> AsyncIOMotorDatabase:
        if self.client is None:
            raise RuntimeError("Database connection is not open")
        return self.client[self.settings.database_name]

    @property
    def users(self) -> AsyncIOMotorCollection:
        return self.database[USERS_COLLECTION]

    @property
    def exercises(self) -> AsyncIOMotorCollection:
        return self.database[EXERCISES_COLLECTION]


def get_store(request: Request) -> ExerciseStore:
    """Get the store opened for this application."""
    return request.app.state.store
