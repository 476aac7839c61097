"""Database connection utilities for the Feed Reader API."""

import logging
from typing import Optional

import asyncpg
from asyncpg import Pool

from ..config import get_settings
from ..errors.problem_details import StoreUnavailableError


logger = logging.getLogger(__name__)


def get_database_url() -> str:
    """Get the configured PostgreSQL URL."""
    return get_settings().database_url


class DatabaseManager:
    """Manages database connections and pool."""

    def __init__(self):
        self.pool: Optional[Pool] = None

    async def initialize(self) -> None:
        """Initialize the database connection pool."""
        if self.pool is None:
            settings = get_settings()
            self.pool = await asyncpg.create_pool(
                settings.database_url,
                min_size=settings.db_pool_min_size,
                max_size=settings.db_pool_max_size,
                command_timeout=settings.db_command_timeout
            )

    async def close(self) -> None:
        """Close the database connection pool."""
        if self.pool:
            await self.pool.close()
            self.pool = None


# Global database manager instance
db_manager = DatabaseManager()


async def get_db_pool() -> Pool:
    """Get the database connection pool, creating it on first use."""
    if not db_manager.pool:
        try:
            await db_manager.initialize()
        except (OSError, asyncpg.PostgresConnectionError) as e:
            logger.error(f"Could not connect to database: {e}")
            raise StoreUnavailableError(f"Could not connect to database: {e}")
    return db_manager.pool


def require_db_pool() -> Pool:
    """Get the database connection pool without creating it.

    Raises:
        StoreUnavailableError: If the pool has not been initialized
    """
    if not db_manager.pool:
        raise StoreUnavailableError("Database connection pool is not initialized")
    return db_manager.pool
