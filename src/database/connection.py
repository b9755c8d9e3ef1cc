"""
Database connection and pool management
"""

from typing import Optional

import asyncpg
import logging
from config.settings import DATABASE_URL

logger = logging.getLogger(__name__)

EMPLOYEES_TABLE_DDL = """
CREATE TABLE IF NOT EXISTS employees (
    id BIGINT PRIMARY KEY,
    name TEXT NOT NULL,
    position TEXT NOT NULL,
    salary DOUBLE PRECISION NOT NULL
)
"""

async def init_database(database_url: Optional[str] = None) -> asyncpg.Pool:
    """Open the connection pool and make sure the employees table exists"""
    dsn = database_url or DATABASE_URL
    if not dsn:
        raise RuntimeError("DATABASE_URL environment variable is required")

    db_pool = await asyncpg.create_pool(
        dsn,
        min_size=2,
        max_size=10,
        command_timeout=60,
        statement_cache_size=0  # Fix for pgbouncer compatibility
    )

    # Test connection
    async with db_pool.acquire() as conn:
        await conn.fetchval("SELECT 1")
        await ensure_schema(conn)

    logger.info("Database initialized successfully")
    return db_pool


async def ensure_schema(conn) -> None:
    """Create the employees table when it is missing"""
    await conn.execute(EMPLOYEES_TABLE_DDL)


async def close_database(db_pool: Optional[asyncpg.Pool]) -> None:
    """Close database connection pool"""
    if db_pool:
        await db_pool.close()
    logger.info("Database connections closed")
