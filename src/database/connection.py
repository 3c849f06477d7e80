"""
Database connection, pool management and schema bootstrap
"""

import asyncpg
import logging
from fastapi import Request

from config.settings import (
    DB_HOST,
    DB_PORT,
    POSTGRES_DB,
    POSTGRES_USER,
    POSTGRES_PASSWORD,
    DB_POOL_MIN_SIZE,
    DB_POOL_MAX_SIZE,
)

logger = logging.getLogger(__name__)

TABLE_NAME = "key_value_table"

LIVENESS_QUERY = "SELECT NOW()"

CREATE_TABLE_QUERY = f"""
    CREATE TABLE IF NOT EXISTS {TABLE_NAME} (
      id SERIAL PRIMARY KEY,
      k TEXT NOT NULL,
      v TEXT NOT NULL
    )
"""


class DatabaseBootstrapError(RuntimeError):
    """Raised when the database cannot be reached or the schema cannot be created"""


async def create_table_if_not_exists(db_pool) -> None:
    """Idempotently create the key-value table"""
    try:
        async with db_pool.acquire() as conn:
            await conn.execute(CREATE_TABLE_QUERY)
    except Exception as e:
        logger.error(f"Error creating table: {e}", exc_info=True)
        raise DatabaseBootstrapError(f"Could not create table {TABLE_NAME}: {e}") from e

    logger.info(f'Table "{TABLE_NAME}" created or already exists.')


async def init_database():
    """
    Create the connection pool, verify connectivity and ensure the schema exists.

    Both steps must succeed before the application serves requests; any
    failure is raised as DatabaseBootstrapError and is not retried.
    """
    try:
        db_pool = await asyncpg.create_pool(
            host=DB_HOST,
            port=DB_PORT,
            database=POSTGRES_DB,
            user=POSTGRES_USER,
            password=POSTGRES_PASSWORD,
            min_size=DB_POOL_MIN_SIZE,
            max_size=DB_POOL_MAX_SIZE,
            statement_cache_size=0  # pgbouncer compatibility
        )

        # Test connection
        async with db_pool.acquire() as conn:
            server_time = await conn.fetchval(LIVENESS_QUERY)
    except Exception as e:
        logger.error(f"Error initializing database: {e}", exc_info=True)
        raise DatabaseBootstrapError(f"Database connectivity check failed: {e}") from e

    logger.info(f"PostgreSQL connected. Server time: {server_time}")

    try:
        await create_table_if_not_exists(db_pool)
    except DatabaseBootstrapError:
        await db_pool.close()
        raise

    logger.info("Database initialized successfully")
    return db_pool


async def close_database(db_pool):
    """Close database connection pool"""
    if db_pool:
        await db_pool.close()
    logger.info("Database connections closed")


def get_db_pool(request: Request):
    """Get the database pool owned by the running application"""
    return request.app.state.db_pool
