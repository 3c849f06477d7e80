"""
Key-value service - one parameterized statement per operation against key_value_table
"""

import logging
from typing import List, Optional
from dataclasses import dataclass

from fastapi import Depends

from database.connection import TABLE_NAME, get_db_pool
from models.entry import Entry

logger = logging.getLogger(__name__)

INSERT_QUERY = f"INSERT INTO {TABLE_NAME} (k, v) VALUES ($1, $2) RETURNING *"

SEARCH_QUERY = f"""
    SELECT *
    FROM {TABLE_NAME}
    WHERE k ILIKE $1 ESCAPE '\\'
    ORDER BY id
"""

UPDATE_QUERY = f"""
    UPDATE {TABLE_NAME}
    SET v = $2
    WHERE k = $1
    RETURNING *
"""

DELETE_QUERY = f"""
    DELETE FROM {TABLE_NAME}
    WHERE k = $1
    RETURNING *
"""

LIST_QUERY = f"SELECT * FROM {TABLE_NAME} ORDER BY id"


def contains_pattern(search_key: str) -> str:
    """LIKE pattern matching ``search_key`` literally anywhere in the key"""
    escaped = (
        search_key
        .replace("\\", "\\\\")
        .replace("%", "\\%")
        .replace("_", "\\_")
    )
    return f"%{escaped}%"


@dataclass
class ServiceResult:
    """Result from service operation"""
    success: bool
    data: Optional[List[Entry]] = None
    count: int = 0
    error: Optional[str] = None
    error_type: Optional[str] = None


class KeyValueService:
    """Service for key-value entry operations"""

    def __init__(self, db_pool):
        self.db_pool = db_pool

    async def _fetch(self, operation: str, query: str, *args) -> ServiceResult:
        """Run one statement on a pooled connection and wrap the returned rows"""
        try:
            async with self.db_pool.acquire() as conn:
                records = await conn.fetch(query, *args)
        except Exception as e:
            logger.error(f"{operation} operation failed for {TABLE_NAME}: {e}", exc_info=True)
            return ServiceResult(
                success=False,
                error=f"Database operation failed: {e}",
                error_type="DATABASE_ERROR"
            )

        entries = [Entry.from_record(record) for record in records]
        return ServiceResult(success=True, data=entries, count=len(entries))

    async def insert(self, key: str, value: str) -> ServiceResult:
        """
        Append a new entry; duplicate keys are allowed

        Returns:
            ServiceResult with the created entry and its assigned id
        """
        logger.info(f"Inserting entry with key: {key!r}")
        return await self._fetch("Insert", INSERT_QUERY, key, value)

    async def search(self, search_key: str) -> ServiceResult:
        """
        Case-insensitive substring match on key, ordered by id.

        An empty search key matches every entry.
        """
        return await self._fetch("Search", SEARCH_QUERY, contains_pattern(search_key))

    async def update(self, key: str, new_value: str) -> ServiceResult:
        """
        Set the value of every entry whose key equals ``key``

        Returns:
            ServiceResult with the rows the database reports as updated
            (empty when nothing matched; nothing is created in that case)
        """
        logger.info(f"Updating entries with key: {key!r}")
        return await self._fetch("Update", UPDATE_QUERY, key, new_value)

    async def delete(self, key: str) -> ServiceResult:
        """Remove every entry whose key equals ``key`` and return the removed rows"""
        logger.info(f"Deleting entries with key: {key!r}")
        return await self._fetch("Delete", DELETE_QUERY, key)

    async def list_all(self) -> ServiceResult:
        return await self._fetch("List", LIST_QUERY)


def get_key_value_service(db_pool=Depends(get_db_pool)) -> KeyValueService:
    """Get a key-value service bound to the application's pool"""
    return KeyValueService(db_pool)
