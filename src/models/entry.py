"""
Key-value entry Pydantic models
"""

from typing import Any, Mapping
from pydantic import BaseModel


class Entry(BaseModel):
    """One row of key_value_table"""
    id: int
    key: str
    value: str

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "Entry":
        """Build an entry from a database row with columns id, k, v"""
        return cls(id=record["id"], key=record["k"], value=record["v"])
