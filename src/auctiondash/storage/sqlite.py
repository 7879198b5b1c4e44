"""SQLite-based property store for local use.

Used when no hosted backend is configured. Each row is kept as a JSON
document next to its id and creation timestamp, mirroring the shape the
hosted table returns.
"""

import json
import logging
import sqlite3
import uuid
from pathlib import Path
from typing import Any, Optional

from ..config import config
from ..models.property import PropertyDraft, PropertyRecord
from .base import PropertyStore, StoreError, build_row, projected_fields

logger = logging.getLogger(__name__)


class SQLiteStore(PropertyStore):
    """SQLite-backed property store.

    Example:
        store = SQLiteStore(data_dir=Path("data"))
        await store.insert(draft)
        newest_first = await store.select_all(order_by="created_at")
    """

    name = "sqlite"

    def __init__(
        self,
        data_dir: Optional[Path] = None,
        db_name: str = "properties.db",
    ):
        """Initialize the store.

        Args:
            data_dir: Directory for the database file. Defaults to AUCTIONDASH_DATA_DIR.
            db_name: Name of the SQLite database file
        """
        self.data_dir = Path(data_dir) if data_dir else config.data_dir
        self.data_dir.mkdir(parents=True, exist_ok=True)
        self.db_path = self.data_dir / db_name

        self._init_db()

    def _init_db(self) -> None:
        """Initialize the database schema."""
        with sqlite3.connect(self.db_path) as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS properties (
                    id TEXT PRIMARY KEY,
                    case_number TEXT,
                    data JSON NOT NULL,
                    created_at TIMESTAMP NOT NULL
                )
            """)
            conn.execute(
                "CREATE INDEX IF NOT EXISTS idx_created ON properties(created_at)"
            )
            conn.commit()

    def is_available(self) -> bool:
        return True

    async def insert(self, draft: PropertyDraft) -> list[PropertyRecord]:
        row = build_row(draft)
        row["id"] = str(uuid.uuid4())

        try:
            with sqlite3.connect(self.db_path) as conn:
                conn.execute(
                    """
                    INSERT INTO properties (id, case_number, data, created_at)
                    VALUES (?, ?, ?, ?)
                    """,
                    (row["id"], row["case_number"], json.dumps(row), row["created_at"]),
                )
                conn.commit()
        except sqlite3.Error as e:
            logger.error(f"Insert of {draft.case_number} failed: {e}")
            raise StoreError(self.name, str(e)) from e

        logger.info(f"Inserted property {draft.case_number} ({row['id']})")
        return [PropertyRecord(**row)]

    async def select_all(
        self,
        fields: Optional[list[str]] = None,
        order_by: Optional[str] = None,
        descending: bool = True,
    ) -> list[PropertyRecord]:
        columns = projected_fields(fields)

        query = "SELECT data FROM properties"
        params: list[Any] = []
        if order_by:
            if order_by not in PropertyRecord.model_fields:
                raise ValueError(f"Unknown property column: {order_by}")
            direction = "DESC" if descending else "ASC"
            if order_by == "created_at":
                query += f" ORDER BY created_at {direction}, rowid {direction}"
            else:
                query += f" ORDER BY json_extract(data, ?) {direction}"
                params.append(f"$.{order_by}")

        try:
            with sqlite3.connect(self.db_path) as conn:
                rows = conn.execute(query, params).fetchall()
        except sqlite3.Error as e:
            logger.error(f"Select from {self.db_path} failed: {e}")
            raise StoreError(self.name, str(e)) from e

        records = []
        for (data,) in rows:
            parsed = json.loads(data)
            if columns:
                parsed = {k: v for k, v in parsed.items() if k in columns}
            records.append(PropertyRecord(**parsed))

        logger.debug(f"Loaded {len(records)} properties from {self.db_path}")
        return records

    def count(self) -> int:
        """Count stored properties."""
        with sqlite3.connect(self.db_path) as conn:
            (total,) = conn.execute("SELECT COUNT(*) FROM properties").fetchone()
        return total
