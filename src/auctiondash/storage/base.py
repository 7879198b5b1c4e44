"""Abstract record store for property rows.

The dashboard and CLI talk to the backend only through PropertyStore,
so the hosted table store and the local SQLite file are interchangeable.

Example usage:
    store = create_store()
    await store.insert(draft)
    records = await store.select_all(order_by="created_at")
"""

from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, Optional

from ..analysis.calculator import derived_columns, refresh_derived
from ..models.property import PropertyDraft, PropertyRecord


class PropertyStore(ABC):
    """Abstract base class for property record stores.

    Attributes:
        name: Identifier used in log lines and error messages
    """

    name: str

    @abstractmethod
    async def insert(self, draft: PropertyDraft) -> list[PropertyRecord]:
        """Append one property record.

        Args:
            draft: Validated registration form payload

        Returns:
            The inserted row(s) as stored, including id and timestamps

        Raises:
            StoreError: On any backend failure
        """
        pass

    @abstractmethod
    async def select_all(
        self,
        fields: Optional[list[str]] = None,
        order_by: Optional[str] = None,
        descending: bool = True,
    ) -> list[PropertyRecord]:
        """Return all property records.

        Args:
            fields: Columns to project (``id`` is always included). All when None.
            order_by: Column to order by; backend order when None
            descending: Sort direction for ``order_by``

        Raises:
            StoreError: On any backend failure
        """
        pass

    @abstractmethod
    def is_available(self) -> bool:
        """Check if this store is configured and usable."""
        pass


class StoreError(Exception):
    """Single failure kind for record store operations.

    Attributes:
        store: Name of the store that raised the error
        message: Human-readable backend message
    """

    def __init__(self, store: str, message: str):
        self.store = store
        self.message = message
        super().__init__(f"[{store}] {message}")


def build_row(draft: PropertyDraft, now: Optional[datetime] = None) -> dict[str, Any]:
    """Build the insert payload for a draft.

    Derived columns are written as a cache alongside the raw fields.
    Unset optional fields (name, notes, dates) are left out so the row
    only names the columns it has values for.
    """
    now = now or datetime.now(timezone.utc)
    row = draft.model_dump(mode="json", exclude_none=True)
    row.update(derived_columns(draft))
    row["created_at"] = now.isoformat()
    row["updated_at"] = now.isoformat()
    return row


def projected_fields(fields: Optional[list[str]]) -> Optional[list[str]]:
    """Validate a projection and make sure it carries the row id."""
    if fields is None:
        return None
    unknown = [f for f in fields if f not in PropertyRecord.model_fields]
    if unknown:
        raise ValueError(f"Unknown property columns: {', '.join(unknown)}")
    if "id" not in fields:
        return ["id", *fields]
    return list(fields)


async def fetch_properties(
    store: PropertyStore,
    fields: Optional[list[str]] = None,
    order_by: Optional[str] = "created_at",
    refresh: bool = True,
) -> list[PropertyRecord]:
    """Load records, newest first, with the derived cache recomputed.

    Pass ``refresh=False`` to see the derived columns exactly as stored.
    """
    records = await store.select_all(fields=fields, order_by=order_by)
    if not refresh:
        return records
    return [refresh_derived(record) for record in records]
