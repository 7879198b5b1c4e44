"""Storage modules for property records.

This package provides the record store interface and its two backends:
the hosted Supabase table and a local SQLite file.
"""

from typing import Optional

from ..config import Settings, config
from .base import PropertyStore, StoreError, fetch_properties
from .sqlite import SQLiteStore
from .supabase import SupabaseStore


def create_store(settings: Optional[Settings] = None) -> PropertyStore:
    """Pick the hosted store when credentials are configured, else SQLite."""
    settings = settings or config
    if settings.supabase_url and settings.supabase_key:
        return SupabaseStore(
            url=settings.supabase_url,
            key=settings.supabase_key,
            table=settings.table_name,
            timeout=settings.request_timeout,
        )
    return SQLiteStore(data_dir=settings.data_dir)


__all__ = [
    "PropertyStore",
    "StoreError",
    "SupabaseStore",
    "SQLiteStore",
    "create_store",
    "fetch_properties",
]
