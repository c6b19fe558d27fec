# keyset_core/storage/__init__.py

from .models import KeysetRecord
from .provider import KeysetStore, StoreKeysetReader, StoreKeysetWriter
from .providers.memory_provider import InMemoryKeysetStore
from .providers.sqlite_provider import SQLiteKeysetStore
import os


def load_storage_provider(config: dict | None = None) -> KeysetStore:
    """
    Factory resolver for selecting the keyset store backend.

        - sqlite (default)
        - memory
    """
    config = config or {}
    provider = config.get("provider") or os.getenv("KEYSET_STORAGE_PROVIDER", "sqlite")

    if provider == "memory":
        return InMemoryKeysetStore()

    if provider == "sqlite":
        db_path = config.get("sqlite_path") or os.getenv("KEYSET_DB_PATH", "db/keysets.db")
        return SQLiteKeysetStore(db_path)

    raise ValueError(f"Unknown storage provider: {provider}")


__all__ = [
    "KeysetRecord",
    "KeysetStore",
    "StoreKeysetReader",
    "StoreKeysetWriter",
    "InMemoryKeysetStore",
    "SQLiteKeysetStore",
    "load_storage_provider",
]
