from __future__ import annotations

from app.storage.base import EntityKind, Storage, StoreResult, key_field
from app.storage.memory import InMemoryStorage
from app.storage.sql import SqlAlchemyStorage

__all__ = ["EntityKind", "InMemoryStorage", "SqlAlchemyStorage", "Storage", "StoreResult", "key_field"]
