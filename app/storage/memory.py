from __future__ import annotations

import copy
from threading import Lock
from typing import Any, Mapping

from app.storage.base import EntityKind, StoreResult, key_field


class InMemoryStorage:
    def __init__(self) -> None:
        self._lock = Lock()
        self._tables: dict[EntityKind, dict[Any, dict[str, Any]]] = {kind: {} for kind in EntityKind}

    def upsert(self, kind: EntityKind, key: Any, fields: Mapping[str, Any]) -> StoreResult:
        with self._lock:
            table = self._tables[kind]
            prior = table.get(key)
            record = dict(prior) if prior is not None else {}
            record.update(copy.deepcopy(dict(fields)))
            record[key_field(kind)] = key
            table[key] = record
            return StoreResult(record=copy.deepcopy(record), found=prior is not None)

    def find_by_key(self, kind: EntityKind, key: Any) -> StoreResult:
        with self._lock:
            record = self._tables[kind].get(key)
            if record is None:
                return StoreResult(record=None, found=False)
            return StoreResult(record=copy.deepcopy(record), found=True)

    def count(self, kind: EntityKind) -> int:
        with self._lock:
            return len(self._tables[kind])

    def close(self) -> None:
        pass
