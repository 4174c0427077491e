from __future__ import annotations

from fastapi import Request

from app.core.exceptions import StorageUnavailableError
from app.storage.base import Storage


def get_storage(request: Request) -> Storage:
    storage = getattr(request.app.state, "storage", None)
    if storage is None:
        raise StorageUnavailableError()
    return storage
