from __future__ import annotations

from pathlib import Path

from app.config import settings
from app.storage.base import EntityKind, Storage
from etl.processors.reference_processor import process_reference_csv


def process_motivos_csv(
    file_path: str | Path,
    storage: Storage,
    encoding: str = settings.REFERENCE_TABLE_ENCODING,
) -> int:
    return process_reference_csv(
        file_path, kind=EntityKind.STATUS_REASON, value_field="motivo", storage=storage, encoding=encoding
    )
