from __future__ import annotations

from pathlib import Path

from app.config import settings
from app.core.exceptions import StorageError
from app.core.logging import get_logger
from app.storage.base import EntityKind, Storage
from etl.utils.delimited import iter_rows
from etl.utils.normalize import to_int

logger = get_logger(__name__)


def process_reference_csv(
    file_path: str | Path,
    kind: EntityKind,
    value_field: str,
    storage: Storage,
    encoding: str = settings.REFERENCE_TABLE_ENCODING,
    chunk_size: int = settings.BATCH_SIZE,
) -> int:
    """Upserts a ``codigo;descricao`` table; rows whose code is not an integer are skipped."""
    processed = 0
    for line_number, row in enumerate(
        iter_rows(file_path, encoding=encoding, chunk_size=chunk_size, usecols=[0, 1]),
        start=1,
    ):
        codigo = to_int(row[0])
        if codigo is None:
            continue

        try:
            storage.upsert(kind, codigo, {value_field: row[1].strip()})
        except StorageError:
            logger.exception(
                "reference.upsert_falhou",
                tabela=kind.value,
                arquivo=Path(file_path).name,
                linha=line_number,
                codigo=codigo,
            )
            continue
        processed += 1

    logger.info("reference.importado", tabela=kind.value, arquivo=Path(file_path).name, registros=processed)
    return processed
