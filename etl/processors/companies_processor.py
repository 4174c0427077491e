from __future__ import annotations

from pathlib import Path

from app.config import settings
from app.core.exceptions import SchemaError, StorageError
from app.core.logging import get_logger
from app.core.metrics import IngestMetrics
from app.storage.base import Storage
from etl.enrichment import EnrichmentJoin
from etl.processors.empresas_processor import save_base_company
from etl.processors.estabelecimentos_processor import establishment_key, save_establishment
from etl.schema import RecordKind, RecordSchema, kind_for_file, map_row
from etl.utils.delimited import iter_rows

logger = get_logger(__name__)


def process_companies_csv(
    file_path: str | Path,
    schemas: dict[RecordKind, RecordSchema],
    storage: Storage,
    kind: RecordKind | None = None,
    encoding: str = settings.MAIN_TABLE_ENCODING,
    chunk_size: int = settings.BATCH_SIZE,
    metrics: IngestMetrics | None = None,
) -> int:
    path = Path(file_path)
    kind = kind or kind_for_file(path.name)
    if kind is None:
        raise SchemaError(f"Tipo de registro nao identificado pelo nome do arquivo: {path.name}")

    schema = schemas.get(kind)
    if schema is None:
        raise SchemaError(f"Layout ausente para '{kind.value}'")

    join = EnrichmentJoin(storage)
    processed = 0
    failed = 0

    rows = iter_rows(path, encoding=encoding, chunk_size=chunk_size, width=schema.width)
    for line_number, raw_row in enumerate(rows, start=1):
        row = map_row(raw_row, schema)
        try:
            if kind is RecordKind.BASE_COMPANY:
                save_base_company(row, storage)
            else:
                save_establishment(row, storage, join)
        except StorageError:
            failed += 1
            logger.exception(
                "etl.linha_falhou",
                arquivo=path.name,
                linha=line_number,
                chave=establishment_key(row) if kind is RecordKind.ESTABLISHMENT else row.string("cnpj_basico"),
            )
            continue
        processed += 1

    if metrics is not None:
        metrics.increment("rows_processed", processed)
        metrics.increment("rows_failed", failed)

    logger.info("etl.arquivo_importado", arquivo=path.name, tipo=kind.value, registros=processed, falhas=failed)
    return processed
