from __future__ import annotations

from datetime import datetime

from app.core.exceptions import FreshnessError
from app.core.logging import get_logger
from app.storage.base import EntityKind, Storage

logger = get_logger(__name__)

CHECKPOINT_KEY = "last-ingest-date"
CATALOG_DATE_LAYOUT = "%d/%m/%Y"


def parse_catalog_date(value: str) -> datetime:
    try:
        return datetime.strptime((value or "").strip(), CATALOG_DATE_LAYOUT)
    except ValueError as exc:
        raise FreshnessError(f"Data de atualizacao do catalogo invalida: {value!r}") from exc


class FreshnessGate:
    def __init__(self, storage: Storage) -> None:
        self.storage = storage

    def read_checkpoint(self) -> datetime | None:
        result = self.storage.find_by_key(EntityKind.PARAMETER, CHECKPOINT_KEY)
        if not result.found or result.record is None:
            return None

        raw = result.record.get("valor")
        try:
            return datetime.fromisoformat(raw)
        except (TypeError, ValueError):
            logger.warning("freshness.checkpoint_invalido", chave=CHECKPOINT_KEY, valor=raw)
            return None

    def should_run(self, last_updated: str, force: bool = False) -> bool:
        catalog_date = parse_catalog_date(last_updated)
        if force:
            logger.info("freshness.forcado", atualizado_em=catalog_date.date().isoformat())
            return True

        checkpoint = self.read_checkpoint()
        if checkpoint is None:
            logger.info("freshness.primeira_execucao", atualizado_em=catalog_date.date().isoformat())
            return True

        should_run = catalog_date > checkpoint
        logger.info(
            "freshness.comparacao",
            atualizado_em=catalog_date.date().isoformat(),
            checkpoint=checkpoint.date().isoformat(),
            executar=should_run,
        )
        return should_run

    def advance(self, updated: str | datetime) -> datetime:
        value = updated if isinstance(updated, datetime) else parse_catalog_date(updated)
        self.storage.upsert(EntityKind.PARAMETER, CHECKPOINT_KEY, {"valor": value.isoformat()})
        logger.info("freshness.checkpoint_atualizado", checkpoint=value.isoformat())
        return value
