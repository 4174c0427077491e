from __future__ import annotations

import argparse
from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from functools import partial
from pathlib import Path
from typing import Any

from app.config import load_download_config, settings
from app.core.exceptions import AppError, CatalogError
from app.core.logging import get_logger, setup_logging
from app.core.metrics import IngestMetrics
from app.database import create_db_engine
from app.storage.base import Storage
from app.storage.sql import SqlAlchemyStorage
from etl.catalog import CatalogResolver, CatalogSnapshot, HtmlCatalogResolver
from etl.freshness import FreshnessGate
from etl.processors.companies_processor import process_companies_csv
from etl.processors.motivos_processor import process_motivos_csv
from etl.processors.municipios_processor import process_municipios_csv
from etl.processors.nr04_processor import process_nr04_pdf
from etl.schema import RecordKind, RecordSchema, kind_for_file, load_schema
from etl.utils.archive import extract_payload
from etl.utils.download import Downloader, file_name_from_url

logger = get_logger(__name__)

Task = tuple[str, Callable[[], Any]]

STATUS_REASON_LABEL = "motivos de situacao cadastral"
RISK_LEVEL_LABEL = "graus de risco NR-04"
CITY_LABEL = "municipios"


@dataclass(frozen=True)
class TaskOutcome:
    label: str
    error: BaseException | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class RunSummary:
    executed: bool
    reference: list[TaskOutcome] = field(default_factory=list)
    data_files: list[TaskOutcome] = field(default_factory=list)
    checkpoint_advanced: bool = False
    metrics: dict[str, Any] = field(default_factory=dict)

    @property
    def failed(self) -> list[TaskOutcome]:
        return [outcome for outcome in [*self.reference, *self.data_files] if not outcome.ok]


def run_concurrently(tasks: Sequence[Task]) -> list[TaskOutcome]:
    """Runs every task on its own thread and waits for all of them.

    A failing task is logged and reported in its outcome; it never cancels
    the others.
    """
    if not tasks:
        return []

    outcomes: list[TaskOutcome] = []
    with ThreadPoolExecutor(max_workers=len(tasks)) as executor:
        futures = {executor.submit(func): label for label, func in tasks}
        for future in as_completed(futures):
            label = futures[future]
            error = future.exception()
            if error is not None:
                logger.error("etl.tarefa_falhou", tarefa=label, erro=str(error), exc_info=error)
            else:
                logger.info("etl.tarefa_concluida", tarefa=label)
            outcomes.append(TaskOutcome(label=label, error=error))

    return outcomes


def select_data_files(urls: Sequence[str], limit: int = 0) -> list[str]:
    if limit <= 0:
        return list(urls)

    selected: list[str] = []
    per_kind: dict[RecordKind | None, int] = {}
    for url in urls:
        kind = kind_for_file(file_name_from_url(url))
        if per_kind.get(kind, 0) >= limit:
            continue
        per_kind[kind] = per_kind.get(kind, 0) + 1
        selected.append(url)
    return selected


class IngestionPipeline:
    def __init__(
        self,
        storage: Storage,
        resolver: CatalogResolver,
        downloader: Downloader,
        schemas: dict[RecordKind, RecordSchema],
        reference_doc_url: str,
        download_path: str | Path | None = None,
        main_encoding: str = settings.MAIN_TABLE_ENCODING,
        reference_encoding: str = settings.REFERENCE_TABLE_ENCODING,
        chunk_size: int = settings.BATCH_SIZE,
        metrics: IngestMetrics | None = None,
    ) -> None:
        self.storage = storage
        self.resolver = resolver
        self.downloader = downloader
        self.schemas = schemas
        self.reference_doc_url = reference_doc_url
        self.download_path = Path(download_path) if download_path is not None else downloader.download_path
        self.main_encoding = main_encoding
        self.reference_encoding = reference_encoding
        self.chunk_size = chunk_size
        self.metrics = metrics or IngestMetrics()
        self.gate = FreshnessGate(storage)

    def _extract(self, archive: Path) -> Path:
        return extract_payload(archive, self.download_path / archive.stem)

    def _load_reference_archive(self, label: str, url: str, processor: Callable[..., int]) -> int:
        if not url:
            raise CatalogError(f"Tabela '{label}' ausente no catalogo")

        payload = self._extract(self.downloader.download(url))
        rows = processor(payload, self.storage, encoding=self.reference_encoding)
        self.metrics.increment("reference_rows", rows)
        return rows

    def _load_risk_levels(self) -> int:
        if not self.reference_doc_url:
            raise CatalogError("Endereco da NR-04 nao configurado")

        rows = process_nr04_pdf(self.downloader.download(self.reference_doc_url), self.storage)
        self.metrics.increment("reference_rows", rows)
        return rows

    def load_reference_tables(self, snapshot: CatalogSnapshot) -> list[TaskOutcome]:
        # Reference tables come straight from the catalog, without the mirror probe.
        tasks: list[Task] = [
            (
                STATUS_REASON_LABEL,
                partial(self._load_reference_archive, STATUS_REASON_LABEL, snapshot.status_file, process_motivos_csv),
            ),
            (RISK_LEVEL_LABEL, self._load_risk_levels),
            (
                CITY_LABEL,
                partial(self._load_reference_archive, CITY_LABEL, snapshot.cities_file, process_municipios_csv),
            ),
        ]
        return run_concurrently(tasks)

    def process_data_file(self, file_url: str) -> int:
        archive = self.downloader.fetch_archive(file_url)
        payload = self._extract(archive)
        kind = kind_for_file(payload.name) or kind_for_file(archive.name)
        return process_companies_csv(
            payload,
            self.schemas,
            self.storage,
            kind=kind,
            encoding=self.main_encoding,
            chunk_size=self.chunk_size,
            metrics=self.metrics,
        )

    def run(self, force: bool = False, aux_only: bool = False, limit_files: int = 0) -> RunSummary:
        snapshot = self.resolver.resolve()

        if aux_only:
            reference = self.load_reference_tables(snapshot)
            logger.info("etl.auxiliares_concluidas", **self.metrics.snapshot())
            return RunSummary(executed=True, reference=reference, metrics=self.metrics.snapshot())

        if not self.gate.should_run(snapshot.last_updated, force=force):
            logger.info("etl.sem_atualizacao", atualizado_em=snapshot.last_updated)
            return RunSummary(executed=False, metrics=self.metrics.snapshot())

        reference = self.load_reference_tables(snapshot)

        files = select_data_files(snapshot.data_files, limit_files)
        logger.info("etl.arquivos_selecionados", total=len(files), limite=limit_files)
        data_files = run_concurrently(
            [(file_name_from_url(url), partial(self.process_data_file, url)) for url in files]
        )

        failed = [outcome.label for outcome in data_files if not outcome.ok]
        self.metrics.increment("files_processed", len(data_files) - len(failed))
        self.metrics.increment("files_failed", len(failed))

        advanced = False
        if failed:
            logger.warning("etl.checkpoint_mantido", falhas=failed)
        else:
            self.gate.advance(snapshot.last_updated)
            advanced = True

        summary = RunSummary(
            executed=True,
            reference=reference,
            data_files=data_files,
            checkpoint_advanced=advanced,
            metrics=self.metrics.snapshot(),
        )
        logger.info("etl.concluido", checkpoint_atualizado=advanced, **summary.metrics)
        return summary


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="get-companies",
        description="Importa o cadastro CNPJ da Receita Federal",
    )
    parser.add_argument("-c", "--config", default=settings.DOWNLOAD_CONFIG_FILE, help="arquivo de enderecos")
    parser.add_argument("-s", "--schema", default=settings.SCHEMA_FILE, help="arquivo de layout das tabelas")
    parser.add_argument("-a", "--aux-only", action="store_true", help="importa somente as tabelas auxiliares")
    parser.add_argument("-f", "--force", action="store_true", help="ignora a data da ultima importacao")
    parser.add_argument(
        "-n",
        "--limit-files",
        type=int,
        default=0,
        help="quantidade maxima de arquivos por tipo (0 = todos)",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.limit_files < 0:
        parser.error("--limit-files deve ser maior ou igual a zero")

    setup_logging()

    try:
        download_config = load_download_config(args.config)
        schemas = load_schema(args.schema)
    except AppError as exc:
        logger.error("etl.configuracao_invalida", codigo=exc.code, erro=exc.message)
        return 1

    storage = SqlAlchemyStorage(create_db_engine(settings))
    try:
        storage.connect()
        downloader = Downloader(
            settings.DATA_DOWNLOAD_PATH,
            mirror_urls=download_config.mirror_urls,
            timeout=settings.http_timeout,
        )
        pipeline = IngestionPipeline(
            storage=storage,
            resolver=HtmlCatalogResolver(download_config.main_url, timeout=settings.http_timeout),
            downloader=downloader,
            schemas=schemas,
            reference_doc_url=download_config.reference_doc_url,
        )
        pipeline.run(force=args.force, aux_only=args.aux_only, limit_files=args.limit_files)
    except AppError as exc:
        logger.exception("etl.falha_fatal", codigo=exc.code, erro=exc.message)
        return 1
    finally:
        storage.close()

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
