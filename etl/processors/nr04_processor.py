from __future__ import annotations

import re
from collections.abc import Iterable, Iterator
from pathlib import Path

from app.core.exceptions import StorageError
from app.core.logging import get_logger
from app.storage.base import EntityKind, Storage
from etl.utils.normalize import remove_chars
from etl.utils.pdf import extract_pdf_lines

logger = get_logger(__name__)

# NR-04 Annex I: "01.11-3 Cultivo de cereais ... 3" -> CNAE group 01113, grade 3
RISK_LINE_PATTERN = re.compile(r"([0-9]{2}\.[0-9]{2}-[0-9]).*([0-9])")


def parse_risk_levels(lines: Iterable[str]) -> Iterator[tuple[str, str]]:
    for line in lines:
        match = RISK_LINE_PATTERN.search(line)
        if match is None:
            continue
        cnae = remove_chars(match.group(1).strip(), ".-")
        yield cnae, match.group(2).strip()


def process_nr04_pdf(file_path: str | Path, storage: Storage) -> int:
    processed = 0
    for cnae, grau_risco in parse_risk_levels(extract_pdf_lines(file_path)):
        try:
            storage.upsert(EntityKind.RISK_LEVEL, cnae, {"grau_risco": grau_risco})
        except StorageError:
            logger.exception("nr04.upsert_falhou", cnae=cnae)
            continue
        processed += 1

    logger.info("nr04.importado", arquivo=Path(file_path).name, registros=processed)
    return processed
