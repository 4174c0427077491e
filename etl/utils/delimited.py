from __future__ import annotations

from collections.abc import Callable, Iterator
from pathlib import Path

import pandas as pd

from app.config import settings
from app.core.logging import get_logger

logger = get_logger(__name__)


def _bad_line_handler(file_name: str, width: int | None) -> Callable[[list[str]], list[str]]:
    def handle(bad_line: list[str]) -> list[str]:
        logger.warning(
            "etl.linha_irregular",
            arquivo=file_name,
            campos=len(bad_line),
            esperado=width,
            inicio=bad_line[0] if bad_line else "",
        )
        return bad_line[:width] if width else bad_line

    return handle


def iter_rows(
    file_path: str | Path,
    encoding: str = "latin1",
    chunk_size: int = settings.BATCH_SIZE,
    usecols: list[int] | None = None,
    width: int | None = None,
) -> Iterator[list[str]]:
    """Yields the rows of a header-less ``;`` table, in file order.

    A row with more fields than the first one is logged and cut down to
    ``width`` (or to the first row's width) instead of failing the chunk.
    """
    path = Path(file_path)
    chunks = pd.read_csv(
        path,
        sep=";",
        dtype=str,
        encoding=encoding,
        chunksize=chunk_size,
        header=None,
        usecols=usecols,
        keep_default_na=False,
        engine="python",
        on_bad_lines=_bad_line_handler(path.name, width),
    )

    for chunk in chunks:
        chunk = chunk.fillna("")
        for row in chunk.itertuples(index=False, name=None):
            yield list(row)
