from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Protocol
from urllib.parse import urljoin

import requests
from bs4 import BeautifulSoup

from app.core.exceptions import CatalogError
from app.core.logging import get_logger

logger = get_logger(__name__)

_DATA_FILE = re.compile(r"(EMPRE|ESTABELE)[^/]*\.zip$", re.IGNORECASE)
_STATUS_FILE = re.compile(r"MOTI[^/]*\.zip$", re.IGNORECASE)
_CITIES_FILE = re.compile(r"MUNIC[^/]*\.zip$", re.IGNORECASE)
_LAST_UPDATE = re.compile(r"Data.*:.*?([0-9]{2}/[0-9]{2}/[0-9]{4})")


@dataclass(frozen=True)
class CatalogSnapshot:
    data_files: list[str] = field(default_factory=list)
    status_file: str = ""
    cities_file: str = ""
    last_updated: str = ""


class CatalogResolver(Protocol):
    def resolve(self) -> CatalogSnapshot: ...


def parse_catalog_page(html: str, base_url: str = "") -> CatalogSnapshot:
    soup = BeautifulSoup(html, "html.parser")

    data_files: list[str] = []
    status_file = ""
    cities_file = ""
    for link in soup.find_all("a", href=True):
        href = urljoin(base_url, link["href"].strip())
        if _DATA_FILE.search(href):
            if href not in data_files:
                data_files.append(href)
        elif not status_file and _STATUS_FILE.search(href):
            status_file = href
        elif not cities_file and _CITIES_FILE.search(href):
            cities_file = href

    match = _LAST_UPDATE.search(soup.get_text(" ", strip=True))
    last_updated = match.group(1) if match else ""

    return CatalogSnapshot(
        data_files=data_files,
        status_file=status_file,
        cities_file=cities_file,
        last_updated=last_updated,
    )


class HtmlCatalogResolver:
    def __init__(self, url: str, http: Any = requests, timeout: tuple[float, float] = (10.0, 60.0)) -> None:
        self.url = url
        self.http = http
        self.timeout = timeout

    def resolve(self) -> CatalogSnapshot:
        try:
            response = self.http.get(self.url, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as exc:
            raise CatalogError(f"Falha ao consultar catalogo {self.url}: {exc}") from exc

        snapshot = parse_catalog_page(response.text, base_url=self.url)
        logger.info(
            "catalog.resolvido",
            url=self.url,
            arquivos=len(snapshot.data_files),
            motivos=snapshot.status_file,
            municipios=snapshot.cities_file,
            atualizado_em=snapshot.last_updated,
        )
        return snapshot
