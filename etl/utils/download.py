from __future__ import annotations

import posixpath
from pathlib import Path
from typing import Any
from urllib.parse import urlsplit, urlunsplit

import requests

from app.core.exceptions import DownloadError, NoArchiveSourceError
from app.core.logging import get_logger

logger = get_logger(__name__)

# Typical values: "application/zip", "application/zip; charset=binary"
ZIP_CONTENT_TYPE = "application/zip"
CHUNK_SIZE = 1024 * 1024


def file_name_from_url(url: str) -> str:
    return posixpath.basename(urlsplit(url).path)


def join_url(base_url: str, file_name: str) -> str:
    parts = urlsplit(base_url)
    return urlunsplit(parts._replace(path=posixpath.join(parts.path or "/", file_name)))


class Downloader:
    """Fetches registry files, falling back to mirrors for data archives.

    ``http`` is anything exposing ``head``/``get`` with the ``requests``
    signatures; the module itself is the default so every call gets its own
    connection and the downloader can be shared between threads.
    """

    def __init__(
        self,
        download_path: str | Path,
        mirror_urls: list[str] | None = None,
        http: Any = requests,
        timeout: tuple[float, float] = (10.0, 300.0),
    ) -> None:
        self.download_path = Path(download_path)
        self.mirror_urls = list(mirror_urls or [])
        self.http = http
        self.timeout = timeout

    def candidate_urls(self, file_url: str) -> list[str]:
        file_name = file_name_from_url(file_url)
        parts = urlsplit(file_url)
        own_directory = urlunsplit(parts._replace(path=posixpath.dirname(parts.path) + "/", query="", fragment=""))
        return [join_url(base, file_name) for base in [own_directory, *self.mirror_urls]]

    def _serves_archive(self, url: str) -> bool:
        try:
            response = self.http.head(url, allow_redirects=True, timeout=self.timeout)
        except requests.RequestException as exc:
            logger.warning("download.probe_failed", url=url, erro=str(exc))
            return False

        content_type = response.headers.get("Content-Type", "") or ""
        if response.ok and ZIP_CONTENT_TYPE in content_type:
            return True

        logger.info("download.probe_rejected", url=url, status_code=response.status_code, content_type=content_type)
        return False

    def resolve(self, file_url: str) -> str:
        for url in self.candidate_urls(file_url):
            if self._serves_archive(url):
                return url
        raise NoArchiveSourceError(f"Nenhuma origem serve application/zip para {file_name_from_url(file_url)}")

    def download(self, url: str) -> Path:
        self.download_path.mkdir(parents=True, exist_ok=True)
        target = self.download_path / file_name_from_url(url)

        logger.info("download.inicio", url=url, destino=str(target))
        try:
            with self.http.get(url, stream=True, timeout=self.timeout) as response:
                response.raise_for_status()
                with target.open("wb") as output:
                    for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                        if chunk:
                            output.write(chunk)
        except (requests.RequestException, OSError) as exc:
            target.unlink(missing_ok=True)
            raise DownloadError(f"Falha ao baixar {url}: {exc}") from exc

        return target

    def fetch_archive(self, file_url: str) -> Path:
        return self.download(self.resolve(file_url))
