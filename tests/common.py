"""Shared helpers for tests: registry-shaped rows, zip archives and fake HTTP."""

from __future__ import annotations

import zipfile
from collections.abc import Iterable
from pathlib import Path

import requests

__all__ = [
    "BASE_COMPANY_ROW",
    "ESTABLISHMENT_ROW",
    "FakeHttp",
    "FakeResponse",
    "csv_text",
    "write_zip",
]

BASE_COMPANY_ROW = ["12345678", "JOAO SILVA 123.456.789-00", "2135", "50", "1000,00", "01", ""]

ESTABLISHMENT_ROW = [
    "12345678",  # cnpj_basico
    "0001",
    "95",
    "1",
    "PADARIA DO JOAO",
    "02",
    "20200115",
    "01",  # codigo_motivo_situacao
    "",
    "",
    "20050301",
    "4120400",  # cnae_fiscal
    "8599604,4120400",
    "RUA",
    "DAS FLORES",
    "10",
    "",
    "CENTRO",
    "01001000",
    "SP",
    "7107",  # codigo_municipio
    "11",
    "12345678",
    "",
    "",
    "",
    "",
    "",
    "",
    "",
]


def csv_text(rows: Iterable[Iterable[str]]) -> str:
    return "".join(";".join(f'"{value}"' for value in row) + "\n" for row in rows)


def write_zip(path: Path, members: dict[str, str], encoding: str = "latin1") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    with zipfile.ZipFile(path, "w") as archive:
        for name, content in members.items():
            archive.writestr(name, content.encode(encoding))
    return path


class FakeResponse:
    def __init__(self, status_code: int = 200, headers: dict[str, str] | None = None, body: bytes = b"", text: str = ""):
        self.status_code = status_code
        self.headers = headers or {}
        self.body = body
        self.text = text

    @property
    def ok(self) -> bool:
        return self.status_code < 400

    def raise_for_status(self) -> None:
        if not self.ok:
            raise requests.HTTPError(f"{self.status_code} Error")

    def iter_content(self, chunk_size: int = 1):
        for start in range(0, len(self.body), chunk_size):
            yield self.body[start:start + chunk_size]

    def __enter__(self) -> "FakeResponse":
        return self

    def __exit__(self, *exc_info) -> None:
        return None


class FakeHttp:
    """Stands in for the ``requests`` module; unknown URLs answer 404."""

    def __init__(self, heads: dict[str, FakeResponse] | None = None, gets: dict[str, FakeResponse] | None = None):
        self.heads = heads or {}
        self.gets = gets or {}
        self.head_calls: list[str] = []
        self.get_calls: list[str] = []

    def head(self, url: str, **kwargs) -> FakeResponse:
        self.head_calls.append(url)
        response = self.heads.get(url, FakeResponse(404))
        if isinstance(response, Exception):
            raise response
        return response

    def get(self, url: str, **kwargs) -> FakeResponse:
        self.get_calls.append(url)
        response = self.gets.get(url, FakeResponse(404))
        if isinstance(response, Exception):
            raise response
        return response
