from __future__ import annotations

from pathlib import Path

import pytest

from app.config import DownloadConfig, Settings, load_download_config
from app.core.exceptions import ValidationError

ROOT = Path(__file__).resolve().parents[1]


def test_project_download_config_loads():
    config = load_download_config(ROOT / "config" / "companies-download.json")

    assert config.main_url.startswith("http")
    assert config.mirror_urls
    assert config.reference_doc_url.endswith(".pdf")


def test_download_config_accepts_field_names():
    config = DownloadConfig(main_url="https://a/", reference_doc_url="https://a/nr04.pdf")

    assert config.mirror_urls == []


def test_invalid_download_config(tmp_path):
    path = tmp_path / "download.json"
    path.write_text('{"mirrorUrls": []}', encoding="utf-8")

    with pytest.raises(ValidationError):
        load_download_config(path)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("http://a.com, http://b.com", ["http://a.com", "http://b.com"]),
        ('["http://a.com"]', ["http://a.com"]),
        ("", []),
    ],
)
def test_cors_origins_accept_csv_or_json(monkeypatch, raw, expected):
    monkeypatch.setenv("CORS_ORIGINS", raw)

    assert Settings().CORS_ORIGINS == expected


def test_http_timeout_pairs_connect_and_read(monkeypatch):
    monkeypatch.setenv("HTTP_CONNECT_TIMEOUT", "3")
    monkeypatch.setenv("HTTP_READ_TIMEOUT", "60")

    assert Settings().http_timeout == (3.0, 60.0)
