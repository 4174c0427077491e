from __future__ import annotations

import zipfile

import pytest

from app.core.exceptions import ArchiveError
from etl.utils.archive import extract_payload, first_archive_member
from tests.common import write_zip


def test_single_file_archive_yields_its_payload(tmp_path):
    archive = write_zip(tmp_path / "Empresas0.zip", {"K3241.K03200Y0.D30610.EMPRECSV": "12345678;EMPRESA\n"})

    payload = extract_payload(archive, tmp_path / "Empresas0")

    assert payload == tmp_path / "Empresas0" / "K3241.K03200Y0.D30610.EMPRECSV"
    assert payload.read_text(encoding="latin1") == "12345678;EMPRESA\n"


def test_directory_entries_are_skipped(tmp_path):
    archive = tmp_path / "Estabelecimentos0.zip"
    with zipfile.ZipFile(archive, "w") as handle:
        handle.writestr("dados/", "")
        handle.writestr("dados/ESTABELE.csv", "x")
        handle.writestr("outro.txt", "y")

    assert first_archive_member(archive) == "dados/ESTABELE.csv"
    assert extract_payload(archive, tmp_path / "out").read_text() == "x"


def test_empty_archive_fails(tmp_path):
    archive = tmp_path / "vazio.zip"
    with zipfile.ZipFile(archive, "w"):
        pass

    with pytest.raises(ArchiveError):
        first_archive_member(archive)


def test_invalid_archive_fails(tmp_path):
    archive = tmp_path / "quebrado.zip"
    archive.write_bytes(b"<html>not a zip</html>")

    with pytest.raises(ArchiveError):
        extract_payload(archive, tmp_path / "out")
