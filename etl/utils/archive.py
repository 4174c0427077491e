from __future__ import annotations

import zipfile
from pathlib import Path

from app.core.exceptions import ArchiveError


def first_archive_member(zip_path: str | Path) -> str:
    """Name of the first regular file in the archive directory listing.

    Registry archives carry a single payload file; entries are scanned in the
    order they appear in the zip central directory.
    """
    try:
        with zipfile.ZipFile(zip_path, "r") as archive:
            for member in archive.infolist():
                if member.is_dir():
                    continue
                return member.filename
    except zipfile.BadZipFile as exc:
        raise ArchiveError(f"Arquivo zip invalido: {zip_path}") from exc

    raise ArchiveError(f"Nenhum arquivo no primeiro nivel do zip: {zip_path}")


def extract_archive(zip_path: str | Path, destination_dir: str | Path) -> Path:
    destination = Path(destination_dir)
    destination.mkdir(parents=True, exist_ok=True)
    try:
        with zipfile.ZipFile(zip_path, "r") as archive:
            archive.extractall(destination)
    except zipfile.BadZipFile as exc:
        raise ArchiveError(f"Arquivo zip invalido: {zip_path}") from exc
    return destination


def extract_payload(zip_path: str | Path, destination_dir: str | Path) -> Path:
    member = first_archive_member(zip_path)
    destination = extract_archive(zip_path, destination_dir)
    return destination / member
