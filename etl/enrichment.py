from __future__ import annotations

from dataclasses import dataclass

from app.storage.base import EntityKind, Storage

RISK_PREFIX_LENGTH = 5


@dataclass(frozen=True)
class Enrichment:
    motivo_situacao: str = ""
    grau_risco: str = ""
    nome_municipio: str = ""


class EnrichmentJoin:
    """Denormalizes reference tables into an establishment at import time.

    Each lookup is independent and a miss yields an empty string. Storage
    faults are not misses and propagate as ``StorageError``.
    """

    def __init__(self, storage: Storage) -> None:
        self.storage = storage

    def _lookup(self, kind: EntityKind, key: object, field: str) -> str:
        result = self.storage.find_by_key(kind, key)
        if not result.found or result.record is None:
            return ""
        return result.record.get(field) or ""

    def status_reason(self, codigo_motivo: int | None) -> str:
        if codigo_motivo is None:
            return ""
        return self._lookup(EntityKind.STATUS_REASON, codigo_motivo, "motivo")

    def risk_level(self, cnae_fiscal: str) -> str:
        if not cnae_fiscal:
            return ""
        return self._lookup(EntityKind.RISK_LEVEL, cnae_fiscal[:RISK_PREFIX_LENGTH], "grau_risco")

    def city_name(self, codigo_municipio: int | None) -> str:
        if codigo_municipio is None:
            return ""
        return self._lookup(EntityKind.CITY, codigo_municipio, "nome_municipio")

    def lookup(self, codigo_motivo: int | None, cnae_fiscal: str, codigo_municipio: int | None) -> Enrichment:
        return Enrichment(
            motivo_situacao=self.status_reason(codigo_motivo),
            grau_risco=self.risk_level(cnae_fiscal),
            nome_municipio=self.city_name(codigo_municipio),
        )
