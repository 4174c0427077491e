from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Protocol


class EntityKind(str, Enum):
    BASE_COMPANY = "base_empresas"
    ESTABLISHMENT = "estabelecimentos"
    STATUS_REASON = "motivos"
    RISK_LEVEL = "graus_risco"
    CITY = "municipios"
    PARAMETER = "parametros"


KEY_FIELDS: dict[EntityKind, str] = {
    EntityKind.BASE_COMPANY: "cnpj_basico",
    EntityKind.ESTABLISHMENT: "cnpj",
    EntityKind.STATUS_REASON: "codigo",
    EntityKind.RISK_LEVEL: "cnae",
    EntityKind.CITY: "codigo",
    EntityKind.PARAMETER: "chave",
}


@dataclass(frozen=True)
class StoreResult:
    """Outcome of a keyed store operation.

    ``found`` reports whether a record existed under the key before the call.
    For ``find_by_key`` a miss is ``found=False`` with ``record=None``; for
    ``upsert`` ``record`` always holds the record as stored after the write.
    Operational failures are raised as ``StorageError`` instead.
    """

    record: dict[str, Any] | None
    found: bool


class Storage(Protocol):
    def upsert(self, kind: EntityKind, key: Any, fields: Mapping[str, Any]) -> StoreResult: ...

    def find_by_key(self, kind: EntityKind, key: Any) -> StoreResult: ...

    def close(self) -> None: ...


def key_field(kind: EntityKind) -> str:
    return KEY_FIELDS[kind]
