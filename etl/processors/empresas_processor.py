from __future__ import annotations

from typing import Any

from app.storage.base import EntityKind, Storage, StoreResult
from etl.schema import MappedRow
from etl.utils.normalize import strip_cpf

# Empresario (Individual) / MEI: the registry appends the owner's CPF to the name
MEI_NATUREZA_JURIDICA = 2135


def base_company_document(row: MappedRow) -> dict[str, Any]:
    natureza_juridica = row.integer("natureza_juridica")
    razao_social = row.string("razao_social")
    if natureza_juridica == MEI_NATUREZA_JURIDICA:
        razao_social = strip_cpf(razao_social)

    return {
        "razao_social": razao_social,
        "natureza_juridica": natureza_juridica,
        "qualificacao_responsavel": row.integer("qualificacao_responsavel"),
        "capital_social": row.decimal("capital_social"),
        "porte_empresa": row.integer("porte_empresa"),
        "ente_federativo": row.string("ente_federativo"),
    }


def save_base_company(row: MappedRow, storage: Storage) -> StoreResult:
    return storage.upsert(EntityKind.BASE_COMPANY, row.string("cnpj_basico"), base_company_document(row))
