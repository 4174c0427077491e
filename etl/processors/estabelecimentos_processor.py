from __future__ import annotations

from typing import Any

from app.storage.base import EntityKind, Storage, StoreResult
from etl.enrichment import Enrichment, EnrichmentJoin
from etl.schema import MappedRow
from etl.utils.normalize import split_activities

STRING_FIELDS = [
    "nome_fantasia",
    "nome_cidade_exterior",
    "cnae_fiscal",
    "tipo_logradouro",
    "logradouro",
    "numero",
    "complemento",
    "bairro",
    "cep",
    "uf",
    "ddd1",
    "telefone1",
    "ddd2",
    "telefone2",
    "ddd_fax",
    "fax",
    "email",
    "situacao_especial",
]

INT_FIELDS = [
    "matriz_filial",
    "situacao_cadastral",
    "codigo_motivo_situacao",
    "codigo_pais",
    "codigo_municipio",
]

TIMESTAMP_FIELDS = [
    "data_situacao_cadastral",
    "data_inicio_atividade",
    "data_situacao_especial",
]


def establishment_key(row: MappedRow) -> str:
    return row.string("cnpj_basico") + row.string("cnpj_ordem") + row.string("cnpj_dv")


def establishment_document(row: MappedRow, enrichment: Enrichment) -> dict[str, Any]:
    document: dict[str, Any] = {
        "cnpj_basico": row.string("cnpj_basico"),
        "cnpj_ordem": row.string("cnpj_ordem"),
        "cnpj_dv": row.string("cnpj_dv"),
        "cnaes_secundarios": split_activities(row.string("cnaes_secundarios")),
    }
    document.update({name: row.string(name) for name in STRING_FIELDS})
    document.update({name: row.integer(name) for name in INT_FIELDS})
    document.update({name: row.timestamp(name) for name in TIMESTAMP_FIELDS})

    document["motivo_situacao"] = enrichment.motivo_situacao
    document["grau_risco"] = enrichment.grau_risco
    document["nome_municipio"] = enrichment.nome_municipio
    return document


def save_establishment(row: MappedRow, storage: Storage, join: EnrichmentJoin) -> StoreResult:
    enrichment = join.lookup(
        codigo_motivo=row.integer("codigo_motivo_situacao"),
        cnae_fiscal=row.string("cnae_fiscal"),
        codigo_municipio=row.integer("codigo_municipio"),
    )
    return storage.upsert(EntityKind.ESTABLISHMENT, establishment_key(row), establishment_document(row, enrichment))
