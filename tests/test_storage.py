from __future__ import annotations

from datetime import datetime

import pytest

from app.core.exceptions import StorageError
from app.storage.base import EntityKind


def test_upsert_creates_then_reports_existing_record(storage):
    first = storage.upsert(EntityKind.STATUS_REASON, 1, {"motivo": "EXTINCAO POR ENCERRAMENTO"})
    second = storage.upsert(EntityKind.STATUS_REASON, 1, {"motivo": "EXTINCAO POR ENCERRAMENTO"})

    assert first.found is False
    assert second.found is True
    assert second.record == {"codigo": 1, "motivo": "EXTINCAO POR ENCERRAMENTO"}


def test_upsert_is_idempotent(storage):
    fields = {
        "cnpj_basico": "12345678",
        "nome_fantasia": "PADARIA",
        "cnaes_secundarios": ["8599604", "4120400"],
        "data_inicio_atividade": datetime(2005, 3, 1),
    }
    storage.upsert(EntityKind.ESTABLISHMENT, "12345678000195", fields)
    once = storage.find_by_key(EntityKind.ESTABLISHMENT, "12345678000195").record
    storage.upsert(EntityKind.ESTABLISHMENT, "12345678000195", fields)
    twice = storage.find_by_key(EntityKind.ESTABLISHMENT, "12345678000195").record

    assert once == twice
    assert twice["cnaes_secundarios"] == ["8599604", "4120400"]
    assert twice["cnpj"] == "12345678000195"


def test_upsert_replaces_given_fields_only(storage):
    storage.upsert(EntityKind.BASE_COMPANY, "12345678", {"razao_social": "ANTIGA", "porte_empresa": 1})
    result = storage.upsert(EntityKind.BASE_COMPANY, "12345678", {"razao_social": "NOVA"})

    assert result.record["razao_social"] == "NOVA"
    assert result.record["porte_empresa"] == 1


def test_find_by_key_miss_is_not_an_error(storage):
    result = storage.find_by_key(EntityKind.CITY, 9999)

    assert result.found is False
    assert result.record is None


def test_sql_storage_rejects_unknown_columns(sqlite_storage):
    with pytest.raises(StorageError):
        sqlite_storage.upsert(EntityKind.CITY, 7107, {"descricao": "SAO PAULO"})


def test_sql_storage_upsert_with_key_only(sqlite_storage):
    result = sqlite_storage.upsert(EntityKind.PARAMETER, "chave-vazia", {})

    assert result.found is False
    assert result.record["chave"] == "chave-vazia"
