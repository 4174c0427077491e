from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class EstabelecimentoSchema(BaseModel):
    cnpj: str
    cnpj_basico: str
    cnpj_ordem: str | None = None
    cnpj_dv: str | None = None
    matriz_filial: int | None = None
    nome_fantasia: str | None = None
    situacao_cadastral: int | None = None
    data_situacao_cadastral: datetime | None = None
    codigo_motivo_situacao: int | None = None
    motivo_situacao: str | None = None
    nome_cidade_exterior: str | None = None
    codigo_pais: int | None = None
    data_inicio_atividade: datetime | None = None
    cnae_fiscal: str | None = None
    cnaes_secundarios: list[str] | None = None
    grau_risco: str | None = None
    tipo_logradouro: str | None = None
    logradouro: str | None = None
    numero: str | None = None
    complemento: str | None = None
    bairro: str | None = None
    cep: str | None = None
    uf: str | None = None
    codigo_municipio: int | None = None
    nome_municipio: str | None = None
    ddd1: str | None = None
    telefone1: str | None = None
    ddd2: str | None = None
    telefone2: str | None = None
    ddd_fax: str | None = None
    fax: str | None = None
    email: str | None = None
    situacao_especial: str | None = None
    data_situacao_especial: datetime | None = None

    model_config = ConfigDict(from_attributes=True, extra="ignore")
