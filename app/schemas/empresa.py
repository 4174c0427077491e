from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class EmpresaSchema(BaseModel):
    cnpj_basico: str
    razao_social: str | None = None
    natureza_juridica: int | None = None
    qualificacao_responsavel: int | None = None
    capital_social: float | None = None
    porte_empresa: int | None = None
    ente_federativo: str | None = None

    model_config = ConfigDict(from_attributes=True, extra="ignore")
