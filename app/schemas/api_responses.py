from __future__ import annotations

from pydantic import BaseModel

from app.schemas.empresa import EmpresaSchema
from app.schemas.estabelecimento import EstabelecimentoSchema


class ErrorDetail(BaseModel):
    code: str
    message: str
    request_id: str | None = None


class ErrorResponse(BaseModel):
    error: ErrorDetail


class AboutResponse(BaseModel):
    name: str
    version: str


class CNPJResponse(BaseModel):
    estabelecimento: EstabelecimentoSchema
    empresa: EmpresaSchema | None = None
