from __future__ import annotations

from fastapi import APIRouter, Depends, Response

from app.api.dependencies import get_storage
from app.core.exceptions import NotFoundError, ValidationError
from app.schemas.api_responses import CNPJResponse
from app.schemas.empresa import EmpresaSchema
from app.schemas.estabelecimento import EstabelecimentoSchema
from app.storage.base import EntityKind, Storage
from etl.utils.normalize import only_digits

router = APIRouter(prefix="/cnpj", tags=["cnpj"])

CNPJ_LENGTH = 14
CNPJ_BASICO_LENGTH = 8


@router.get(
    "/{cnpj}",
    response_model=CNPJResponse,
    summary="Consultar CNPJ",
    description=(
        "Retorna o estabelecimento, ja enriquecido com motivo da situacao, grau de risco "
        "e municipio, junto com os dados da empresa. Aceita CNPJ com ou sem pontuacao."
    ),
)
def get_cnpj(
    cnpj: str,
    response: Response,
    storage: Storage = Depends(get_storage),
) -> CNPJResponse:
    response.headers["Cache-Control"] = "private, max-age=3600"

    cnpj_digits = only_digits(cnpj)
    if len(cnpj_digits) != CNPJ_LENGTH:
        raise ValidationError("CNPJ deve ter 14 digitos")

    estabelecimento = storage.find_by_key(EntityKind.ESTABLISHMENT, cnpj_digits)
    if not estabelecimento.found:
        raise NotFoundError("CNPJ nao encontrado")

    empresa = storage.find_by_key(EntityKind.BASE_COMPANY, cnpj_digits[:CNPJ_BASICO_LENGTH])

    return CNPJResponse(
        estabelecimento=EstabelecimentoSchema.model_validate(estabelecimento.record),
        empresa=EmpresaSchema.model_validate(empresa.record) if empresa.found else None,
    )
