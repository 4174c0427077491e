from __future__ import annotations

from fastapi import APIRouter, Depends

from app.api.dependencies import get_storage
from app.core.exceptions import NotFoundError, ValidationError
from app.schemas.grau_risco import GrauRiscoSchema
from app.storage.base import EntityKind, Storage
from etl.enrichment import RISK_PREFIX_LENGTH
from etl.utils.normalize import only_digits

router = APIRouter(prefix="/nr04", tags=["nr04"])


@router.get(
    "/{cnae}",
    response_model=GrauRiscoSchema,
    summary="Consultar grau de risco",
    description="Grau de risco da NR-04 para o grupo CNAE (cinco primeiros digitos).",
)
def get_grau_risco(cnae: str, storage: Storage = Depends(get_storage)) -> GrauRiscoSchema:
    cnae_group = only_digits(cnae)[:RISK_PREFIX_LENGTH]
    if len(cnae_group) < RISK_PREFIX_LENGTH:
        raise ValidationError("CNAE deve ter ao menos 5 digitos")

    result = storage.find_by_key(EntityKind.RISK_LEVEL, cnae_group)
    if not result.found or result.record is None:
        raise NotFoundError("CNAE nao encontrado na NR-04")

    return GrauRiscoSchema(cnae=cnae_group, grau_risco=result.record.get("grau_risco") or "")
