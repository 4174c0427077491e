from __future__ import annotations

from app.models.empresa import Empresa
from app.models.estabelecimento import Estabelecimento
from app.models.grau_risco import GrauRisco
from app.models.motivo import Motivo
from app.models.municipio import Municipio
from app.models.parametro import Parametro

__all__ = [
    "Empresa", "Estabelecimento", "GrauRisco",
    "Motivo", "Municipio", "Parametro",
]
