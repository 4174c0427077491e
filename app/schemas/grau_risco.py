from __future__ import annotations

from pydantic import BaseModel


class GrauRiscoSchema(BaseModel):
    cnae: str
    grau_risco: str
