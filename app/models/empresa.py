from sqlalchemy import Float, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class Empresa(Base):
    __tablename__ = "base_empresas"

    cnpj_basico: Mapped[str] = mapped_column(String(8), primary_key=True)
    razao_social: Mapped[str | None] = mapped_column(String, nullable=True)
    natureza_juridica: Mapped[int | None] = mapped_column(Integer, nullable=True)
    qualificacao_responsavel: Mapped[int | None] = mapped_column(Integer, nullable=True)
    capital_social: Mapped[float | None] = mapped_column(Float, nullable=True)
    porte_empresa: Mapped[int | None] = mapped_column(Integer, nullable=True)
    ente_federativo: Mapped[str | None] = mapped_column(String, nullable=True)
