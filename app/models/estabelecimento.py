from datetime import datetime

from sqlalchemy import JSON, DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class Estabelecimento(Base):
    __tablename__ = "estabelecimentos"

    cnpj: Mapped[str] = mapped_column(String(14), primary_key=True)
    cnpj_basico: Mapped[str] = mapped_column(String(8), nullable=False, index=True)
    cnpj_ordem: Mapped[str | None] = mapped_column(String(4), nullable=True)
    cnpj_dv: Mapped[str | None] = mapped_column(String(2), nullable=True)
    matriz_filial: Mapped[int | None] = mapped_column(Integer, nullable=True)
    nome_fantasia: Mapped[str | None] = mapped_column(String, nullable=True)
    situacao_cadastral: Mapped[int | None] = mapped_column(Integer, nullable=True)
    data_situacao_cadastral: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    codigo_motivo_situacao: Mapped[int | None] = mapped_column(Integer, nullable=True)
    motivo_situacao: Mapped[str | None] = mapped_column(String, nullable=True)
    nome_cidade_exterior: Mapped[str | None] = mapped_column(String, nullable=True)
    codigo_pais: Mapped[int | None] = mapped_column(Integer, nullable=True)
    data_inicio_atividade: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    cnae_fiscal: Mapped[str | None] = mapped_column(String(7), nullable=True)
    cnaes_secundarios: Mapped[list[str] | None] = mapped_column(JSON, nullable=True)
    grau_risco: Mapped[str | None] = mapped_column(String(1), nullable=True)
    tipo_logradouro: Mapped[str | None] = mapped_column(String, nullable=True)
    logradouro: Mapped[str | None] = mapped_column(String, nullable=True)
    numero: Mapped[str | None] = mapped_column(String, nullable=True)
    complemento: Mapped[str | None] = mapped_column(String, nullable=True)
    bairro: Mapped[str | None] = mapped_column(String, nullable=True)
    cep: Mapped[str | None] = mapped_column(String(8), nullable=True)
    uf: Mapped[str | None] = mapped_column(String(2), nullable=True)
    codigo_municipio: Mapped[int | None] = mapped_column(Integer, nullable=True)
    nome_municipio: Mapped[str | None] = mapped_column(String, nullable=True)
    ddd1: Mapped[str | None] = mapped_column(String, nullable=True)
    telefone1: Mapped[str | None] = mapped_column(String, nullable=True)
    ddd2: Mapped[str | None] = mapped_column(String, nullable=True)
    telefone2: Mapped[str | None] = mapped_column(String, nullable=True)
    ddd_fax: Mapped[str | None] = mapped_column(String, nullable=True)
    fax: Mapped[str | None] = mapped_column(String, nullable=True)
    email: Mapped[str | None] = mapped_column(String, nullable=True)
    situacao_especial: Mapped[str | None] = mapped_column(String, nullable=True)
    data_situacao_especial: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
