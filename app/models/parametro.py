from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class Parametro(Base):
    __tablename__ = "parametros"

    chave: Mapped[str] = mapped_column(String, primary_key=True)
    valor: Mapped[str | None] = mapped_column(String, nullable=True)
