from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class Municipio(Base):
    __tablename__ = "municipios"

    codigo: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    nome_municipio: Mapped[str] = mapped_column(String, nullable=False)
