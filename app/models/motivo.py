from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class Motivo(Base):
    __tablename__ = "motivos"

    codigo: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    motivo: Mapped[str] = mapped_column(String, nullable=False)
