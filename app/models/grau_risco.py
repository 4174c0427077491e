from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class GrauRisco(Base):
    __tablename__ = "graus_risco"

    cnae: Mapped[str] = mapped_column(String(5), primary_key=True)
    grau_risco: Mapped[str] = mapped_column(String(1), nullable=False)
