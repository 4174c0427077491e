from __future__ import annotations

from typing import Any, Mapping

from sqlalchemy import Engine, Table, select, text
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import SQLAlchemyError

from app.core.exceptions import StorageError, StorageUnavailableError
from app.core.logging import get_logger
from app.database import Base
from app.models import Empresa, Estabelecimento, GrauRisco, Motivo, Municipio, Parametro
from app.storage.base import EntityKind, StoreResult, key_field

logger = get_logger(__name__)

MODELS: dict[EntityKind, type[Base]] = {
    EntityKind.BASE_COMPANY: Empresa,
    EntityKind.ESTABLISHMENT: Estabelecimento,
    EntityKind.STATUS_REASON: Motivo,
    EntityKind.RISK_LEVEL: GrauRisco,
    EntityKind.CITY: Municipio,
    EntityKind.PARAMETER: Parametro,
}

_INSERT_BY_DIALECT = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


class SqlAlchemyStorage:
    def __init__(self, engine: Engine) -> None:
        self.engine = engine
        dialect = engine.dialect.name
        if dialect not in _INSERT_BY_DIALECT:
            raise StorageError(f"Dialeto sem suporte a upsert: {dialect}")
        self._insert = _INSERT_BY_DIALECT[dialect]

    def connect(self) -> None:
        try:
            with self.engine.begin() as connection:
                connection.execute(text("SELECT 1"))
            Base.metadata.create_all(self.engine)
        except SQLAlchemyError as exc:
            logger.error("storage.unavailable", url=self.engine.url.render_as_string(hide_password=True))
            raise StorageUnavailableError() from exc

    def close(self) -> None:
        self.engine.dispose()

    @staticmethod
    def _table(kind: EntityKind) -> Table:
        return MODELS[kind].__table__

    def upsert(self, kind: EntityKind, key: Any, fields: Mapping[str, Any]) -> StoreResult:
        table = self._table(kind)
        key_column = key_field(kind)

        unknown = sorted(set(fields) - set(table.c.keys()))
        if unknown:
            raise StorageError(f"Colunas desconhecidas em {table.name}: {', '.join(unknown)}")

        values = {**fields, key_column: key}
        stmt = self._insert(table).values(values)
        update_values = {col: stmt.excluded[col] for col in values if col != key_column}
        if update_values:
            stmt = stmt.on_conflict_do_update(index_elements=[key_column], set_=update_values)
        else:
            stmt = stmt.on_conflict_do_nothing(index_elements=[key_column])
        stmt = stmt.returning(*table.c)

        by_key = select(table).where(table.c[key_column] == key)
        try:
            with self.engine.begin() as connection:
                prior = connection.execute(by_key).first()
                row = connection.execute(stmt).mappings().first()
                if row is None:
                    row = connection.execute(by_key).mappings().first()
        except SQLAlchemyError as exc:
            raise StorageError(f"Falha no upsert em {table.name} (chave={key!r})") from exc

        return StoreResult(record=dict(row) if row is not None else None, found=prior is not None)

    def find_by_key(self, kind: EntityKind, key: Any) -> StoreResult:
        table = self._table(kind)
        query = select(table).where(table.c[key_field(kind)] == key)
        try:
            with self.engine.connect() as connection:
                row = connection.execute(query).mappings().first()
        except SQLAlchemyError as exc:
            raise StorageError(f"Falha na consulta em {table.name} (chave={key!r})") from exc

        if row is None:
            return StoreResult(record=None, found=False)
        return StoreResult(record=dict(row), found=True)
