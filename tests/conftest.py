from __future__ import annotations

from pathlib import Path

import pytest
from sqlalchemy import create_engine

from app.storage.memory import InMemoryStorage
from app.storage.sql import SqlAlchemyStorage
from etl.schema import load_schema

ROOT = Path(__file__).resolve().parents[1]


@pytest.fixture()
def memory_storage() -> InMemoryStorage:
    return InMemoryStorage()


@pytest.fixture()
def sqlite_storage(tmp_path):
    engine = create_engine(
        f"sqlite:///{tmp_path / 'cnpj.sqlite'}",
        connect_args={"check_same_thread": False, "timeout": 30},
    )
    storage = SqlAlchemyStorage(engine)
    storage.connect()
    try:
        yield storage
    finally:
        storage.close()


@pytest.fixture(params=["memory", "sqlite"])
def storage(request):
    """Runs a test once per storage backend."""
    return request.getfixturevalue(f"{request.param}_storage")


@pytest.fixture(scope="session")
def schemas():
    return load_schema(ROOT / "config" / "cnpj-schema.json")
