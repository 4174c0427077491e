from __future__ import annotations

from typing import Any

from sqlalchemy import Engine, create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import DeclarativeBase

from app.config import Settings


class Base(DeclarativeBase):
    pass


def _engine_options(settings: Settings) -> dict[str, Any]:
    url = make_url(settings.DATABASE_URL)

    if url.get_backend_name() == "sqlite":
        return {
            "connect_args": {"timeout": settings.DB_CONNECT_TIMEOUT, "check_same_thread": False},
        }

    options: dict[str, Any] = {
        "pool_size": settings.DB_POOL_SIZE,
        "max_overflow": settings.DB_MAX_OVERFLOW,
        "pool_timeout": settings.DB_POOL_TIMEOUT,
        "pool_pre_ping": True,
    }
    if url.get_backend_name() == "postgresql":
        options["connect_args"] = {
            "connect_timeout": settings.DB_CONNECT_TIMEOUT,
            "options": f"-c statement_timeout={settings.DB_STATEMENT_TIMEOUT_MS}",
        }
    return options


def create_db_engine(settings: Settings) -> Engine:
    return create_engine(settings.DATABASE_URL, **_engine_options(settings))
