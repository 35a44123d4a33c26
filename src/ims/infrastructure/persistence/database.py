"""Engine and session factory setup."""

from __future__ import annotations

import logging

import sqlalchemy as sa
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from ims.infrastructure.persistence.tables import Base

_logger = logging.getLogger(__name__)


def create_db_engine(db_url: str, echo: bool = False) -> Engine:
    engine = sa.create_engine(db_url, echo=echo)
    if engine.dialect.name == "sqlite":
        sa.event.listen(engine, "connect", _configure_sqlite_connection)
    return engine


def init_db(engine: Engine) -> None:
    """Create any missing tables."""
    Base.metadata.create_all(engine)
    _logger.debug("Database schema ready at %s", engine.url)


def create_session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(engine, expire_on_commit=False)


def _configure_sqlite_connection(dbapi_connection, connection_record) -> None:
    # ON DELETE CASCADE from order_item to order needs this on SQLite
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()
    # The built-in lower() folds ASCII only; product search needs Unicode
    dbapi_connection.create_function("lower", 1, _unicode_lower, deterministic=True)


def _unicode_lower(value: str | None) -> str | None:
    return value.lower() if value is not None else None
