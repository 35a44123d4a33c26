"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from sqlalchemy.orm import Session, sessionmaker

from ims.infrastructure.config import load_settings
from ims.infrastructure.persistence.database import (
    create_db_engine,
    create_session_factory,
    init_db,
)
from ims.infrastructure.persistence.sql_unit_of_work import SqlUnitOfWork


@lru_cache(maxsize=None)
def _session_factory(db_url: str, echo: bool) -> sessionmaker[Session]:
    # One engine per database URL for the life of the process
    if db_url.startswith("sqlite:///") and db_url != "sqlite:///:memory:":
        Path(db_url.removeprefix("sqlite:///")).parent.mkdir(parents=True, exist_ok=True)
    engine = create_db_engine(db_url, echo=echo)
    init_db(engine)
    return create_session_factory(engine)


def unit_of_work() -> SqlUnitOfWork:
    settings = load_settings()
    return SqlUnitOfWork(_session_factory(settings.db_url, settings.sql_echo))
