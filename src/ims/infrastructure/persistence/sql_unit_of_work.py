"""SQLAlchemy-backed unit of work: one session, one transaction."""

from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, sessionmaker

from ims.domain.exceptions import ConflictError
from ims.domain.repository.unit_of_work import UnitOfWork
from ims.infrastructure.persistence.sql_order_repository import SqlOrderRepository
from ims.infrastructure.persistence.sql_product_repository import SqlProductRepository

_logger = logging.getLogger(__name__)


class SqlUnitOfWork(UnitOfWork):
    """Opens a fresh session each time the ``with`` block is entered."""

    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self._session_factory = session_factory
        self._session: Session | None = None

    def __enter__(self) -> SqlUnitOfWork:
        self._session = self._session_factory()
        self.products = SqlProductRepository(self._session)
        self.orders = SqlOrderRepository(self._session)
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            self.rollback()
        finally:
            self._session.close()  # type: ignore[union-attr]
            self._session = None
        if exc_type is not None and issubclass(exc_type, IntegrityError):
            _logger.warning("Store rejected the transaction: %s", exc)
            raise ConflictError(
                "The change conflicts with existing data and was not saved"
            ) from exc

    def commit(self) -> None:
        try:
            self._session.commit()  # type: ignore[union-attr]
        except IntegrityError as exc:
            self._session.rollback()  # type: ignore[union-attr]
            _logger.warning("Store rejected the commit: %s", exc)
            raise ConflictError(
                "The change conflicts with existing data and was not saved"
            ) from exc

    def rollback(self) -> None:
        if self._session is not None:
            self._session.rollback()
