"""SQLAlchemy-backed implementation of ProductRepository."""

from __future__ import annotations

import sqlalchemy as sa
from sqlalchemy.orm import Session

from ims.domain.exceptions import NotFoundError
from ims.domain.model.product import Product, ProductStatus
from ims.domain.model.value_objects import MAX_QUANTITY, Money
from ims.domain.repository.product_repository import ProductCriteria, ProductRepository
from ims.infrastructure.persistence.tables import ProductRow


class SqlProductRepository(ProductRepository):

    def __init__(self, session: Session) -> None:
        self._session = session

    # --- ProductRepository interface ------------------------------------------

    def get_by_id(self, product_id: int, *, for_update: bool = False) -> Product | None:
        row = self._session.get(
            ProductRow,
            product_id,
            populate_existing=True,
            with_for_update=True if for_update else None,
        )
        return self._to_domain(row) if row is not None else None

    def add(self, product: Product) -> None:
        row = ProductRow()
        self._apply(row, product)
        self._session.add(row)
        self._session.flush()
        product.id = row.id

    def save(self, product: Product) -> None:
        row = self._session.get(ProductRow, product.id)
        if row is None:
            raise NotFoundError(f"Product #{product.id} not found")
        self._apply(row, product)
        self._session.flush()

    def adjust_quantity(self, product_id: int, delta: int) -> int | None:
        # One statement: no window between reading and writing the stock
        shifted = sa.cast(ProductRow.quantity, sa.BigInteger) + delta
        stmt = (
            sa.update(ProductRow)
            .where(ProductRow.id == product_id)
            .values(
                quantity=sa.case(
                    (shifted < 0, 0),
                    (shifted > MAX_QUANTITY, MAX_QUANTITY),
                    else_=shifted,
                )
            )
            .execution_options(synchronize_session=False)
        )
        result = self._session.execute(stmt)
        if result.rowcount == 0:
            return None
        return self._session.scalar(
            sa.select(ProductRow.quantity).where(ProductRow.id == product_id)
        )

    # --- Listing --------------------------------------------------------------

    def list_after(self, criteria: ProductCriteria, after_id: int, limit: int) -> list[Product]:
        stmt = (
            sa.select(ProductRow)
            .where(*self._filters(criteria), ProductRow.id > after_id)
            .order_by(ProductRow.id.asc())
            .limit(limit)
        )
        return self._fetch(stmt)

    def list_window(self, criteria: ProductCriteria, offset: int, limit: int) -> list[Product]:
        stmt = self._newest_first(criteria).offset(offset).limit(limit)
        return self._fetch(stmt)

    def list_all(self, criteria: ProductCriteria) -> list[Product]:
        return self._fetch(self._newest_first(criteria))

    def count(self, criteria: ProductCriteria) -> int:
        stmt = sa.select(sa.func.count(ProductRow.id)).where(*self._filters(criteria))
        return int(self._session.scalar(stmt) or 0)

    # --- Query helpers --------------------------------------------------------

    def _newest_first(self, criteria: ProductCriteria) -> sa.Select:
        return (
            sa.select(ProductRow)
            .where(*self._filters(criteria))
            .order_by(ProductRow.created_at.desc(), ProductRow.id.desc())
        )

    @staticmethod
    def _filters(criteria: ProductCriteria) -> list:
        clauses: list = []
        if criteria.status is not None:
            clauses.append(
                ProductRow.is_disabled == (criteria.status is ProductStatus.DISABLED)
            )
        term = criteria.search_term
        if term is not None:
            needle = term.lower()
            clauses.append(
                sa.or_(
                    sa.func.lower(ProductRow.name, type_=sa.String).contains(
                        needle, autoescape=True
                    ),
                    sa.func.lower(ProductRow.description, type_=sa.String).contains(
                        needle, autoescape=True
                    ),
                )
            )
        return clauses

    def _fetch(self, stmt: sa.Select) -> list[Product]:
        stmt = stmt.execution_options(populate_existing=True)
        return [self._to_domain(row) for row in self._session.scalars(stmt)]

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _apply(row: ProductRow, product: Product) -> None:
        row.name = product.name
        row.description = product.description
        row.price = product.price.amount
        row.quantity = product.quantity
        row.is_disabled = product.is_disabled
        row.created_at = product.created_at
        row.updated_at = product.updated_at

    @staticmethod
    def _to_domain(row: ProductRow) -> Product:
        return Product(
            id=row.id,
            name=row.name,
            description=row.description,
            price=Money(row.price),
            quantity=row.quantity,
            status=ProductStatus.DISABLED if row.is_disabled else ProductStatus.ACTIVE,
            created_at=row.created_at,
            updated_at=row.updated_at,
        )
