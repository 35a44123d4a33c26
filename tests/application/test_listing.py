"""Integration tests for product and order listings in all three
pagination modes.
"""

from datetime import date

import pytest

from ims.application.dto import CursorPagination, OffsetPagination
from ims.application.list_orders import ListOrdersHandler
from ims.application.list_products import ListProductsHandler
from ims.application.pagination import ListParams
from ims.domain.exceptions import ValidationError
from ims.domain.model.order import Order
from ims.domain.model.product import Product, ProductStatus
from ims.domain.model.value_objects import Money
from tests.fakes import FakeUnitOfWork


def _catalog(count: int = 5) -> FakeUnitOfWork:
    return FakeUnitOfWork([
        Product.create(
            name=f"Product {n}",
            price=Money.parse("1.00"),
            quantity=n,
            description="dark lager" if n % 2 else None,
        )
        for n in range(1, count + 1)
    ])


def _with_orders(dates: list[date]) -> FakeUnitOfWork:
    uow = FakeUnitOfWork()
    for d in dates:
        uow.orders.add(Order.create(d))
    return uow


class TestListParams:

    @pytest.mark.parametrize("limit", [0, 101])
    def test_limit_bounds(self, limit):
        with pytest.raises(ValidationError, match="between 1 and 100"):
            ListParams(limit=limit)

    def test_negative_cursor(self):
        with pytest.raises(ValidationError, match="Cursor"):
            ListParams(cursor=-1)

    def test_page_must_be_positive(self):
        with pytest.raises(ValidationError, match="Page"):
            ListParams(page=0)


class TestListProducts:

    def test_full_listing_has_no_pagination(self):
        page = ListProductsHandler(_catalog()).handle()
        assert page.pagination is None
        assert [p.id for p in page.items] == [5, 4, 3, 2, 1]

    def test_cursor_walk_visits_every_product_once(self):
        handler = ListProductsHandler(_catalog())
        seen: list[int] = []
        cursor = 0
        while True:
            page = handler.handle(ListParams(cursor=cursor, limit=2))
            seen.extend(p.id for p in page.items)
            assert isinstance(page.pagination, CursorPagination)
            if not page.pagination.has_more:
                assert page.pagination.next_cursor is None
                break
            cursor = page.pagination.next_cursor

        full = handler.handle()
        assert seen == [1, 2, 3, 4, 5]
        assert sorted(p.id for p in full.items) == seen

    def test_cursor_on_exact_boundary(self):
        page = ListProductsHandler(_catalog(4)).handle(ListParams(cursor=2, limit=2))
        assert [p.id for p in page.items] == [3, 4]
        assert page.pagination == CursorPagination(next_cursor=None, has_more=False)

    def test_page_mode(self):
        page = ListProductsHandler(_catalog()).handle(ListParams(page=2, limit=2))
        assert [p.id for p in page.items] == [3, 2]
        assert page.pagination == OffsetPagination(
            page=2, limit=2, total=5, total_pages=3, has_more=True
        )

    def test_page_past_the_end(self):
        page = ListProductsHandler(_catalog()).handle(ListParams(page=9, limit=2))
        assert page.items == []
        assert page.pagination.has_more is False

    def test_cursor_wins_over_page(self):
        page = ListProductsHandler(_catalog()).handle(
            ListParams(cursor=0, page=3, limit=2)
        )
        assert isinstance(page.pagination, CursorPagination)
        assert [p.id for p in page.items] == [1, 2]

    def test_list_all_is_every_active_product(self):
        uow = _catalog(3)
        product = uow.products.get_by_id(1)
        product.disable()
        uow.products.save(product)

        assert [p.id for p in ListProductsHandler(uow).list_all()] == [3, 2]

    def test_disabled_products_hidden_by_default(self):
        uow = _catalog()
        product = uow.products.get_by_id(2)
        product.disable()
        uow.products.save(product)
        handler = ListProductsHandler(uow)

        assert 2 not in [p.id for p in handler.handle().items]
        assert [p.id for p in handler.handle(status=ProductStatus.DISABLED).items] == [2]
        assert len(handler.handle(status=None).items) == 5

    def test_search_matches_name_or_description(self):
        handler = ListProductsHandler(_catalog())
        assert [p.id for p in handler.handle(search="product 4").items] == [4]
        assert [p.id for p in handler.handle(search="LAGER").items] == [5, 3, 1]
        assert handler.handle(search="   ").pagination is None
        assert len(handler.handle(search="   ").items) == 5


class TestListOrders:

    def test_dates_are_day_month_year(self):
        page = ListOrdersHandler(_with_orders([date(2024, 3, 5)])).handle()
        assert page.items[0].order_date == "05/03/24"

    def test_default_order_is_newest_id_first(self):
        uow = _with_orders([date(2024, 1, d) for d in (1, 2, 3)])
        handler = ListOrdersHandler(uow)
        assert [o.id for o in handler.handle().items] == [3, 2, 1]
        assert [o.id for o in handler.handle(order="asc").items] == [1, 2, 3]

    def test_bad_sort_direction(self):
        with pytest.raises(ValidationError, match="asc"):
            ListOrdersHandler(_with_orders([])).handle(order="sideways")

    def test_date_range_is_inclusive(self):
        uow = _with_orders([date(2024, 1, d) for d in (1, 5, 10, 15)])
        page = ListOrdersHandler(uow).handle(
            date_from=date(2024, 1, 5), date_to=date(2024, 1, 10)
        )
        assert [o.id for o in page.items] == [3, 2]

    def test_cursor_walk_ignores_sort_direction(self):
        uow = _with_orders([date(2024, 1, d) for d in (1, 2, 3)])
        handler = ListOrdersHandler(uow)
        first = handler.handle(ListParams(cursor=0, limit=2), order="desc")
        assert [o.id for o in first.items] == [1, 2]
        assert first.pagination == CursorPagination(next_cursor=2, has_more=True)
        second = handler.handle(ListParams(cursor=2, limit=2))
        assert [o.id for o in second.items] == [3]

    def test_page_mode_counts_filtered_rows(self):
        uow = _with_orders([date(2024, 1, d) for d in range(1, 8)])
        page = ListOrdersHandler(uow).handle(
            ListParams(page=1, limit=3), date_from=date(2024, 1, 3)
        )
        assert [o.id for o in page.items] == [7, 6, 5]
        assert page.pagination.total == 5
        assert page.pagination.total_pages == 2
