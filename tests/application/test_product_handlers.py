"""Integration tests for the catalog use cases.

Uses the in-memory fake unit of work — no database.
"""

from datetime import date

import pytest

from ims.application.adjust_quantity import AdjustQuantityHandler
from ims.application.count_pending_orders import CountPendingOrdersHandler
from ims.application.create_product import CreateProductHandler
from ims.application.disable_product import DisableProductHandler
from ims.application.restore_product import RestoreProductHandler
from ims.application.update_product import UpdateProductHandler
from ims.domain.exceptions import NotFoundError, ValidationError
from ims.domain.model.order import Order, OrderItem, OrderStatus
from ims.domain.model.product import Product
from ims.domain.model.value_objects import MAX_QUANTITY, Money, Quantity
from tests.fakes import FakeUnitOfWork


def _setup() -> FakeUnitOfWork:
    return FakeUnitOfWork([
        Product.create(name="Keg 30L", price=Money.parse("120.00"), quantity=10),
        Product.create(name="Keg 50L", price=Money.parse("199.90"), quantity=4),
    ])


def _order(uow: FakeUnitOfWork, lines, status=OrderStatus.PENDING) -> Order:
    items = [
        OrderItem(id=None, product_id=pid, quantity=Quantity(qty), price=Money.parse(price))
        for pid, qty, price in lines
    ]
    order = Order.create(date(2024, 3, 5), items, status=status)
    uow.orders.add(order)
    return order


class TestCreateProduct:

    def test_creates_active_product(self):
        uow = FakeUnitOfWork()
        dto = CreateProductHandler(uow).handle(
            name="Chopp Pilsen", price="9,90", quantity="12", description="Barrel"
        )
        assert dto.id == 1
        assert dto.price == "9.90"
        assert dto.quantity == 12
        assert dto.is_disabled is False
        assert uow.products.get_by_id(1).name == "Chopp Pilsen"
        assert uow.commits == 1

    @pytest.mark.parametrize(
        "fields, message",
        [
            (dict(name="", price="1", quantity="1"), "Name is required"),
            (dict(name="A", price="abc", quantity="1"), "valid number"),
            (dict(name="A", price="-1", quantity="1"), "non-negative"),
            (dict(name="A", price="1", quantity="-2"), "non-negative"),
            (dict(name="A", price="1", quantity="x"), "integer"),
            (dict(name="A" * 257, price="1", quantity="1"), "at most 256"),
            (dict(name="A", price="1e30", quantity="1"), "must not exceed"),
            (dict(name="A", price="1", quantity="99999999999999999999"), "must not exceed"),
        ],
    )
    def test_invalid_input_rejected(self, fields, message):
        uow = FakeUnitOfWork()
        with pytest.raises(ValidationError, match=message):
            CreateProductHandler(uow).handle(**fields)
        assert uow.products.get_by_id(1) is None
        assert uow.commits == 0


class TestUpdateProduct:

    def test_partial_update(self):
        uow = _setup()
        dto = UpdateProductHandler(uow).handle(1, price="130,5")
        assert dto.price == "130.50"
        assert dto.name == "Keg 30L"
        assert dto.quantity == 10

    def test_unknown_product(self):
        with pytest.raises(NotFoundError, match="Product #42"):
            UpdateProductHandler(_setup()).handle(42, name="X")

    def test_price_change_does_not_touch_orders(self):
        uow = _setup()
        order = _order(uow, [(1, 2, "120.00")])

        UpdateProductHandler(uow).handle(1, price="999")

        assert str(uow.orders.get_by_id(order.id).total_price) == "240.00"


class TestDisableProduct:

    def test_cleans_pending_keeps_completed(self):
        uow = _setup()
        pending = _order(uow, [(1, 2, "120.00"), (2, 1, "199.90")])
        completed = _order(uow, [(1, 3, "100.00")], status=OrderStatus.COMPLETED)

        DisableProductHandler(uow).handle(1)

        assert uow.products.get_by_id(1).is_disabled
        saved_pending = uow.orders.get_by_id(pending.id)
        assert [i.product_id for i in saved_pending.items] == [2]
        assert str(saved_pending.total_price) == "199.90"

        saved_completed = uow.orders.get_by_id(completed.id)
        assert len(saved_completed.items) == 1
        assert str(saved_completed.total_price) == "300.00"

    def test_locks_the_product_row(self):
        uow = _setup()
        DisableProductHandler(uow).handle(1)
        assert uow.products.locked == [1]

    def test_unknown_product(self):
        with pytest.raises(NotFoundError):
            DisableProductHandler(_setup()).handle(42)

    def test_restore_does_not_bring_items_back(self):
        uow = _setup()
        pending = _order(uow, [(1, 2, "120.00")])

        DisableProductHandler(uow).handle(1)
        RestoreProductHandler(uow).handle(1)

        assert not uow.products.get_by_id(1).is_disabled
        assert uow.orders.get_by_id(pending.id).items == []

    def test_restore_unknown_product(self):
        with pytest.raises(NotFoundError):
            RestoreProductHandler(_setup()).handle(42)


class TestAdjustQuantity:

    def test_adds_and_removes_stock(self):
        uow = _setup()
        handler = AdjustQuantityHandler(uow)
        assert handler.handle(1, 5).quantity == 15
        assert handler.handle(1, -3).quantity == 12

    def test_clamps_at_zero(self):
        uow = _setup()
        dto = AdjustQuantityHandler(uow).handle(2, -100)
        assert dto.id == 2
        assert dto.quantity == 0

    def test_never_negative_over_a_sequence(self):
        uow = _setup()
        handler = AdjustQuantityHandler(uow)
        for delta in [-3, -3, 7, -20, 1, -1, -1, 5]:
            assert handler.handle(2, delta).quantity >= 0
        assert uow.products.get_by_id(2).quantity == 5

    def test_unknown_product(self):
        with pytest.raises(NotFoundError):
            AdjustQuantityHandler(_setup()).handle(42, 1)

    def test_clamps_at_the_ceiling(self):
        uow = _setup()
        dto = AdjustQuantityHandler(uow).handle(1, MAX_QUANTITY)
        assert dto.quantity == MAX_QUANTITY

    def test_oversized_delta_rejected(self):
        uow = _setup()
        with pytest.raises(ValidationError, match="must not exceed"):
            AdjustQuantityHandler(uow).handle(1, -(MAX_QUANTITY + 1))
        assert uow.products.get_by_id(1).quantity == 10

    def test_non_integer_delta_rejected(self):
        with pytest.raises(ValidationError, match="integer"):
            AdjustQuantityHandler(_setup()).handle(1, 1.5)


class TestCountPendingOrders:

    def test_counts_distinct_pending_orders(self):
        uow = _setup()
        _order(uow, [(1, 1, "1.00"), (1, 2, "1.00")])
        _order(uow, [(1, 1, "1.00")])
        _order(uow, [(1, 1, "1.00")], status=OrderStatus.COMPLETED)
        _order(uow, [(2, 1, "1.00")])

        assert CountPendingOrdersHandler(uow).handle(1) == 2

    def test_disabled_product_counts_zero(self):
        uow = _setup()
        _order(uow, [(1, 1, "1.00")])
        DisableProductHandler(uow).handle(1)
        assert CountPendingOrdersHandler(uow).handle(1) == 0
