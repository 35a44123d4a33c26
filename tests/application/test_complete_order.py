"""Integration tests for the Complete Order use case.

Completing returns every item's quantity to stock exactly once, and
nothing moves when any step fails.
"""

from datetime import date

import pytest

from ims.application.complete_order import CompleteOrderHandler
from ims.domain.exceptions import InvalidStateError, NotFoundError, ValidationError
from ims.domain.model.order import Order, OrderItem, OrderStatus
from ims.domain.model.product import Product
from ims.domain.model.value_objects import Money, Quantity
from tests.fakes import FakeUnitOfWork


def _setup(*lines) -> tuple[FakeUnitOfWork, int]:
    uow = FakeUnitOfWork([
        Product.create(name="Chopp Pilsen", price=Money.parse("9.90"), quantity=10),
        Product.create(name="Chopp IPA", price=Money.parse("14.50"), quantity=0),
    ])
    items = [
        OrderItem(id=None, product_id=pid, quantity=Quantity(qty), price=Money.parse("1.00"))
        for pid, qty in lines
    ]
    order = Order.create(date(2024, 3, 5), items)
    uow.orders.add(order)
    return uow, order.id


class TestCompleteOrder:

    def test_restocks_each_item(self):
        uow, order_id = _setup((1, 3), (2, 2))

        CompleteOrderHandler(uow).handle(order_id)

        assert uow.products.get_by_id(1).quantity == 13
        assert uow.products.get_by_id(2).quantity == 2
        assert uow.orders.get_by_id(order_id).status is OrderStatus.COMPLETED
        assert uow.commits == 1

    def test_repeated_product_lines_are_summed(self):
        uow, order_id = _setup((1, 3), (1, 4))
        CompleteOrderHandler(uow).handle(order_id)
        assert uow.products.get_by_id(1).quantity == 17

    def test_second_completion_rejected_without_restock(self):
        uow, order_id = _setup((1, 3))
        handler = CompleteOrderHandler(uow)
        handler.handle(order_id)

        with pytest.raises(InvalidStateError, match="already completed"):
            handler.handle(order_id)

        assert uow.products.get_by_id(1).quantity == 13
        assert uow.commits == 1

    def test_cancelled_order_cannot_complete(self):
        uow, order_id = _setup((1, 3))
        order = uow.orders.get_by_id(order_id)
        order.change_status(OrderStatus.CANCELLED)
        uow.orders.save(order)

        with pytest.raises(InvalidStateError):
            CompleteOrderHandler(uow).handle(order_id)
        assert uow.products.get_by_id(1).quantity == 10

    def test_empty_order_rejected(self):
        uow, order_id = _setup()
        with pytest.raises(ValidationError, match="no items"):
            CompleteOrderHandler(uow).handle(order_id)

    def test_missing_product_rolls_back_everything(self):
        uow, order_id = _setup((1, 3), (99, 1))

        with pytest.raises(NotFoundError, match="Product #99"):
            CompleteOrderHandler(uow).handle(order_id)

        assert uow.products.get_by_id(1).quantity == 10
        assert uow.orders.get_by_id(order_id).status is OrderStatus.PENDING
        assert uow.commits == 0

    def test_unknown_order(self):
        uow, _ = _setup()
        with pytest.raises(NotFoundError, match="Order #42"):
            CompleteOrderHandler(uow).handle(42)
