"""Tests for Order creation and its total invariant."""

import json

import pytest
from ordering.order.events import OrderPlaced
from ordering.order.order import Order, OrderItem, OrderStatus
from protean.exceptions import ValidationError


def _items(*lines):
    return [
        {
            "product_id": product_id,
            "product_name": f"Product {product_id}",
            "quantity": quantity,
            "unit_price": unit_price,
        }
        for product_id, quantity, unit_price in lines
    ]


def _make_order(**overrides):
    defaults = {
        "customer_id": "cust-001",
        "address_id": "addr-001",
        "items_data": _items(("prod-001", 2, 10.00), ("prod-002", 1, 5.00)),
        "payment_method": "credit_card",
        "payment_reference": "txn-001",
    }
    defaults.update(overrides)
    return Order.create(**defaults)


class TestOrderCreation:
    def test_total_is_sum_of_lines(self):
        order = _make_order()
        assert order.total_amount == 25.00

    def test_status_is_created(self):
        order = _make_order()
        assert order.status == OrderStatus.CREATED.value

    def test_items_snapshot_unit_prices(self):
        order = _make_order()

        assert len(order.items) == 2
        prices = {str(item.product_id): item.unit_price for item in order.items}
        assert prices == {"prod-001": 10.00, "prod-002": 5.00}

    def test_payment_details_are_recorded(self):
        order = _make_order()
        assert order.payment_method == "credit_card"
        assert order.payment_reference == "txn-001"
        assert order.currency == "USD"

    def test_total_has_no_float_drift(self):
        order = _make_order(items_data=_items(("prod-001", 3, 0.10), ("prod-002", 1, 0.20)))
        assert order.total_amount == 0.50

    def test_empty_items_rejected(self):
        with pytest.raises(ValidationError) as exc:
            _make_order(items_data=[])
        assert "items" in exc.value.messages

    def test_raises_order_placed(self):
        order = _make_order()

        event = order._events[-1]
        assert isinstance(event, OrderPlaced)
        assert event.order_id == str(order.id)
        assert event.total_amount == 25.00
        assert len(json.loads(event.items)) == 2

    def test_ownership(self):
        order = _make_order()
        assert order.is_owned_by("cust-001")
        assert not order.is_owned_by("cust-002")


class TestTotalInvariant:
    def test_mismatched_total_is_rejected(self):
        with pytest.raises(ValidationError) as exc:
            Order(
                customer_id="cust-001",
                address_id="addr-001",
                items=[OrderItem(product_id="prod-001", quantity=2, unit_price=10.00)],
                total_amount=19.99,
            )
        assert "total_amount" in exc.value.messages


class TestOrderItem:
    def test_line_total(self):
        item = OrderItem(product_id="prod-001", quantity=3, unit_price=1.10)
        assert str(item.line_total) == "3.30"

    def test_quantity_must_be_positive(self):
        with pytest.raises(ValidationError):
            OrderItem(product_id="prod-001", quantity=0, unit_price=1.00)
