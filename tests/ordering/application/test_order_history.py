"""Application tests for order retrieval and paginated history."""

import pytest
from ordering.errors import OrderNotFound
from ordering.order.order import Order
from ordering.order.store import RepositoryOrderStore
from protean import current_domain
from protean.exceptions import ValidationError


def _store_order(customer_id="cust-001", unit_price=10.0):
    order = Order.create(
        customer_id=customer_id,
        address_id="addr-001",
        items_data=[{"product_id": "prod-001", "product_name": "Mug", "quantity": 1, "unit_price": unit_price}],
        payment_method="credit_card",
    )
    current_domain.repository_for(Order).add(order)
    return str(order.id)


class TestGetOrder:
    def test_get_own_order(self):
        order_id = _store_order()

        order = RepositoryOrderStore().get(order_id, customer_id="cust-001")

        assert str(order.id) == order_id
        assert len(order.items) == 1

    def test_unknown_order(self):
        with pytest.raises(OrderNotFound):
            RepositoryOrderStore().get("ord-404", customer_id="cust-001")

    def test_other_customers_order_is_not_found(self):
        order_id = _store_order(customer_id="cust-002")

        with pytest.raises(OrderNotFound):
            RepositoryOrderStore().get(order_id, customer_id="cust-001")


class TestListForCustomer:
    def test_most_recent_first(self):
        first = _store_order(unit_price=1.0)
        second = _store_order(unit_price=2.0)
        third = _store_order(unit_price=3.0)

        page = RepositoryOrderStore().list_for_customer("cust-001", page=1, page_size=10)

        assert page.total == 3
        assert [s.order_id for s in page.items] == [third, second, first]

    def test_pagination(self):
        ids = [_store_order(unit_price=float(n)) for n in range(1, 6)]

        page = RepositoryOrderStore().list_for_customer("cust-001", page=2, page_size=2)

        assert page.page == 2
        assert page.page_size == 2
        assert page.total == 5
        assert [s.order_id for s in page.items] == [ids[2], ids[1]]

    def test_page_past_the_end_is_empty(self):
        _store_order()

        page = RepositoryOrderStore().list_for_customer("cust-001", page=3, page_size=10)

        assert page.items == []
        assert page.total == 1

    def test_only_own_orders(self):
        _store_order(customer_id="cust-001")
        _store_order(customer_id="cust-002")

        page = RepositoryOrderStore().list_for_customer("cust-001")

        assert page.total == 1

    def test_summary_fields(self):
        order_id = _store_order(unit_price=12.5)

        summary = RepositoryOrderStore().list_for_customer("cust-001").items[0]

        assert summary.order_id == order_id
        assert summary.total_amount == 12.5
        assert summary.item_count == 1
        assert summary.status == "Created"

    @pytest.mark.parametrize("page,page_size", [(0, 10), (1, 0), (1, 101)])
    def test_invalid_paging(self, page, page_size):
        with pytest.raises(ValidationError):
            RepositoryOrderStore().list_for_customer("cust-001", page=page, page_size=page_size)
