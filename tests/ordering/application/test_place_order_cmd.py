"""Application tests for checkout through the PlaceOrder command."""

import pytest
from ordering.cart.items import AddToCart
from ordering.cart.store import RepositoryCartStore
from ordering.catalogue.product import Product
from ordering.checkout.placement import PlaceOrder
from ordering.errors import EmptyCart, PaymentFailed, ProductUnavailable
from ordering.order.order import Order, OrderStatus
from ordering.order.store import RepositoryOrderStore
from protean import current_domain

CUSTOMER = "cust-001"


@pytest.fixture(autouse=True)
def products(register_product):
    register_product("prod-001", name="Mug", price=10.0, stock=5)
    register_product("prod-002", name="Poster", price=5.0, stock=5)
    register_product("prod-003", name="Sold out tee", price=15.0, stock=0)


def _add(product_id, quantity):
    current_domain.process(
        AddToCart(customer_id=CUSTOMER, product_id=product_id, quantity=quantity),
        asynchronous=False,
    )


def _place(payment_method="credit_card"):
    return current_domain.process(
        PlaceOrder(customer_id=CUSTOMER, address_id="addr-001", payment_method=payment_method),
        asynchronous=False,
    )


def _orders_for(customer_id=CUSTOMER):
    return current_domain.repository_for(Order).recent_for_customer(customer_id, offset=0, limit=10).items


class TestPlaceOrder:
    def test_order_is_persisted_and_cart_emptied(self):
        _add("prod-001", 2)
        _add("prod-002", 1)

        result = _place()

        assert result.total_amount == 25.00
        assert result.status == OrderStatus.CREATED.value

        order = current_domain.repository_for(Order).get(result.order_id)
        assert order.total_amount == 25.00
        assert len(order.items) == 2
        assert order.payment_reference is not None
        assert RepositoryCartStore().get(CUSTOMER) == []

    def test_gateway_is_charged_once(self, gateway):
        _add("prod-001", 1)
        _place()
        assert len(gateway.calls) == 1
        assert gateway.calls[0]["amount"] == 10.00

    def test_empty_cart(self, gateway):
        with pytest.raises(EmptyCart):
            _place()
        assert _orders_for() == []
        assert gateway.calls == []

    def test_out_of_stock_product(self):
        _add("prod-001", 1)
        _add("prod-003", 1)

        with pytest.raises(ProductUnavailable):
            _place()

        assert _orders_for() == []
        assert len(RepositoryCartStore().get(CUSTOMER)) == 2

    def test_payment_declined(self, gateway):
        _add("prod-001", 1)
        gateway.configure(should_succeed=False, failure_reason="Card declined")

        with pytest.raises(PaymentFailed):
            _place()

        assert _orders_for() == []
        assert len(RepositoryCartStore().get(CUSTOMER)) == 1

    def test_failed_cart_clear_rolls_back_the_order(self, monkeypatch):
        _add("prod-001", 1)

        def _fail(self, customer_id, reason="customer"):
            raise RuntimeError("cart store unavailable")

        monkeypatch.setattr(RepositoryCartStore, "clear", _fail)

        with pytest.raises(RuntimeError):
            _place()

        assert _orders_for() == []
        assert len(RepositoryCartStore().get(CUSTOMER)) == 1

    def test_price_is_snapshotted(self):
        _add("prod-001", 1)
        result = _place()

        products = current_domain.repository_for(Product)
        product = products.get("prod-001")
        product.price = 99.0
        products.add(product)

        order = RepositoryOrderStore().get(result.order_id)
        assert order.items[0].unit_price == 10.0
        assert order.total_amount == 10.0
