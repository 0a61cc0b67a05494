"""In-memory port implementations for exercising the placement service."""

import pytest
from ordering.cart.cart import MergeStrategy, ShoppingCart
from ordering.cart.store import CartLine, CartStore
from ordering.catalogue.reader import PriceQuote, ProductCatalog
from ordering.errors import OrderNotFound, ProductNotFound
from ordering.order.store import OrderPage, OrderStore, OrderSummary


class InMemoryCartStore(CartStore):
    def __init__(self):
        self.carts = {}
        self.fail_on_clear = False

    def _cart(self, customer_id):
        if customer_id not in self.carts:
            self.carts[customer_id] = ShoppingCart.create(customer_id=customer_id)
        return self.carts[customer_id]

    def get(self, customer_id):
        return [CartLine.from_item(item) for item in self._cart(customer_id).lines]

    def add(self, customer_id, product_id, quantity):
        item, created = self._cart(customer_id).add_item(product_id=product_id, quantity=quantity)
        return CartLine.from_item(item, created=created)

    def update(self, customer_id, product_id, quantity):
        item = self._cart(customer_id).update_item_quantity(product_id=product_id, new_quantity=quantity)
        return CartLine.from_item(item)

    def remove(self, customer_id, product_id):
        self._cart(customer_id).remove_item(product_id=product_id)

    def clear(self, customer_id, reason="customer"):
        if self.fail_on_clear:
            raise RuntimeError("cart store unavailable")
        self._cart(customer_id).clear(reason=reason)

    def merge(self, customer_id, guest_items, strategy=MergeStrategy.SERVER_AUTHORITATIVE):
        cart = self._cart(customer_id)
        cart.merge(guest_items=guest_items, strategy=strategy)
        return [CartLine.from_item(item) for item in cart.lines]


class InMemoryCatalog(ProductCatalog):
    def __init__(self):
        self.products = {}

    def stock(self, product_id, name, unit_price, available_stock):
        self.products[product_id] = PriceQuote(
            product_id=product_id,
            name=name,
            unit_price=unit_price,
            available_stock=available_stock,
        )

    def get_price(self, product_id):
        if product_id not in self.products:
            raise ProductNotFound(product_id)
        return self.products[product_id]


class InMemoryOrderStore(OrderStore):
    def __init__(self):
        self.orders = {}

    def create(self, order):
        self.orders[str(order.id)] = order
        return str(order.id)

    def get(self, order_id, customer_id=None):
        order = self.orders.get(str(order_id))
        if order is None or (customer_id is not None and not order.is_owned_by(customer_id)):
            raise OrderNotFound(order_id)
        return order

    def list_for_customer(self, customer_id, page=1, page_size=10):
        owned = [o for o in self.orders.values() if o.is_owned_by(customer_id)]
        owned.sort(key=lambda o: o.created_at, reverse=True)
        start = (page - 1) * page_size
        return OrderPage(
            page=page,
            page_size=page_size,
            total=len(owned),
            items=[OrderSummary.from_order(o) for o in owned[start : start + page_size]],
        )


@pytest.fixture()
def carts():
    return InMemoryCartStore()


@pytest.fixture()
def catalog():
    catalog = InMemoryCatalog()
    catalog.stock("prod-001", "Mug", 10.00, 5)
    catalog.stock("prod-002", "Poster", 5.00, 5)
    catalog.stock("prod-003", "Sold out tee", 15.00, 0)
    return catalog


@pytest.fixture()
def orders():
    return InMemoryOrderStore()
