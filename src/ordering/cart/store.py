"""Cart store — the per-customer cart contract used by checkout and the API.

``CartStore`` is the port; ``RepositoryCartStore`` implements it on top of
the ShoppingCart aggregate. Callers pass the customer id explicitly on every
call: there is no ambient "current cart".
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from protean.utils.globals import current_domain

from ordering.cart.cart import MergeStrategy, ShoppingCart


@dataclass(frozen=True)
class CartLine:
    item_id: str
    product_id: str
    quantity: int
    created: bool = False

    @classmethod
    def from_item(cls, item, created=False):
        return cls(
            item_id=str(item.id),
            product_id=str(item.product_id),
            quantity=item.quantity,
            created=created,
        )


class CartStore(ABC):
    """Per-customer cart operations."""

    @abstractmethod
    def get(self, customer_id: str) -> list[CartLine]:
        """Return the customer's cart lines in the order they were added."""
        ...

    @abstractmethod
    def add(self, customer_id: str, product_id: str, quantity: int) -> CartLine:
        """Insert a line or increment an existing one. Raises InvalidQuantity."""
        ...

    @abstractmethod
    def update(self, customer_id: str, product_id: str, quantity: int) -> CartLine:
        """Set a line's quantity. Raises ItemNotFound or InvalidQuantity."""
        ...

    @abstractmethod
    def remove(self, customer_id: str, product_id: str) -> None:
        """Delete a line; no-op when absent."""
        ...

    @abstractmethod
    def clear(self, customer_id: str, reason: str = "customer") -> None:
        """Empty the cart."""
        ...

    @abstractmethod
    def merge(
        self,
        customer_id: str,
        guest_items: list[dict],
        strategy: MergeStrategy = MergeStrategy.SERVER_AUTHORITATIVE,
    ) -> list[CartLine]:
        """Reconcile a client-side cart into the server cart."""
        ...


class RepositoryCartStore(CartStore):
    """Cart store backed by the ShoppingCart repository.

    Writes go through ``repo.add`` and therefore join the surrounding
    unit of work when called from a command handler.
    """

    @property
    def _repo(self):
        return current_domain.repository_for(ShoppingCart)

    def get(self, customer_id):
        cart = self._repo.find_for_customer(customer_id)
        if cart is None:
            return []
        return [CartLine.from_item(item) for item in cart.lines]

    def add(self, customer_id, product_id, quantity):
        repo = self._repo
        cart = repo.for_customer(customer_id)
        item, created = cart.add_item(product_id=product_id, quantity=quantity)
        repo.add(cart)
        return CartLine.from_item(item, created=created)

    def update(self, customer_id, product_id, quantity):
        repo = self._repo
        cart = repo.for_customer(customer_id)
        item = cart.update_item_quantity(product_id=product_id, new_quantity=quantity)
        repo.add(cart)
        return CartLine.from_item(item)

    def remove(self, customer_id, product_id):
        repo = self._repo
        cart = repo.find_for_customer(customer_id)
        if cart is not None and cart.remove_item(product_id=product_id):
            repo.add(cart)

    def clear(self, customer_id, reason="customer"):
        repo = self._repo
        cart = repo.find_for_customer(customer_id)
        if cart is not None:
            cart.clear(reason=reason)
            repo.add(cart)

    def merge(self, customer_id, guest_items, strategy=MergeStrategy.SERVER_AUTHORITATIVE):
        repo = self._repo
        cart = repo.for_customer(customer_id)
        cart.merge(guest_items=guest_items, strategy=strategy)
        repo.add(cart)
        return [CartLine.from_item(item) for item in cart.lines]
