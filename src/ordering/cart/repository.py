"""Repository for the ShoppingCart aggregate."""

from ordering.cart.cart import ShoppingCart
from ordering.domain import ordering


@ordering.repository(part_of=ShoppingCart)
class CartRepository:
    """Adds customer-keyed lookups to the standard CRUD operations."""

    def find_for_customer(self, customer_id) -> ShoppingCart | None:
        """Return the customer's cart, or None if they never had one."""
        carts = self._dao.query.filter(customer_id=str(customer_id)).all().items
        return carts[0] if carts else None

    def for_customer(self, customer_id) -> ShoppingCart:
        """Return the customer's cart, creating an empty one on first use."""
        cart = self.find_for_customer(customer_id)
        if cart is None:
            cart = ShoppingCart.create(customer_id=str(customer_id))
        return cart
