"""Shopping Cart aggregate (CQRS) — the server-side source of truth for a customer's cart.

The cart is a standard CQRS aggregate (not event sourced). There is one cart
per customer; lines are keyed by product and keep the order in which they
were first added. Client-side copies of the cart are only a cache and are
reconciled into this aggregate at login through ``merge`` with an explicit
``MergeStrategy``.

Carts don't store prices: prices are resolved from the catalogue at
checkout.
"""

from datetime import UTC, datetime
from enum import Enum

from protean.fields import DateTime, HasMany, Identifier, Integer

from ordering.cart.events import (
    CartCleared,
    CartItemAdded,
    CartItemRemoved,
    CartQuantityUpdated,
    CartsMerged,
)
from ordering.domain import ordering
from ordering.errors import InvalidQuantity, ItemNotFound


class MergeStrategy(Enum):
    # Lines already on the server keep their quantity; guest-only lines are added.
    SERVER_AUTHORITATIVE = "server_authoritative"
    # Guest quantities overwrite the server's for lines present on both sides.
    LAST_WRITE_WINS = "last_write_wins"


def check_quantity(quantity, field="quantity"):
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
        raise InvalidQuantity(quantity, field=field)


@ordering.entity(part_of="ShoppingCart")
class CartItem:
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)
    added_at = DateTime()


@ordering.aggregate
class ShoppingCart:
    customer_id = Identifier(required=True)
    items = HasMany(CartItem)
    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, customer_id):
        now = datetime.now(UTC)
        return cls(
            customer_id=customer_id,
            created_at=now,
            updated_at=now,
        )

    # -------------------------------------------------------------------
    # Lookups
    # -------------------------------------------------------------------
    @property
    def lines(self):
        """Cart items in the order they were first added."""
        return sorted(self.items, key=lambda item: item.added_at or datetime.min.replace(tzinfo=UTC))

    def line_for(self, product_id):
        return next((i for i in self.items if str(i.product_id) == str(product_id)), None)

    def item_by_id(self, item_id):
        item = next((i for i in self.items if str(i.id) == str(item_id)), None)
        if item is None:
            raise ItemNotFound(item_id, field="cart_item_id")
        return item

    # -------------------------------------------------------------------
    # Item management
    # -------------------------------------------------------------------
    def add_item(self, product_id, quantity):
        """Add a product to the cart, or increase the quantity of its existing line.

        Returns a ``(item, created)`` tuple.
        """
        check_quantity(quantity)

        now = datetime.now(UTC)
        existing = self.line_for(product_id)

        if existing:
            existing.quantity += quantity
            item, created = existing, False
        else:
            item = CartItem(
                product_id=product_id,
                quantity=quantity,
                added_at=now,
            )
            self.add_items(item)
            created = True

        self.updated_at = now

        self.raise_(
            CartItemAdded(
                cart_id=str(self.id),
                item_id=str(item.id),
                product_id=str(product_id),
                quantity=quantity,
                line_quantity=item.quantity,
            )
        )
        return item, created

    def update_item_quantity(self, product_id, new_quantity):
        """Set the quantity of an existing line. The line is left untouched on error."""
        item = self.line_for(product_id)
        if item is None:
            raise ItemNotFound(product_id)
        check_quantity(new_quantity)

        previous_quantity = item.quantity
        item.quantity = new_quantity
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartQuantityUpdated(
                cart_id=str(self.id),
                item_id=str(item.id),
                product_id=str(product_id),
                previous_quantity=previous_quantity,
                new_quantity=new_quantity,
            )
        )
        return item

    def remove_item(self, product_id):
        """Remove a line. Removing a product that isn't in the cart is a no-op.

        Returns True when a line was removed.
        """
        item = self.line_for(product_id)
        if item is None:
            return False

        self.remove_items(item)
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartItemRemoved(
                cart_id=str(self.id),
                item_id=str(item.id),
                product_id=str(product_id),
            )
        )
        return True

    def clear(self, reason="customer"):
        """Remove every line from the cart."""
        items = list(self.items)
        for item in items:
            self.remove_items(item)
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartCleared(
                cart_id=str(self.id),
                items_removed=len(items),
                reason=reason,
            )
        )

    # -------------------------------------------------------------------
    # Login reconciliation
    # -------------------------------------------------------------------
    def merge(self, guest_items, strategy=MergeStrategy.SERVER_AUTHORITATIVE):
        """Reconcile a client-side cart into this cart.

        Args:
            guest_items: List of dicts with product_id and quantity. Duplicate
                products are summed before merging.
            strategy: How conflicting lines are resolved.

        All guest quantities are validated before anything changes.
        """
        strategy = MergeStrategy(strategy)

        incoming = {}
        for guest_item in guest_items:
            check_quantity(guest_item["quantity"])
            product_id = str(guest_item["product_id"])
            incoming[product_id] = incoming.get(product_id, 0) + guest_item["quantity"]

        now = datetime.now(UTC)
        items_merged = 0

        for product_id, quantity in incoming.items():
            existing = self.line_for(product_id)
            if existing is None:
                self.add_items(
                    CartItem(
                        product_id=product_id,
                        quantity=quantity,
                        added_at=now,
                    )
                )
                items_merged += 1
            elif strategy == MergeStrategy.LAST_WRITE_WINS and existing.quantity != quantity:
                existing.quantity = quantity
                items_merged += 1

        self.updated_at = now

        self.raise_(
            CartsMerged(
                cart_id=str(self.id),
                strategy=strategy.value,
                items_merged_count=items_merged,
            )
        )
        return items_merged
