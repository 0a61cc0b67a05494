"""Login reconciliation — merge a client-side cart into the server cart."""

import json

from protean import handle
from protean.fields import Identifier, String, Text

from ordering.cart.cart import MergeStrategy, ShoppingCart, check_quantity
from ordering.cart.store import RepositoryCartStore
from ordering.catalogue.reader import RepositoryProductCatalog
from ordering.domain import ordering


@ordering.command(part_of="ShoppingCart")
class MergeGuestCart:
    """Merge items cached by the client before login into the customer's cart."""

    customer_id = Identifier(required=True)
    guest_cart_items = Text(required=True)  # JSON: list of {product_id, quantity}
    strategy = String(
        choices=MergeStrategy,
        default=MergeStrategy.SERVER_AUTHORITATIVE.value,
    )


@ordering.command_handler(part_of=ShoppingCart)
class MergeGuestCartHandler:
    @handle(MergeGuestCart)
    def merge_guest_cart(self, command):
        guest_items = (
            json.loads(command.guest_cart_items)
            if isinstance(command.guest_cart_items, str)
            else command.guest_cart_items
        )

        # Same checks as AddToCart, for every guest line, before the cart changes
        for guest_item in guest_items:
            check_quantity(guest_item["quantity"])
        catalog = RepositoryProductCatalog()
        for product_id in dict.fromkeys(str(guest_item["product_id"]) for guest_item in guest_items):
            catalog.get_price(product_id)

        return RepositoryCartStore().merge(
            customer_id=command.customer_id,
            guest_items=guest_items,
            strategy=MergeStrategy(command.strategy or MergeStrategy.SERVER_AUTHORITATIVE.value),
        )
