"""Domain events for the ShoppingCart aggregate."""

from protean.fields import Identifier, Integer, String

from ordering.domain import ordering


@ordering.event(part_of="ShoppingCart")
class CartItemAdded:
    """A product was added to the shopping cart, or its line was incremented."""

    __version__ = 1

    cart_id = Identifier(required=True)
    item_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True)
    line_quantity = Integer(required=True)


@ordering.event(part_of="ShoppingCart")
class CartQuantityUpdated:
    """The quantity of a cart line was set to a new value."""

    __version__ = 1

    cart_id = Identifier(required=True)
    item_id = Identifier(required=True)
    product_id = Identifier(required=True)
    previous_quantity = Integer(required=True)
    new_quantity = Integer(required=True)


@ordering.event(part_of="ShoppingCart")
class CartItemRemoved:
    """A line was removed from the shopping cart."""

    __version__ = 1

    cart_id = Identifier(required=True)
    item_id = Identifier(required=True)
    product_id = Identifier(required=True)


@ordering.event(part_of="ShoppingCart")
class CartCleared:
    """All lines were removed, either by the customer or after checkout."""

    __version__ = 1

    cart_id = Identifier(required=True)
    items_removed = Integer(required=True)
    reason = String(max_length=50)


@ordering.event(part_of="ShoppingCart")
class CartsMerged:
    """A client-side cart was reconciled into the server cart at login."""

    __version__ = 1

    cart_id = Identifier(required=True)
    strategy = String(required=True)
    items_merged_count = Integer(required=True)
