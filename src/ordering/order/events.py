"""Domain events for the Order aggregate."""

from protean.fields import DateTime, Float, Identifier, String, Text

from ordering.domain import ordering


@ordering.event(part_of="Order")
class OrderPlaced:
    """A cart was converted into an order at checkout."""

    __version__ = 1

    order_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    address_id = Identifier(required=True)
    items = Text(required=True)  # JSON: list of {product_id, quantity, unit_price}
    total_amount = Float(required=True)
    currency = String(default="USD")
    payment_method = String()
    placed_at = DateTime(required=True)
