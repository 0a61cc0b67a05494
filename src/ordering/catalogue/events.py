"""Domain events for the Product aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String

from ordering.domain import ordering


@ordering.event(part_of="Product")
class ProductRegistered:
    """A product was added to the catalogue."""

    __version__ = 1

    product_id = Identifier(required=True)
    name = String(required=True)
    price = Float(required=True)
    stock = Integer(required=True)
    category_id = Identifier()
    registered_at = DateTime(required=True)
