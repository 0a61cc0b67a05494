"""Product aggregate — the catalogue entry checkout prices against.

Products are registered by admin tooling (see ``registration.py``) and are
read-only to the cart and checkout flows. Price is the current unit price;
orders snapshot it at purchase time, so later changes never affect placed
orders.
"""

from datetime import UTC, datetime

from protean.fields import DateTime, Float, Identifier, Integer, String

from ordering.catalogue.events import ProductRegistered
from ordering.domain import ordering


@ordering.aggregate
class Product:
    name = String(required=True, max_length=255)
    price = Float(required=True, min_value=0.0)
    stock = Integer(required=True, min_value=0)
    category_id = Identifier()
    created_at = DateTime()

    @classmethod
    def register(cls, name, price, stock, category_id=None, product_id=None):
        now = datetime.now(UTC)
        attrs = {
            "name": name,
            "price": round(float(price), 2),
            "stock": stock,
            "category_id": category_id,
            "created_at": now,
        }
        if product_id:
            attrs["id"] = product_id

        product = cls(**attrs)
        product.raise_(
            ProductRegistered(
                product_id=str(product.id),
                name=product.name,
                price=product.price,
                stock=product.stock,
                category_id=str(category_id) if category_id else None,
                registered_at=now,
            )
        )
        return product
