"""Product registration — command and handler.

Used by the ``seed-catalogue`` management command and by tests to populate
the catalogue. Catalogue administration beyond registration is not part of
this service.
"""

from protean import handle
from protean.fields import Float, Identifier, Integer, String
from protean.utils.globals import current_domain

from ordering.catalogue.product import Product
from ordering.domain import ordering


@ordering.command(part_of="Product")
class RegisterProduct:
    product_id = Identifier()
    name = String(required=True, max_length=255)
    price = Float(required=True, min_value=0.0)
    stock = Integer(required=True, min_value=0)
    category_id = Identifier()


@ordering.command_handler(part_of=Product)
class RegisterProductHandler:
    @handle(RegisterProduct)
    def register_product(self, command):
        product = Product.register(
            name=command.name,
            price=command.price,
            stock=command.stock,
            category_id=command.category_id,
            product_id=command.product_id,
        )
        current_domain.repository_for(Product).add(product)
        return str(product.id)
