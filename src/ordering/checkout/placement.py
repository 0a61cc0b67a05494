"""Checkout — PlaceOrder command and handler.

The handler runs inside the unit of work Protean opens for every command
handler: the new Order (with its items) and the cleared cart are committed
together, or neither is.
"""

from protean import handle
from protean.fields import Identifier, String

from ordering.cart.store import RepositoryCartStore
from ordering.catalogue.reader import RepositoryProductCatalog
from ordering.checkout.service import OrderPlacementService
from ordering.domain import ordering
from ordering.gateway import get_gateway
from ordering.order.order import Order
from ordering.order.store import RepositoryOrderStore


@ordering.command(part_of="Order")
class PlaceOrder:
    customer_id = Identifier(required=True)
    address_id = Identifier(required=True)
    payment_method = String(required=True, max_length=50)


def build_placement_service() -> OrderPlacementService:
    return OrderPlacementService(
        carts=RepositoryCartStore(),
        catalog=RepositoryProductCatalog(),
        orders=RepositoryOrderStore(),
        gateway=get_gateway(),
    )


@ordering.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        return build_placement_service().place_order(
            customer_id=command.customer_id,
            address_id=command.address_id,
            payment_method=command.payment_method,
        )
