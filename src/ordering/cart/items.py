"""Cart item management — commands and handler."""

from protean import handle
from protean.fields import Identifier, Integer
from protean.utils.globals import current_domain

from ordering.cart.cart import ShoppingCart, check_quantity
from ordering.cart.store import RepositoryCartStore
from ordering.catalogue.reader import RepositoryProductCatalog
from ordering.domain import ordering


@ordering.command(part_of="ShoppingCart")
class AddToCart:
    customer_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True)


@ordering.command(part_of="ShoppingCart")
class UpdateCartQuantity:
    customer_id = Identifier(required=True)
    item_id = Identifier(required=True)
    new_quantity = Integer(required=True)


@ordering.command(part_of="ShoppingCart")
class RemoveFromCart:
    customer_id = Identifier(required=True)
    item_id = Identifier(required=True)


@ordering.command(part_of="ShoppingCart")
class ClearCart:
    customer_id = Identifier(required=True)


@ordering.command_handler(part_of=ShoppingCart)
class ManageCartItemsHandler:
    @handle(AddToCart)
    def add_to_cart(self, command):
        check_quantity(command.quantity)
        # Unknown products are rejected up front rather than at checkout
        RepositoryProductCatalog().get_price(command.product_id)

        return RepositoryCartStore().add(
            customer_id=command.customer_id,
            product_id=command.product_id,
            quantity=command.quantity,
        )

    @handle(UpdateCartQuantity)
    def update_cart_quantity(self, command):
        cart = current_domain.repository_for(ShoppingCart).for_customer(command.customer_id)
        item = cart.item_by_id(command.item_id)

        return RepositoryCartStore().update(
            customer_id=command.customer_id,
            product_id=str(item.product_id),
            quantity=command.new_quantity,
        )

    @handle(RemoveFromCart)
    def remove_from_cart(self, command):
        cart = current_domain.repository_for(ShoppingCart).find_for_customer(command.customer_id)
        if cart is None:
            return

        item = next((i for i in cart.items if str(i.id) == str(command.item_id)), None)
        if item is not None:
            RepositoryCartStore().remove(
                customer_id=command.customer_id,
                product_id=str(item.product_id),
            )

    @handle(ClearCart)
    def clear_cart(self, command):
        RepositoryCartStore().clear(customer_id=command.customer_id)
