"""FastAPI routes for the Ordering domain — cart and orders.

Every route acts on the customer identified by the bearer token; the
customer id is passed explicitly into each command rather than held in any
shared state.
"""

import json

from fastapi import APIRouter, Depends, Query, Response
from protean.utils.globals import current_domain

from ordering import settings
from ordering.api.auth import current_customer
from ordering.api.schemas import (
    AddToCartRequest,
    CartLineResponse,
    CartResponse,
    MergeCartRequest,
    OrderPageResponse,
    OrderResponse,
    PlaceOrderRequest,
    PlaceOrderResponse,
    UpdateCartItemRequest,
)
from ordering.cart.items import AddToCart, ClearCart, RemoveFromCart, UpdateCartQuantity
from ordering.cart.merge import MergeGuestCart
from ordering.cart.store import RepositoryCartStore
from ordering.checkout.placement import PlaceOrder
from ordering.order.store import RepositoryOrderStore

# ---------------------------------------------------------------------------
# Cart Router
# ---------------------------------------------------------------------------
cart_router = APIRouter(prefix="/api/cart", tags=["cart"])


@cart_router.get("", response_model=CartResponse)
async def get_cart(customer_id: str = Depends(current_customer)) -> CartResponse:
    return CartResponse.from_lines(RepositoryCartStore().get(customer_id))


@cart_router.post("", status_code=201, response_model=CartLineResponse)
async def add_cart_item(
    body: AddToCartRequest,
    response: Response,
    customer_id: str = Depends(current_customer),
) -> CartLineResponse:
    """Add a product to the cart.

    Returns 201 when a new line was created and 200 when an existing line
    was incremented.
    """
    command = AddToCart(
        customer_id=customer_id,
        product_id=body.product_id,
        quantity=body.quantity,
    )
    line = current_domain.process(command, asynchronous=False)
    response.status_code = 201 if line.created else 200
    return CartLineResponse.from_line(line)


@cart_router.post("/merge", response_model=CartResponse)
async def merge_cart(body: MergeCartRequest, customer_id: str = Depends(current_customer)) -> CartResponse:
    """Reconcile the client's cached cart into the server cart after login."""
    command = MergeGuestCart(
        customer_id=customer_id,
        guest_cart_items=json.dumps([{"product_id": i.product_id, "quantity": i.quantity} for i in body.items]),
        strategy=body.strategy,
    )
    lines = current_domain.process(command, asynchronous=False)
    return CartResponse.from_lines(lines)


@cart_router.put("/{cart_item_id}", status_code=204, response_class=Response)
async def update_cart_item(
    cart_item_id: str,
    body: UpdateCartItemRequest,
    customer_id: str = Depends(current_customer),
) -> Response:
    command = UpdateCartQuantity(
        customer_id=customer_id,
        item_id=cart_item_id,
        new_quantity=body.quantity,
    )
    current_domain.process(command, asynchronous=False)
    return Response(status_code=204)


@cart_router.delete("/{cart_item_id}", status_code=204, response_class=Response)
async def remove_cart_item(cart_item_id: str, customer_id: str = Depends(current_customer)) -> Response:
    command = RemoveFromCart(customer_id=customer_id, item_id=cart_item_id)
    current_domain.process(command, asynchronous=False)
    return Response(status_code=204)


@cart_router.delete("", status_code=204, response_class=Response)
async def clear_cart(customer_id: str = Depends(current_customer)) -> Response:
    current_domain.process(ClearCart(customer_id=customer_id), asynchronous=False)
    return Response(status_code=204)


# ---------------------------------------------------------------------------
# Order Router
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/api/orders", tags=["orders"])


@order_router.post("", status_code=201, response_model=PlaceOrderResponse)
async def place_order(body: PlaceOrderRequest, customer_id: str = Depends(current_customer)) -> PlaceOrderResponse:
    """Check out the caller's cart."""
    command = PlaceOrder(
        customer_id=customer_id,
        address_id=body.address_id,
        payment_method=body.payment_method,
    )
    result = current_domain.process(command, asynchronous=False)
    return PlaceOrderResponse(
        order_id=result.order_id,
        status=result.status,
        total_amount=result.total_amount,
        currency=result.currency,
    )


@order_router.get("", response_model=OrderPageResponse)
async def list_orders(
    page: int = Query(1),
    page_size: int | None = Query(None, alias="pageSize"),
    customer_id: str = Depends(current_customer),
) -> OrderPageResponse:
    """The caller's order history, most recent first."""
    order_page = RepositoryOrderStore().list_for_customer(
        customer_id,
        page=page,
        page_size=page_size if page_size is not None else settings.default_page_size(),
    )
    return OrderPageResponse.from_page(order_page)


@order_router.get("/{order_id}", response_model=OrderResponse)
async def get_order(order_id: str, customer_id: str = Depends(current_customer)) -> OrderResponse:
    order = RepositoryOrderStore().get(order_id, customer_id=customer_id)
    return OrderResponse.from_order(order)
