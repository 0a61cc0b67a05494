"""Pydantic request/response schemas for the Ordering API.

These are external contracts (anti-corruption layer) — separate from
internal Protean commands. Fields are snake_case in Python and camelCase on
the wire.
"""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ---------------------------------------------------------------------------
# Cart Request Schemas
# ---------------------------------------------------------------------------
class AddToCartRequest(ApiModel):
    # Quantity bounds are enforced by the cart itself (InvalidQuantity)
    product_id: str
    quantity: int = 1

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={"examples": [{"productId": "prod-001", "quantity": 2}]},
    )


class UpdateCartItemRequest(ApiModel):
    quantity: int


class GuestCartItem(ApiModel):
    product_id: str
    quantity: int


class MergeCartRequest(ApiModel):
    items: list[GuestCartItem]
    strategy: Literal["server_authoritative", "last_write_wins"] = "server_authoritative"

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "examples": [
                {
                    "items": [{"productId": "prod-001", "quantity": 1}],
                    "strategy": "server_authoritative",
                }
            ]
        },
    )


# ---------------------------------------------------------------------------
# Order Request Schemas
# ---------------------------------------------------------------------------
class PlaceOrderRequest(ApiModel):
    address_id: str
    payment_method: str

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={"examples": [{"addressId": "addr-001", "paymentMethod": "credit_card"}]},
    )


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class CartLineResponse(ApiModel):
    cart_item_id: str
    product_id: str
    quantity: int

    @classmethod
    def from_line(cls, line):
        return cls(cart_item_id=line.item_id, product_id=line.product_id, quantity=line.quantity)


class CartResponse(ApiModel):
    items: list[CartLineResponse]
    item_count: int

    @classmethod
    def from_lines(cls, lines):
        return cls(
            items=[CartLineResponse.from_line(line) for line in lines],
            item_count=sum(line.quantity for line in lines),
        )


class PlaceOrderResponse(ApiModel):
    order_id: str
    status: str
    total_amount: float
    currency: str


class OrderItemResponse(ApiModel):
    product_id: str
    product_name: str | None = None
    quantity: int
    unit_price: float
    line_total: float


class OrderResponse(ApiModel):
    order_id: str
    status: str
    address_id: str
    total_amount: float
    currency: str
    payment_method: str | None = None
    created_at: datetime | None = None
    items: list[OrderItemResponse]

    @classmethod
    def from_order(cls, order):
        return cls(
            order_id=str(order.id),
            status=order.status,
            address_id=str(order.address_id),
            total_amount=order.total_amount,
            currency=order.currency,
            payment_method=order.payment_method,
            created_at=order.created_at,
            items=[
                OrderItemResponse(
                    product_id=str(item.product_id),
                    product_name=item.product_name,
                    quantity=item.quantity,
                    unit_price=item.unit_price,
                    line_total=float(item.line_total),
                )
                for item in order.items
            ],
        )


class OrderSummaryResponse(ApiModel):
    order_id: str
    status: str
    total_amount: float
    currency: str
    item_count: int
    created_at: datetime | None = None


class OrderPageResponse(ApiModel):
    items: list[OrderSummaryResponse]
    page: int
    page_size: int
    total: int

    @classmethod
    def from_page(cls, page):
        return cls(
            items=[
                OrderSummaryResponse(
                    order_id=summary.order_id,
                    status=summary.status,
                    total_amount=summary.total_amount,
                    currency=summary.currency,
                    item_count=summary.item_count,
                    created_at=summary.created_at,
                )
                for summary in page.items
            ],
            page=page.page,
            page_size=page.page_size,
            total=page.total,
        )


class ErrorDetail(BaseModel):
    field: str | None = None
    message: str


class ErrorResponse(BaseModel):
    status: int
    errors: list[ErrorDetail]
