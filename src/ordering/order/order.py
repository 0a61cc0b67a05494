"""Order aggregate (CQRS) — an immutable record of a completed checkout.

An Order is created in one step from a priced cart, together with all of its
OrderItems. Unit prices are snapshotted on the items at that moment, so the
order's value never changes when catalogue prices do. Nothing in this
service modifies an order afterwards; status transitions belong to
back-office tooling.

Invariant: ``total_amount`` equals the sum of ``quantity * unit_price`` over
the items, to the cent.
"""

import json
from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String

from ordering.domain import ordering
from ordering.order.events import OrderPlaced
from ordering.shared.money import as_money, line_total, total_of


class OrderStatus(Enum):
    CREATED = "Created"
    PROCESSING = "Processing"
    SHIPPED = "Shipped"
    DELIVERED = "Delivered"
    CANCELLED = "Cancelled"


@ordering.entity(part_of="Order")
class OrderItem:
    """A purchased product line with the unit price captured at checkout."""

    product_id = Identifier(required=True)
    product_name = String(max_length=255)
    quantity = Integer(required=True, min_value=1)
    unit_price = Float(required=True, min_value=0.0)

    @property
    def line_total(self):
        return line_total(self.quantity, self.unit_price)


@ordering.aggregate
class Order:
    customer_id = Identifier(required=True)
    address_id = Identifier(required=True)
    status = String(
        choices=OrderStatus,
        default=OrderStatus.CREATED.value,
    )
    items = HasMany(OrderItem)
    total_amount = Float(required=True, min_value=0.0)
    currency = String(max_length=3, default="USD")
    payment_method = String(max_length=50)
    payment_reference = String(max_length=255)
    created_at = DateTime()

    @invariant.post
    def total_must_match_items(self):
        if not self.items:
            return
        expected = total_of((item.quantity, item.unit_price) for item in self.items)
        if as_money(self.total_amount) != expected:
            raise ValidationError(
                {"total_amount": [f"Order total {self.total_amount} does not match sum of items {expected}"]}
            )

    # -------------------------------------------------------------------
    # Factory method
    # -------------------------------------------------------------------
    @classmethod
    def create(
        cls,
        customer_id,
        address_id,
        items_data,
        payment_method=None,
        payment_reference=None,
        currency="USD",
    ):
        """Create a new order, with its items, from checkout data.

        Args:
            customer_id: The customer placing the order.
            address_id: Reference to the delivery address.
            items_data: List of dicts with product_id, product_name,
                        quantity, unit_price. Unit prices are the
                        snapshotted checkout prices.
            payment_method: The payment method charged.
            payment_reference: Gateway transaction id of the charge.
            currency: ISO currency code of the amounts.
        """
        if not items_data:
            raise ValidationError({"items": ["An order must have at least one item"]})

        now = datetime.now(UTC)
        items = [
            OrderItem(
                product_id=item["product_id"],
                product_name=item.get("product_name"),
                quantity=item["quantity"],
                unit_price=float(as_money(item["unit_price"])),
            )
            for item in items_data
        ]
        total = total_of((item.quantity, item.unit_price) for item in items)

        order = cls(
            customer_id=customer_id,
            address_id=address_id,
            status=OrderStatus.CREATED.value,
            items=items,
            total_amount=float(total),
            currency=currency,
            payment_method=payment_method,
            payment_reference=payment_reference,
            created_at=now,
        )

        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                customer_id=str(customer_id),
                address_id=str(address_id),
                items=json.dumps(
                    [
                        {
                            "product_id": str(item.product_id),
                            "quantity": item.quantity,
                            "unit_price": item.unit_price,
                        }
                        for item in items
                    ]
                ),
                total_amount=float(total),
                currency=currency,
                payment_method=payment_method,
                placed_at=now,
            )
        )
        return order

    def is_owned_by(self, customer_id):
        return str(self.customer_id) == str(customer_id)
