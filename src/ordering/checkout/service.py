"""Order placement — converts a customer's cart into an order.

``OrderPlacementService`` only talks to ports (cart store, product catalogue,
order store, payment gateway), so it can be exercised with in-memory fakes.
The ``PlaceOrder`` command handler wires it to the repository-backed
adapters and runs it inside a unit of work.

Flow:
    1. Read the cart → EmptyCart when there is nothing to buy
    2. Quote every line → ProductNotFound / ProductUnavailable
    3. Total = Σ quantity × current unit price
    4. Charge the gateway → PaymentFailed, nothing persisted
    5. Persist Order + OrderItems (unit prices snapshotted here)
    6. Clear the cart, only after step 5
    7. Return order id, status and total
"""

import hashlib
from dataclasses import dataclass

import structlog
from protean.exceptions import ValidationError

from ordering import settings
from ordering.cart.store import CartStore
from ordering.catalogue.reader import ProductCatalog
from ordering.errors import EmptyCart, PaymentFailed, ProductUnavailable
from ordering.gateway.port import SUPPORTED_PAYMENT_METHODS, PaymentGateway
from ordering.order.order import Order, OrderStatus
from ordering.order.store import OrderStore
from ordering.shared.money import as_money, total_of

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class PricedLine:
    product_id: str
    product_name: str
    quantity: int
    unit_price: float


@dataclass(frozen=True)
class PlacementResult:
    order_id: str
    status: str
    total_amount: float
    currency: str


def checkout_idempotency_key(customer_id, lines, amount, currency) -> str:
    """Stable key for one checkout attempt of one cart at one price.

    Cart item ids are regenerated once a cart is cleared, so a new cart with
    the same products gets a new key while retries of the same cart reuse it.
    The amount and currency are part of the key, so a retry after a price
    change is a new charge.
    """
    digest = hashlib.sha256()
    digest.update(f"{customer_id}|{as_money(amount)}|{currency}".encode())
    for line in sorted(lines, key=lambda line: line.item_id):
        digest.update(f"|{line.item_id}:{line.product_id}:{line.quantity}".encode())
    return f"checkout-{digest.hexdigest()[:32]}"


class OrderPlacementService:
    def __init__(
        self,
        carts: CartStore,
        catalog: ProductCatalog,
        orders: OrderStore,
        gateway: PaymentGateway,
        currency: str | None = None,
    ) -> None:
        self.carts = carts
        self.catalog = catalog
        self.orders = orders
        self.gateway = gateway
        self.currency = currency or settings.currency()

    def place_order(self, customer_id, address_id, payment_method) -> PlacementResult:
        if payment_method not in SUPPORTED_PAYMENT_METHODS:
            raise ValidationError({"payment_method": [f"Unsupported payment method: {payment_method}"]})

        log = logger.bind(customer_id=str(customer_id))

        lines = self.carts.get(customer_id)
        if not lines:
            raise EmptyCart(customer_id)

        priced = self._price_lines(lines, log)
        total = total_of((line.quantity, line.unit_price) for line in priced)

        charge = self.gateway.charge(
            amount=float(total),
            currency=self.currency,
            payment_method=payment_method,
            idempotency_key=checkout_idempotency_key(customer_id, lines, total, self.currency),
        )
        if not charge.success:
            log.warning("Payment declined at checkout", reason=charge.failure_reason, total=float(total))
            raise PaymentFailed(charge.failure_reason or "Payment declined")

        order = Order.create(
            customer_id=customer_id,
            address_id=address_id,
            items_data=[
                {
                    "product_id": line.product_id,
                    "product_name": line.product_name,
                    "quantity": line.quantity,
                    "unit_price": line.unit_price,
                }
                for line in priced
            ],
            payment_method=payment_method,
            payment_reference=charge.transaction_id,
            currency=self.currency,
        )
        order_id = self.orders.create(order)

        self.carts.clear(customer_id, reason="checkout")

        log.info("Order placed", order_id=order_id, total=float(total), item_count=len(priced))
        return PlacementResult(
            order_id=order_id,
            status=OrderStatus.CREATED.value,
            total_amount=float(total),
            currency=self.currency,
        )

    def _price_lines(self, lines, log) -> list[PricedLine]:
        priced = []
        for line in lines:
            quote = self.catalog.get_price(line.product_id)
            if quote.available_stock < line.quantity:
                log.info(
                    "Product unavailable at checkout",
                    product_id=line.product_id,
                    requested=line.quantity,
                    available=quote.available_stock,
                )
                raise ProductUnavailable(line.product_id, line.quantity, quote.available_stock)

            priced.append(
                PricedLine(
                    product_id=line.product_id,
                    product_name=quote.name,
                    quantity=line.quantity,
                    unit_price=quote.unit_price,
                )
            )
        return priced
