"""Order store — the narrow persistence port used by checkout and order history.

``OrderStore`` is what the order placement service and the API depend on.
``RepositoryOrderStore`` implements it with the Protean repository; tests
of the placement service swap in an in-memory fake.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime

from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain

from ordering import settings
from ordering.errors import OrderNotFound
from ordering.order.order import Order


@dataclass(frozen=True)
class OrderSummary:
    order_id: str
    status: str
    total_amount: float
    currency: str
    item_count: int
    created_at: datetime

    @classmethod
    def from_order(cls, order):
        return cls(
            order_id=str(order.id),
            status=order.status,
            total_amount=order.total_amount,
            currency=order.currency,
            item_count=len(order.items),
            created_at=order.created_at,
        )


@dataclass(frozen=True)
class OrderPage:
    page: int
    page_size: int
    total: int
    items: list[OrderSummary] = field(default_factory=list)


def validate_page(page, page_size):
    max_page_size = settings.max_page_size()
    errors = {}
    if page < 1:
        errors["page"] = ["Page must be 1 or greater"]
    if page_size < 1 or page_size > max_page_size:
        errors["page_size"] = [f"Page size must be between 1 and {max_page_size}"]
    if errors:
        raise ValidationError(errors)


class OrderStore(ABC):
    """Persistence port for orders."""

    @abstractmethod
    def create(self, order: Order) -> str:
        """Persist an order together with its items and return its identifier."""
        ...

    @abstractmethod
    def get(self, order_id: str, customer_id: str | None = None) -> Order:
        """Return the order with its items.

        When ``customer_id`` is given, an order owned by someone else is
        reported exactly like a missing one. Raises OrderNotFound.
        """
        ...

    @abstractmethod
    def list_for_customer(self, customer_id: str, page: int = 1, page_size: int = 10) -> OrderPage:
        """Return one page of the customer's order summaries, most recent first."""
        ...


class RepositoryOrderStore(OrderStore):
    """Order store backed by the Order repository."""

    @property
    def _repo(self):
        return current_domain.repository_for(Order)

    def create(self, order):
        self._repo.add(order)
        return str(order.id)

    def get(self, order_id, customer_id=None):
        try:
            order = self._repo.get(str(order_id))
        except ObjectNotFoundError:
            raise OrderNotFound(order_id) from None

        if customer_id is not None and not order.is_owned_by(customer_id):
            raise OrderNotFound(order_id)
        return order

    def list_for_customer(self, customer_id, page=1, page_size=10):
        validate_page(page, page_size)

        results = self._repo.recent_for_customer(
            customer_id,
            offset=(page - 1) * page_size,
            limit=page_size,
        )
        return OrderPage(
            page=page,
            page_size=page_size,
            total=results.total,
            items=[OrderSummary.from_order(order) for order in results.items],
        )
