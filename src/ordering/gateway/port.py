"""Payment gateway port (abstract interface).

Checkout charges the customer through this contract. Real payment protocols
are out of scope; ``FakeGateway`` stands in for them in development and
tests.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

SUPPORTED_PAYMENT_METHODS = frozenset(
    {
        "credit_card",
        "debit_card",
        "paypal",
        "cash_on_delivery",
    }
)


@dataclass(frozen=True)
class ChargeResult:
    """Result of a payment charge attempt."""

    success: bool
    transaction_id: str | None = None
    status: str | None = None
    failure_reason: str | None = None


class PaymentGateway(ABC):
    """Abstract payment gateway interface."""

    @abstractmethod
    def charge(
        self,
        amount: float,
        currency: str,
        payment_method: str,
        idempotency_key: str,
    ) -> ChargeResult:
        """Charge the customer. Declines are reported in the result, not raised."""
        ...
