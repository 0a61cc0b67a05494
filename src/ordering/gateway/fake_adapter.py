"""Configurable fake payment gateway for development and testing.

Simulates a gateway without any external calls. It can be told to decline
charges, and it remembers every call so tests can assert on what was
charged. Repeating a charge with the same idempotency key returns the
original result instead of charging twice.
"""

from uuid import uuid4

from ordering.gateway.port import ChargeResult, PaymentGateway


class FakeGateway(PaymentGateway):
    """Configurable fake payment gateway."""

    def __init__(self) -> None:
        self.should_succeed: bool = True
        self.failure_reason: str = "Card declined"
        self.calls: list[dict] = []
        self._charges: dict[str, ChargeResult] = {}

    def configure(self, should_succeed: bool, failure_reason: str = "Card declined") -> None:
        """Configure gateway behavior at runtime."""
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    def charge(
        self,
        amount: float,
        currency: str,
        payment_method: str,
        idempotency_key: str,
    ) -> ChargeResult:
        self.calls.append(
            {
                "method": "charge",
                "amount": amount,
                "currency": currency,
                "payment_method": payment_method,
                "idempotency_key": idempotency_key,
            }
        )

        if idempotency_key in self._charges:
            return self._charges[idempotency_key]

        if not self.should_succeed:
            # Declines are not remembered, so a retry after reconfiguring can succeed
            return ChargeResult(
                success=False,
                status="failed",
                failure_reason=self.failure_reason,
            )

        result = ChargeResult(
            success=True,
            transaction_id=f"fake_txn_{uuid4().hex[:12]}",
            status="succeeded",
        )
        self._charges[idempotency_key] = result
        return result
