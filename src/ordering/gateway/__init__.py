"""Payment gateway used by checkout.

``PAYMENT_GATEWAY`` names the adapter built on first use; ``fake`` is the
only one shipped. Tests install their own instance with ``set_gateway``.
"""

from ordering import settings
from ordering.gateway.fake_adapter import FakeGateway
from ordering.gateway.port import SUPPORTED_PAYMENT_METHODS, ChargeResult, PaymentGateway

_ADAPTERS = {
    "fake": FakeGateway,
}

_active: PaymentGateway | None = None


def build_gateway(name: str | None = None) -> PaymentGateway:
    name = (name or settings.payment_gateway()).lower()
    try:
        adapter = _ADAPTERS[name]
    except KeyError:
        raise ValueError(f"Unknown payment gateway {name!r}; expected one of {sorted(_ADAPTERS)}") from None
    return adapter()


def get_gateway() -> PaymentGateway:
    """Return the active gateway, building the configured one on first use."""
    global _active
    if _active is None:
        _active = build_gateway()
    return _active


def set_gateway(gateway: PaymentGateway) -> None:
    global _active
    _active = gateway


def reset_gateway() -> None:
    """Forget the active gateway; the next checkout builds a fresh one."""
    global _active
    _active = None


__all__ = [
    "SUPPORTED_PAYMENT_METHODS",
    "ChargeResult",
    "PaymentGateway",
    "build_gateway",
    "get_gateway",
    "reset_gateway",
    "set_gateway",
]
