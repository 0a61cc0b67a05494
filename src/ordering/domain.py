"""Ordering bounded context — Shopping Cart, Catalogue lookup and Checkout.

Handles the per-customer shopping cart (CQRS), read-only product price and
availability lookups, and the checkout flow that converts a cart into an
order with snapshotted prices.
"""

import structlog
from protean.domain import Domain

from ordering.utils.logging import configure_logging

configure_logging()

ordering = Domain(name="ordering")

logger = structlog.get_logger(__name__)
