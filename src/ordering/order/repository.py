"""Repository for the Order aggregate."""

from ordering.domain import ordering
from ordering.order.order import Order


@ordering.repository(part_of=Order)
class OrderRepository:
    """Adds customer order-history queries to the standard CRUD operations."""

    def recent_for_customer(self, customer_id, offset=0, limit=10):
        """Return a ResultSet of the customer's orders, most recent first."""
        return (
            self._dao.query.filter(customer_id=str(customer_id))
            .order_by("-created_at")
            .offset(offset)
            .limit(limit)
            .all()
        )
