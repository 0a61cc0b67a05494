"""Checkout error taxonomy.

Every error carries a ``messages`` dict keyed by the offending field, the
same shape Protean uses for its own ``ValidationError``. The API layer
flattens that dict into the ``{status, errors: [{field, message}]}``
envelope, so the class hierarchy decides the HTTP status:

- validation class (``ValidationError``) → 400
- not-found class (``ObjectNotFoundError``) → 404
- ``ProductUnavailable`` → 409
- ``PaymentFailed`` → 402
- ``Unauthorized`` → 401
"""

from protean.exceptions import (
    InvalidOperationError,
    ObjectNotFoundError,
    ProteanException,
    ValidationError,
)


class InvalidQuantity(ValidationError):
    def __init__(self, quantity, field="quantity"):
        self.quantity = quantity
        messages = {field: [f"Quantity must be a positive integer, got {quantity}"]}
        super().__init__(messages)
        self.messages = messages


class EmptyCart(ValidationError):
    def __init__(self, customer_id):
        self.customer_id = customer_id
        messages = {"cart": ["Cannot place an order from an empty cart"]}
        super().__init__(messages)
        self.messages = messages


class ItemNotFound(ObjectNotFoundError):
    def __init__(self, item_ref, field="product_id"):
        self.item_ref = item_ref
        messages = {field: [f"Cart item {item_ref} not found"]}
        super().__init__(messages)
        self.messages = messages


class ProductNotFound(ObjectNotFoundError):
    def __init__(self, product_id):
        self.product_id = product_id
        messages = {"product_id": [f"Product {product_id} does not exist"]}
        super().__init__(messages)
        self.messages = messages


class OrderNotFound(ObjectNotFoundError):
    def __init__(self, order_id):
        self.order_id = order_id
        messages = {"order_id": [f"Order {order_id} not found"]}
        super().__init__(messages)
        self.messages = messages


class ProductUnavailable(InvalidOperationError):
    def __init__(self, product_id, requested, available):
        self.product_id = product_id
        self.requested = requested
        self.available = available
        messages = {
            "product_id": [f"Product {product_id} has {available} in stock, {requested} requested"],
        }
        super().__init__(messages)
        self.messages = messages


class PaymentFailed(ProteanException):
    def __init__(self, reason):
        self.reason = reason
        messages = {"payment_method": [f"Payment failed: {reason}"]}
        super().__init__(messages)
        self.messages = messages


class Unauthorized(ProteanException):
    def __init__(self, reason="Missing or invalid bearer token"):
        self.reason = reason
        messages = {"authorization": [reason]}
        super().__init__(messages)
        self.messages = messages
