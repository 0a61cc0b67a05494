"""Bearer credentials.

Every cart and order endpoint acts on behalf of the customer named by the
token's ``sub`` claim.
"""

from datetime import UTC, datetime, timedelta

from fastapi import Header
from jose import JWTError, jwt

from ordering import settings
from ordering.errors import Unauthorized


def issue_token(customer_id: str, ttl_minutes: int | None = None) -> str:
    ttl = ttl_minutes if ttl_minutes is not None else settings.access_token_ttl_minutes()
    payload = {
        "sub": str(customer_id),
        "iat": datetime.now(UTC),
        "exp": datetime.now(UTC) + timedelta(minutes=ttl),
    }
    return jwt.encode(payload, settings.jwt_secret(), algorithm=settings.jwt_algorithm())


def decode_token(token: str) -> str:
    """Return the customer id carried by a token."""
    try:
        payload = jwt.decode(token, settings.jwt_secret(), algorithms=[settings.jwt_algorithm()])
    except JWTError:
        raise Unauthorized("Invalid or expired token") from None

    customer_id = payload.get("sub")
    if not customer_id:
        raise Unauthorized("Token does not identify a customer")
    return customer_id


def current_customer(authorization: str | None = Header(default=None)) -> str:
    """FastAPI dependency resolving the calling customer from the Authorization header."""
    if not authorization:
        raise Unauthorized("Missing Authorization header")

    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise Unauthorized("Authorization header must be a bearer token")
    return decode_token(token.strip())
