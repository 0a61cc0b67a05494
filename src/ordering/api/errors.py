"""Exception handlers translating domain errors into the API error envelope.

Every error response has the shape::

    {"status": 404, "errors": [{"field": "orderId", "message": "..."}]}

Starlette resolves handlers along the exception's MRO, so the checkout
errors pick up the status of their Protean base class.
"""

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from protean.exceptions import InvalidOperationError, ObjectNotFoundError, ValidationError
from pydantic.alias_generators import to_camel

from ordering.errors import PaymentFailed, Unauthorized

logger = structlog.get_logger(__name__)

# Domain-facing exception families. Any other exception, including Protean's
# infrastructure errors (DatabaseError, TransactionError, ...), is a 500.
_STATUS_BY_EXCEPTION = {
    ValidationError: 400,
    Unauthorized: 401,
    PaymentFailed: 402,
    ObjectNotFoundError: 404,
    InvalidOperationError: 409,
}


def _field_name(field):
    if field is None or str(field).startswith("_"):
        return None
    return to_camel(str(field))


def flatten_messages(messages) -> list[dict]:
    """Turn a Protean ``{field: [messages]}`` dict into envelope error entries."""
    if not isinstance(messages, dict):
        return [{"field": None, "message": str(messages)}]

    errors = []
    for field, field_messages in messages.items():
        if isinstance(field_messages, list | tuple):
            errors.extend({"field": _field_name(field), "message": str(m)} for m in field_messages)
        else:
            errors.append({"field": _field_name(field), "message": str(field_messages)})
    return errors


INTERNAL_ERROR = [{"field": None, "message": "Internal server error"}]


def error_response(status_code: int, errors: list[dict]) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"status": status_code, "errors": errors})


def _status_for(exc) -> int:
    for klass in type(exc).__mro__:
        if klass in _STATUS_BY_EXCEPTION:
            return _STATUS_BY_EXCEPTION[klass]
    return 500


async def domain_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    status_code = _status_for(exc)
    errors = flatten_messages(getattr(exc, "messages", None) or str(exc))
    logger.info(
        "Request rejected",
        error_type=type(exc).__name__,
        http_status=status_code,
        path=request.url.path,
    )
    return error_response(status_code, errors)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = []
    for error in exc.errors():
        location = [part for part in error.get("loc", ()) if part not in ("body", "query", "path", "header")]
        field = str(location[-1]) if location else None
        errors.append({"field": field, "message": error.get("msg", "Invalid value")})
    return error_response(400, errors)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    # correlation_id is already bound in contextvars by the middleware
    logger.exception("Unhandled error while processing request", path=request.url.path)
    return error_response(500, INTERNAL_ERROR)


def register_exception_handlers(app: FastAPI) -> None:
    for exception_class in _STATUS_BY_EXCEPTION:
        app.add_exception_handler(exception_class, domain_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
