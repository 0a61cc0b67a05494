import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from ordering.api import CorrelationMiddleware, cart_router, order_router, register_exception_handlers
from ordering.api.auth import issue_token


@pytest.fixture()
def app():
    app = FastAPI()
    app.add_middleware(CorrelationMiddleware)
    register_exception_handlers(app)
    app.include_router(cart_router)
    app.include_router(order_router)
    return app


@pytest.fixture()
def client(app):
    return TestClient(app)


@pytest.fixture()
def auth_headers():
    """Bearer headers for a customer id (defaults to cust-001)."""

    def _headers(customer_id="cust-001"):
        return {"Authorization": f"Bearer {issue_token(customer_id)}"}

    return _headers


@pytest.fixture()
def catalogue(register_product):
    register_product("prod-001", name="Mug", price=10.0, stock=5)
    register_product("prod-002", name="Poster", price=5.0, stock=5)
    register_product("prod-003", name="Sold out tee", price=15.0, stock=0)
