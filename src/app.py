"""Cartflow FastAPI application.

Serves the cart and checkout API synchronously over HTTP. Each request is
wrapped in the ordering domain context.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload

Set CATALOGUE_SEED_FILE to a products JSON file to populate the (in-memory)
catalogue at startup.
"""

import os

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from ordering.domain import ordering

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# The domain is initialized at module level so uvicorn workers share it.
ordering.init()

if os.getenv("CATALOGUE_SEED_FILE"):
    from ordering.catalogue.seed import load_records, seed_catalogue

    with ordering.domain_context():
        seed_catalogue(load_records(os.environ["CATALOGUE_SEED_FILE"]))


# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Cartflow API",
    description="Shopping cart, checkout and order history",
)


@app.middleware("http")
async def domain_context_middleware(request: Request, call_next):
    """Push the ordering domain context for each API request."""
    if request.url.path.startswith("/api"):
        with ordering.domain_context():
            return await call_next(request)
    # Health check, docs, etc.
    return await call_next(request)


from ordering.api import (  # noqa: E402
    CorrelationMiddleware,
    cart_router,
    order_router,
    register_exception_handlers,
)

# Added last so it wraps everything else and binds the correlation id first
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(CorrelationMiddleware)

register_exception_handlers(app)

# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
app.include_router(cart_router)
app.include_router(order_router)


# ---------------------------------------------------------------------------
# Health / root
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    return JSONResponse(
        content={
            "status": "ok",
            "domains": {
                "ordering": {"name": ordering.name},
            },
        }
    )
