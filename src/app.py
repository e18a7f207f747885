"""Car-parts shop ordering API.

Web server that processes ordering commands synchronously via HTTP. Each
request under an ordering prefix runs inside the ordering domain context.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# The domain is initialized at module level so uvicorn workers share it.
# PROTEAN_ENV selects the config overlay in ordering/domain.toml.
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from ordering.domain import ordering
from ordering.utils.logging import bind_request_context, clear_request_context

ordering.init()

_ORDERING_PREFIXES = ("/orders", "/customers", "/parts")


# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Car Parts Shop API",
    description="Order processing: parts inventory, customers and orders",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def domain_context_middleware(request: Request, call_next):
    """Push the ordering domain context for ordering requests."""
    if request.url.path.startswith(_ORDERING_PREFIXES):
        bind_request_context(
            method=request.method,
            path=request.url.path,
            caller_id=request.headers.get("x-user-id"),
            caller_role=request.headers.get("x-user-role"),
        )
        try:
            with ordering.domain_context():
                response = await call_next(request)
        finally:
            clear_request_context()
        return response
    # Health check, docs, etc.
    return await call_next(request)


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
from ordering.api import (  # noqa: E402
    customer_router,
    order_router,
    part_router,
    register_error_handlers,
)

app.include_router(order_router)
app.include_router(customer_router)
app.include_router(part_router)
register_error_handlers(app)


# ---------------------------------------------------------------------------
# Health / root
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    return JSONResponse(content={"status": "ok", "domains": {"ordering": {"name": ordering.name}}})
