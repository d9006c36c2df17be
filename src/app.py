"""Shipping FastAPI application.

Web server for cargo booking, handling registration and tracking. Commands
are processed synchronously via HTTP; every request runs inside the
shipping domain context.

Usage:
    uvicorn src.app:app --host 0.0.0.0 --port 8000 --reload
"""

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# The domain is initialized at module level so uvicorn workers share it.
# PROTEAN_ENV controls which config overlay is applied:
#   - "development" / "test" → event_processing = "sync"  (projectors fire in UoW)
#   - "production"           → event_processing = "async" (projectors fire via Engine)
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from protean.integrations.fastapi import register_exception_handlers
from shipping.domain import shipping
from shipping.reference_data import seed_reference_data
from shipping.utils.logging import configure_logging

configure_logging()
shipping.init()

with shipping.domain_context():
    seed_reference_data()


# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Shipping API",
    description="Cargo booking, handling and tracking",
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
    """Push the shipping domain context for each request."""
    with shipping.domain_context():
        response = await call_next(request)
    return response


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
from shipping.api import cargo_router, handling_router, location_router, tracking_router  # noqa: E402

app.include_router(cargo_router)
app.include_router(handling_router)
app.include_router(tracking_router)
app.include_router(location_router)

register_exception_handlers(app)


# ---------------------------------------------------------------------------
# Health / root
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    return JSONResponse(
        content={
            "status": "ok",
            "domains": {
                "shipping": {"name": shipping.name},
            },
        }
    )
