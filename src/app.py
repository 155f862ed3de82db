"""Checkout customizations FastAPI application.

Serves the checkout functions over HTTP so a host that cannot embed them
in-process can call them per checkout evaluation. Every request runs inside
the customizations domain context.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# PROTEAN_ENV controls which config overlay is applied.
from customizations.domain import customizations
from customizations.utils.logging import configure_logging, get_logger
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from protean.integrations.fastapi import register_exception_handlers

configure_logging(log_dir="logs", log_file_prefix="customizations")
logger = get_logger(__name__)

customizations.init()

# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Checkout Customizations API",
    description="Delivery title rewriting and shipping discount functions",
)

# Configuration errors are ValidationErrors and map to 400 responses
register_exception_handlers(app)


@app.middleware("http")
async def domain_context_middleware(request: Request, call_next):
    """Push the customizations domain context for each request."""
    with customizations.domain_context():
        response = await call_next(request)
    return response


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
from customizations.api import function_router  # noqa: E402

app.include_router(function_router)


# ---------------------------------------------------------------------------
# Health / root
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    return JSONResponse(
        content={
            "status": "ok",
            "domains": {
                "customizations": {"name": customizations.name},
            },
        }
    )
