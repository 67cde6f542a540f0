import logging

from fastapi import FastAPI

from auction_validator.api.v1 import blueprint, validate
from auction_validator.core.config import settings
from auction_validator.middleware.metrics import PrometheusMiddleware, metrics_endpoint

logger = logging.getLogger(__name__)

logging.getLogger("auction_validator").setLevel(
    logging.DEBUG if settings.DEBUG else settings.LOG_LEVEL
)

app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Authorization logic for a single-asset English auction",
)

# Prometheus Metrics Middleware (must be first to capture all requests)
if settings.METRICS_ENABLED:
    app.add_middleware(PrometheusMiddleware)


# Include API routers
app.include_router(validate.router, prefix="/api/v1/validate", tags=["validate"])
app.include_router(blueprint.router, prefix="/api/v1/blueprint", tags=["blueprint"])


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


# Prometheus metrics endpoint
app.add_route("/metrics", metrics_endpoint)
