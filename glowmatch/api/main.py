"""FastAPI application main module.

This module defines the FastAPI application instance for the GlowMatch
recommendation service: health and metrics endpoints, error rendering and
request logging. It serves as the entry point for the API server.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Dict

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from glowmatch import __version__, config
from glowmatch.api.exceptions import GlowMatchException
from glowmatch.api.logging_config import RequestLoggingMiddleware, setup_logging
from glowmatch.api.metrics import metrics_service
from glowmatch.api.routes import products
from glowmatch.catalog.database import init_db

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    setup_logging(config.LOG_LEVEL)
    init_db()
    logger.info("GlowMatch API started", extra={"version": __version__})
    yield


# Create FastAPI application instance
app = FastAPI(
    title="GlowMatch API",
    description="Skincare product recommendations by skin type and concerns",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(RequestLoggingMiddleware)

# Include routers
app.include_router(products.router)


@app.exception_handler(GlowMatchException)
async def glowmatch_exception_handler(request: Request, exc: GlowMatchException) -> JSONResponse:
    """Render application errors as ``{"error": message}``."""
    log = logger.error if exc.status_code >= 500 else logger.warning
    log(
        exc.message,
        extra={
            "path": str(request.url.path),
            "status_code": exc.status_code,
            "details": exc.details,
        },
    )
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.get("/ping")
def ping() -> Dict[str, str]:
    """Health check endpoint.

    Returns:
        Dictionary with status key set to "ok".

    Example:
        >>> response = client.get("/ping")
        >>> assert response.json() == {"status": "ok"}
    """
    return {"status": "ok"}


@app.get("/metrics")
def get_metrics() -> Dict:
    """Recommendation counters and latency summary."""
    return metrics_service.get_metrics()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "glowmatch.api.main:app",
        host=config.HOST,
        port=config.PORT,
        reload=True,
    )
