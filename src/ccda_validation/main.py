"""
FastAPI application entry point for the Reference C-CDA Validation Service.
"""

import structlog
from fastapi import FastAPI
from prometheus_fastapi_instrumentator import Instrumentator

from ccda_validation.api.dependencies import get_validation_pipeline
from ccda_validation.api.error_handlers import EXCEPTION_HANDLERS
from ccda_validation.api.middleware import RequestTracingMiddleware
from ccda_validation.api.routes import router
from ccda_validation.config import settings
from ccda_validation.logging_config import configure_logging

# Configure structured logging before any other imports
configure_logging(settings.LOG_LEVEL, settings.ENVIRONMENT)
logger = structlog.get_logger(__name__)

app = FastAPI(
    title=settings.APP_NAME,
    description="Validates C-CDA documents against schema, vocabulary and reference content rules",
    version=settings.APP_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
)

# Request tracing middleware (must be first for request_id in all logs)
app.add_middleware(RequestTracingMiddleware)

for exc_class, handler in EXCEPTION_HANDLERS.items():
    app.add_exception_handler(exc_class, handler)

app.include_router(router, tags=["validation"])


@app.on_event("startup")
async def startup():
    """Application startup - load validators so the first request does not pay for it."""
    logger.info(
        "Application startup",
        version=settings.APP_VERSION,
        environment=settings.ENVIRONMENT,
        schema_validator=settings.SCHEMA_VALIDATOR,
        vocabulary_validator=settings.VOCABULARY_VALIDATOR,
        content_validator=settings.CONTENT_VALIDATOR,
    )
    get_validation_pipeline()
    logger.info("Application startup complete")


@app.on_event("shutdown")
async def shutdown():
    """Application shutdown."""
    logger.info("Application shutdown")


if settings.PROMETHEUS_ENABLED:
    Instrumentator().instrument(app).expose(app)


@app.get("/")
async def root():
    """Root endpoint with API documentation links."""
    return {
        "service": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "docs": "/docs",
        "health": "/health",
        "metrics": "/metrics" if settings.PROMETHEUS_ENABLED else None,
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "ccda_validation.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
    )
