"""
FastAPI API routes and endpoints.

- routes.py: Validation endpoints (upload, cached file, selective) and GET /health
- dependencies.py: Settings and validation pipeline singletons
- models.py: API-specific request/response models
- middleware.py: Request tracing
- error_handlers.py: Exception handlers for transport-level errors
"""

from ccda_validation.api import dependencies, error_handlers, models
from ccda_validation.api.routes import router

__all__ = [
    "router",
    "dependencies",
    "error_handlers",
    "models",
]
