"""
Controllers Package - Presentation Layer

FastAPI routers that validate input, call the application use cases and
map domain errors to HTTP responses.
"""

from .deployment_controller import router as deployment_router
from .health_controller import router as health_router
from .metrics_controller import router as metrics_router
from .system_controller import router as system_router

__all__ = ["deployment_router", "health_router", "metrics_router", "system_router"]
