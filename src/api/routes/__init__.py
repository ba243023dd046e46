"""API route modules."""

from src.api.routes.exchange import router as exchange_router
from src.api.routes.health import router as health_router
from src.api.routes.inventory import router as inventory_router
from src.api.routes.reports import router as reports_router

__all__ = [
    "health_router",
    "inventory_router",
    "exchange_router",
    "reports_router",
]
