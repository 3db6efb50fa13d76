"""
app/api/routers package marker.
"""

from app.api.routers.messages_router import router as messages_router
from app.api.routers.metrics_router import router as metrics_router

__all__ = [
    "messages_router",
    "metrics_router",
]
