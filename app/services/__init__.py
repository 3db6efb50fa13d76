"""
app/services package marker.
"""

from app.services.dashboard_service import DashboardService, get_dashboard_service
from app.services.growth_service import GrowthService, get_growth_service
from app.services.message_service import MessageService, get_message_service

__all__ = [
    "DashboardService",
    "get_dashboard_service",
    "GrowthService",
    "get_growth_service",
    "MessageService",
    "get_message_service",
]
