"""
app/schemas package marker.
"""

from app.schemas.messages import (
    CleanMessagesRequest,
    CleanMessagesResponse,
    ConversationsRequest,
    ConversationsResponse,
)
from app.schemas.metrics import (
    CashflowRequest,
    CashflowSummarySchema,
    DashboardRequest,
    DashboardResponse,
    GrowthRequest,
    GrowthResponse,
    KPIResponse,
)

__all__ = [
    "CashflowRequest",
    "CashflowSummarySchema",
    "CleanMessagesRequest",
    "CleanMessagesResponse",
    "ConversationsRequest",
    "ConversationsResponse",
    "DashboardRequest",
    "DashboardResponse",
    "GrowthRequest",
    "GrowthResponse",
    "KPIResponse",
]
