"""
app/domain package marker.
"""

from app.domain.reports import DashboardReport, GrowthReport

__all__ = [
    "DashboardReport",
    "GrowthReport",
]
