"""
app/domain/reports.py

Page-level report bundles returned by the service layer.
"""

from __future__ import annotations

from dataclasses import dataclass

from cashflow.aggregation import Win
from kpi.models import KPI
from kpi.value_created import ValueCreated
from records.models import CashflowSummary


@dataclass(frozen=True)
class DashboardReport:
    """
    KPI tiles plus the ledger snapshot they were computed from.
    """

    kpis: list[KPI]
    cashflow: CashflowSummary | None
    open_escalations: int


@dataclass(frozen=True)
class GrowthReport:
    """
    Growth KPI tiles, big wins and the value-created panel.
    """

    kpis: list[KPI]
    wins: list[Win]
    value_created: ValueCreated
