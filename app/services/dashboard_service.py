"""
app/services/dashboard_service.py

Composition of the dashboard report from pre-fetched record batches.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from functools import lru_cache

from app.config import AnalyticsSettings, get_analytics_settings
from app.domain.reports import DashboardReport
from cashflow.aggregation import build_cashflow_summary
from kpi.dashboard import DashboardInputs, DashboardKPIFormula
from records.models import CashflowSummary, ExecutionRecord, TransactionRecord

logger = logging.getLogger(__name__)


class DashboardService:
    """
    Builds dashboard reports.

    The ledger snapshot is taken from the caller when supplied, otherwise
    derived from *transactions* when any are given.  With neither, the
    Governed Value tile falls back to execution charges.
    """

    def __init__(self, settings: AnalyticsSettings | None = None) -> None:
        self._settings = settings or get_analytics_settings()
        self._formula = DashboardKPIFormula()

    def build_report(
        self,
        executions: Sequence[ExecutionRecord],
        *,
        cashflow: CashflowSummary | None = None,
        transactions: Sequence[TransactionRecord] | None = None,
        open_escalations: int | None = None,
        messages_count: int = 0,
    ) -> DashboardReport:
        if cashflow is None and transactions:
            cashflow = build_cashflow_summary(transactions)

        inputs = DashboardInputs(
            executions=executions,
            cashflow=cashflow,
            open_escalations=open_escalations,
            messages_count=messages_count,
            template_workflow=self._settings.template_workflow,
        )
        metrics = self._formula.compute_metrics(inputs)
        kpis = self._formula.build_tiles(metrics)

        logger.info(
            "Dashboard report built: executions=%d finished=%d open_escalations=%d",
            len(executions),
            metrics.total_count,
            metrics.open_escalations,
        )
        return DashboardReport(
            kpis=kpis,
            cashflow=cashflow,
            open_escalations=metrics.open_escalations,
        )


@lru_cache(maxsize=1)
def get_dashboard_service() -> DashboardService:
    """
    Build and cache the dashboard service.
    """

    return DashboardService()
