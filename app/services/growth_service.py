"""
app/services/growth_service.py

Composition of the growth report from ledger transactions and executions.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from functools import lru_cache

from app.config import AnalyticsSettings, get_analytics_settings
from app.domain.reports import GrowthReport
from cashflow.aggregation import select_wins
from kpi.growth import GrowthInputs, GrowthKPIFormula
from kpi.value_created import calculate_value_created
from records.models import ExecutionRecord, TransactionRecord

logger = logging.getLogger(__name__)


class GrowthService:
    """
    Builds growth-page reports.

    KPI tiles and wins come from the ledger; the value-created panel comes
    from executions.
    """

    def __init__(self, settings: AnalyticsSettings | None = None) -> None:
        self._settings = settings or get_analytics_settings()
        self._formula = GrowthKPIFormula()

    def build_report(
        self,
        transactions: Sequence[TransactionRecord],
        executions: Sequence[ExecutionRecord] = (),
    ) -> GrowthReport:
        kpis = self._formula.calculate(GrowthInputs(transactions=transactions))
        wins = select_wins(
            transactions,
            threshold=self._settings.big_win_threshold,
            limit=self._settings.max_wins,
        )
        value_created = calculate_value_created(
            executions,
            recent_limit=self._settings.recent_resolutions,
        )
        logger.info(
            "Growth report built: transactions=%d executions=%d wins=%d",
            len(transactions),
            len(executions),
            len(wins),
        )
        return GrowthReport(kpis=kpis, wins=wins, value_created=value_created)


@lru_cache(maxsize=1)
def get_growth_service() -> GrowthService:
    """
    Build and cache the growth service.
    """

    return GrowthService()
