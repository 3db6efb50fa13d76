"""
kpi/growth.py

Growth-page KPI formula implementation.

Expected inputs
---------------
transactions : Sequence[TransactionRecord]
    Ledger transactions for the reporting window.

Formulas
--------
Revenue Governed  = sum(parse_currency(total_amount)) over all transactions
Upsell Rate       = classified transactions / all transactions * 100
Late Checkout     = sum of amounts classified as checkout fees
Early Check-in    = sum of amounts classified as check-in fees
Services Revenue  = sum of every classified category

Orphan days have no data source yet and are reported as a literal "0".
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from cashflow.classifier import CategoryBreakdown, summarize_categories
from currency.codec import format_currency, parse_currency
from kpi.base import BaseKPIFormula
from kpi.models import KPI, KPIStatus
from records.models import TransactionRecord

logger = logging.getLogger(__name__)

ORPHAN_DAYS_PLACEHOLDER = "0"


@dataclass(frozen=True)
class GrowthInputs:
    transactions: Sequence[TransactionRecord]


class GrowthKPIFormula(BaseKPIFormula[GrowthInputs]):
    """
    Revenue-category KPIs derived from the cashflow ledger.

    Categorization is delegated to :func:`cashflow.classifier.summarize_categories`.
    """

    def calculate(self, inputs: GrowthInputs) -> list[KPI]:
        transactions = list(inputs.transactions)
        breakdown = summarize_categories(transactions)
        total_revenue = sum(parse_currency(t.total_amount) for t in transactions)
        totals = breakdown.totals

        logger.debug(
            "Growth metrics: %d transactions, revenue=%.2f, upsell_rate=%.1f",
            breakdown.transaction_count,
            total_revenue,
            breakdown.upsell_rate,
        )

        return [
            KPI(
                id="total-revenue",
                label="Revenue Governed",
                value=format_currency(total_revenue),
                trend_label="",
                subtext=f"{breakdown.transaction_count} Transactions",
                status=_positive_status(total_revenue),
            ),
            KPI(
                id="upsell-rate",
                label="Upsell Acceptance Rate",
                value=f"{breakdown.upsell_rate:.1f}%",
                trend_label="Conversion Efficiency",
                subtext=_conversion_subtext(breakdown),
                status=_positive_status(breakdown.upsell_rate),
            ),
            KPI(
                id="orphan-days",
                label="Orphan Days Captured",
                value=ORPHAN_DAYS_PLACEHOLDER,
                trend_label="",
                subtext="Occupancy Boost",
                status="neutral",
            ),
            KPI(
                id="late-checkout",
                label="Late Checkout Revenue",
                value=format_currency(totals.checkout),
                trend_label="",
                subtext="Extension Value",
                status=_positive_status(totals.checkout),
            ),
            KPI(
                id="early-checkin",
                label="Early Check-in Revenue",
                value=format_currency(totals.checkin),
                trend_label="",
                subtext="Arrival Value",
                status=_positive_status(totals.checkin),
            ),
            KPI(
                id="services",
                label="Services Revenue",
                value=format_currency(breakdown.services_total),
                trend_label="",
                subtext="Add-ons & Extras",
                status=_positive_status(breakdown.services_total),
            ),
        ]


def calculate_growth_kpis(transactions: Sequence[TransactionRecord]) -> list[KPI]:
    """Convenience wrapper around :class:`GrowthKPIFormula`."""
    return GrowthKPIFormula().calculate(GrowthInputs(transactions=transactions))


def _positive_status(value: float) -> KPIStatus:
    return "success" if value > 0 else "neutral"


def _conversion_subtext(breakdown: CategoryBreakdown) -> str:
    return f"{breakdown.service_count}/{breakdown.transaction_count} Converted"
