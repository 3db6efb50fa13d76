"""
kpi/dashboard.py

Dashboard KPI formula implementation.

Expected inputs
---------------
executions : Sequence[ExecutionRecord]
    Every run in the reporting window, finished or not.
cashflow : CashflowSummary | None
    Optional precomputed ledger snapshot; its ``total_revenue`` replaces
    the value derived from executions.
open_escalations : int | None
    Optional externally computed count of open escalations.
messages_count : int
    Optional count of messages in the chat history (0 = derive).

Formulas
--------
Only *finished* runs (``finished`` flag or ``stopped_at`` present) enter
the rate, latency and integrity metrics.  ``total`` below is the number
of finished runs.

Success Rate       = round(success / total * 100)          (100 when total = 0)
Failure Rate       = failed / total * 100, one decimal    ("0.0" when total = 0)
Governed Value     = cashflow.total_revenue, else
                     sum(total_charge + value_captured) over ALL runs
Median Cycle       = p50 of stopped_at - started_at       ("--" without samples)
Decision Integrity = 100 - verdict_failed / total * 100   ("100.0" when total = 0)
Avg Time Saved     = round(sum(time_saved_seconds) / total) (0 when total = 0)

Absence of data reads as a healthy system, never as a failure.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass

from currency.codec import format_currency
from kpi.base import BaseKPIFormula
from kpi.models import KPI, KPIStatus
from kpi.timing import elapsed_ms, format_latency, median_latency_ms
from normalization.normalizer import FAILED_STATUSES
from records.models import CashflowSummary, ExecutionRecord

logger = logging.getLogger(__name__)

DEFAULT_TEMPLATE_WORKFLOW = "lara"

SUCCESS_RATE_HEALTHY = 90
SUCCESS_RATE_DEGRADED = 70
FAILURE_RATE_HEALTHY = 5.0
DECISION_INTEGRITY_HEALTHY = 98.0


@dataclass(frozen=True)
class DashboardInputs:
    executions: Sequence[ExecutionRecord]
    cashflow: CashflowSummary | None = None
    open_escalations: int | None = None
    messages_count: int = 0
    template_workflow: str = DEFAULT_TEMPLATE_WORKFLOW


@dataclass(frozen=True)
class DashboardMetrics:
    """Raw numbers behind the dashboard tiles."""

    total_count: int
    success_count: int
    failed_count: int
    success_rate: int
    failure_rate: str
    total_value: float
    open_escalations: int
    median_time: str
    decision_integrity: str
    avg_time_saved: int
    messages_sent: int
    templates_sent: int


class DashboardKPIFormula(BaseKPIFormula[DashboardInputs]):
    """
    Deterministic dashboard KPI calculations with safe division-by-zero handling.

    All arithmetic is self-contained.  No I/O, no side effects.
    """

    def compute_metrics(self, inputs: DashboardInputs) -> DashboardMetrics:
        executions = list(inputs.executions)
        finished = [e for e in executions if e.is_finished]
        total = len(finished)

        success_count = sum(1 for e in finished if _status(e) == "success" or e.finished is True)
        failed_count = sum(1 for e in finished if _status(e) in FAILED_STATUSES)
        verdict_failed = sum(
            1 for e in finished if (e.governance_verdict or "").strip().upper() == "FAILED"
        )
        time_saved = sum(e.time_saved_seconds or 0.0 for e in finished)

        latency = median_latency_ms(
            sample
            for sample in (elapsed_ms(e.started_at, e.stopped_at) for e in finished)
            if sample is not None
        )

        metrics = DashboardMetrics(
            total_count=total,
            success_count=success_count,
            failed_count=failed_count,
            success_rate=_success_rate(success_count, total),
            failure_rate=_failure_rate(failed_count, total),
            total_value=_total_value(executions, inputs.cashflow),
            open_escalations=_open_escalations(executions, inputs.open_escalations),
            median_time=format_latency(latency),
            decision_integrity=_decision_integrity(verdict_failed, total),
            avg_time_saved=_round_half_up(time_saved / total) if total else 0,
            messages_sent=_messages_sent(executions, inputs.messages_count),
            templates_sent=_templates_sent(executions, inputs.template_workflow),
        )
        logger.debug(
            "Dashboard metrics: %d/%d finished runs, success=%d failed=%d",
            total,
            len(executions),
            success_count,
            failed_count,
        )
        return metrics

    def calculate(self, inputs: DashboardInputs) -> list[KPI]:
        """Compute the twelve dashboard tiles from *inputs*."""
        return self.build_tiles(self.compute_metrics(inputs))

    def build_tiles(self, m: DashboardMetrics) -> list[KPI]:
        """
        Render *m* as tiles.

        The first six tiles tell the business story, the last six the
        system-health story; order is fixed.
        """
        failure_rate_value = float(m.failure_rate)
        integrity_value = float(m.decision_integrity)

        return [
            KPI(
                id="total-value",
                label="Governed Value",
                value=format_currency(m.total_value),
                trend_label="Real-time",
                subtext="Institutional ROI",
                status="success",
            ),
            KPI(
                id="ai-resolution",
                label="AI Resolution Rate",
                value=f"{m.success_rate}%",
                trend_label="Stable",
                subtext="Autonomous closure",
                status=_success_rate_status(m.success_rate),
            ),
            KPI(
                id="open-escalations",
                label="Open Escalations",
                value=str(m.open_escalations),
                trend_label="Human Required",
                subtext="Active human req.",
                status="warning" if m.open_escalations > 0 else "success",
            ),
            KPI(
                id="median-cycle",
                label="Median Cycle Time",
                value=m.median_time,
                trend_label="Optimal",
                subtext="Processing speed",
                status="neutral",
            ),
            KPI(
                id="messages-sent",
                label="Message Sent",
                value=str(m.messages_sent),
                trend_label="Communications",
                subtext="WhatsApp History",
                status="success",
            ),
            KPI(
                id="templates-sent",
                label="Template Sent",
                value=str(m.templates_sent),
                trend_label="Outreach Agent",
                subtext="Automated Outreach",
                status="success",
            ),
            KPI(
                id="total-executions",
                label="Total Executions",
                value=str(m.total_count),
                trend_label="Operational",
                subtext="Node volume",
                status="neutral",
            ),
            KPI(
                id="failed-executions",
                label="Failed Executions",
                value=str(m.failed_count),
                trend_label="Interruptions",
                subtext="System health",
                status="error" if m.failed_count > 0 else "success",
            ),
            KPI(
                id="failure-rate",
                label="Failure Rate",
                value=f"{m.failure_rate}%",
                trend_label="Reliability",
                subtext="Stability signal",
                status="success" if failure_rate_value < FAILURE_RATE_HEALTHY else "warning",
            ),
            KPI(
                id="avg-runtime",
                label="Average Runtime",
                value=m.median_time,
                trend_label="Verified",
                subtext="Execution speed",
                status="success",
            ),
            KPI(
                id="decision-integrity",
                label="Decision Integrity",
                value=f"{m.decision_integrity}%",
                trend_label="Governance",
                subtext="Policy alignment",
                status="success" if integrity_value >= DECISION_INTEGRITY_HEALTHY else "warning",
            ),
            KPI(
                id="avg-time-saved",
                label="Avg Time Saved",
                value=f"{m.avg_time_saved}s",
                trend_label="Efficiency",
                subtext="Labor reclaimed",
                status="success",
            ),
        ]


def calculate_dashboard_kpis(
    executions: Sequence[ExecutionRecord],
    messages_count: int = 0,
    cashflow: CashflowSummary | None = None,
    open_escalations: int | None = None,
    *,
    template_workflow: str = DEFAULT_TEMPLATE_WORKFLOW,
) -> list[KPI]:
    """Convenience wrapper around :class:`DashboardKPIFormula`."""
    return DashboardKPIFormula().calculate(
        DashboardInputs(
            executions=executions,
            cashflow=cashflow,
            open_escalations=open_escalations,
            messages_count=messages_count,
            template_workflow=template_workflow,
        )
    )


# ---------------------------------------------------------------------------
# Pure formula functions
# ---------------------------------------------------------------------------


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def _status(execution: ExecutionRecord) -> str:
    return (execution.status or "").strip().lower()


def _success_rate(success_count: int, total: int) -> int:
    """Rounded percentage; 100 when there are no finished runs."""
    if total == 0:
        return 100
    return _round_half_up(success_count / total * 100)


def _failure_rate(failed_count: int, total: int) -> str:
    if total == 0:
        return "0.0"
    return f"{failed_count / total * 100:.1f}"


def _decision_integrity(verdict_failed: int, total: int) -> str:
    if total == 0:
        return "100.0"
    return f"{100 - verdict_failed / total * 100:.1f}"


def _total_value(
    executions: Sequence[ExecutionRecord],
    cashflow: CashflowSummary | None,
) -> float:
    """Ledger revenue when supplied, else charges plus captured value over every run."""
    if cashflow is not None:
        return cashflow.total_revenue
    return sum((e.total_charge or 0.0) + (e.value_captured or 0.0) for e in executions)


def _open_escalations(executions: Sequence[ExecutionRecord], supplied: int | None) -> int:
    if supplied is not None:
        return supplied
    return sum(1 for e in executions if e.has_escalation and not e.is_escalation_resolved)


def _messages_sent(executions: Sequence[ExecutionRecord], messages_count: int) -> int:
    if messages_count:
        return messages_count
    return int(sum(e.messages_sent or 0.0 for e in executions))


def _templates_sent(executions: Sequence[ExecutionRecord], workflow: str) -> int:
    target = workflow.strip().lower()
    return int(
        sum(
            e.messages_sent or 0.0
            for e in executions
            if (e.workflow_name or "").strip().lower() == target
        )
    )


def _success_rate_status(success_rate: int) -> KPIStatus:
    if success_rate >= SUCCESS_RATE_HEALTHY:
        return "success"
    if success_rate >= SUCCESS_RATE_DEGRADED:
        return "warning"
    return "error"
