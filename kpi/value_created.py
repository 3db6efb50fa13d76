"""
kpi/value_created.py

"Value created" panel and escalation summary for the growth page.

Escalations here are runs with ``human_escalation_triggered`` set; an
escalation is resolved when its status is ``RESOLVED`` (any casing).
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import datetime

from records.models import ExecutionRecord

DEFAULT_RECENT_RESOLUTIONS = 5


@dataclass(frozen=True)
class ValueItem:
    label: str
    value: str


@dataclass(frozen=True)
class ResolvedEscalation:
    id: str
    phone: str
    reason: str
    resolved_at: datetime | None
    resolved_by: str


@dataclass(frozen=True)
class EscalationSummary:
    total: int
    open: int
    resolved: int
    resolution_rate: int
    recent_resolutions: list[ResolvedEscalation] = field(default_factory=list)


@dataclass(frozen=True)
class ValueCreated:
    items: list[ValueItem]
    escalations: EscalationSummary


def _percent(part: int, whole: int) -> int:
    if whole == 0:
        return 0
    return math.floor(part / whole * 100 + 0.5)


def calculate_value_created(
    executions: Sequence[ExecutionRecord],
    *,
    recent_limit: int = DEFAULT_RECENT_RESOLUTIONS,
) -> ValueCreated:
    """
    Summarize labour saved and escalation handling over *executions*.

    Rates are rounded whole percentages and are 0 when their denominator
    is empty.
    """
    escalated = [e for e in executions if e.human_escalation_triggered is True]
    resolved = [e for e in escalated if e.is_escalation_resolved]
    open_count = len(escalated) - len(resolved)

    hours_saved = sum(e.time_saved_seconds or 0.0 for e in executions) / 3600
    automation_rate = _percent(len(executions) - len(escalated), len(executions))
    resolution_rate = _percent(len(resolved), len(escalated))

    items = [
        ValueItem("Hours Saved", f"{hours_saved:.1f}h"),
        ValueItem("Escalations Resolved", str(len(resolved))),
        ValueItem("Escalations Open", str(open_count)),
        ValueItem("Automation Rate", f"{automation_rate}%"),
        ValueItem("Total Escalations", str(len(escalated))),
        ValueItem("Resolution Rate", f"{resolution_rate}%"),
    ]

    summary = EscalationSummary(
        total=len(escalated),
        open=open_count,
        resolved=len(resolved),
        resolution_rate=resolution_rate,
        recent_resolutions=[
            ResolvedEscalation(
                id=e.id,
                phone=e.guest_phone or "",
                reason=e.human_escalation_reason or "",
                resolved_at=e.updated_at,
                resolved_by=e.resolved_by or "",
            )
            for e in resolved[:recent_limit]
        ],
    )
    return ValueCreated(items=items, escalations=summary)
