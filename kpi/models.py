"""
kpi/models.py

Presentation-ready KPI record shared by the dashboard and growth formulas.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Literal

KPIStatus = Literal["success", "warning", "error", "neutral"]


@dataclass(frozen=True)
class KPI:
    """
    One labelled metric tile.

    ``value`` is already formatted for display.  ``trend`` is a
    placeholder and is always ``0``; nothing computes period-over-period
    movement yet.
    """

    id: str
    label: str
    value: str
    trend_label: str
    subtext: str
    status: KPIStatus
    trend: float = 0

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def find_kpi(kpis: list[KPI], kpi_id: str) -> KPI | None:
    """Return the KPI with *kpi_id*, or ``None``."""
    return next((kpi for kpi in kpis if kpi.id == kpi_id), None)
