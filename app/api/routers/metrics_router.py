"""
app/api/routers/metrics_router.py

Dashboard, growth and cashflow report endpoints.

Callers post record batches they have already fetched and tenant-scoped;
nothing here reads a database.  Malformed fields degrade individual KPIs
to their documented defaults instead of failing the request.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, status

from app.logging_utils import log_event
from app.schemas.metrics import (
    CashflowRequest,
    CashflowSummarySchema,
    DashboardRequest,
    DashboardResponse,
    GrowthRequest,
    GrowthResponse,
)
from app.services.dashboard_service import DashboardService, get_dashboard_service
from app.services.growth_service import GrowthService, get_growth_service
from cashflow.aggregation import build_cashflow_summary

logger = logging.getLogger(__name__)

router = APIRouter(tags=["metrics"])


@router.post(
    "/metrics/dashboard",
    response_model=DashboardResponse,
    status_code=status.HTTP_200_OK,
)
def dashboard_metrics(
    body: DashboardRequest,
    dashboard_service: DashboardService = Depends(get_dashboard_service),
) -> DashboardResponse:
    """
    Compute the twelve dashboard KPI tiles.

    ``cashflow`` overrides the ledger snapshot; otherwise it is derived
    from ``transactions`` when present.
    """
    report = dashboard_service.build_report(
        [row.to_record() for row in body.executions],
        cashflow=body.cashflow.to_record() if body.cashflow is not None else None,
        transactions=(
            [row.to_record() for row in body.transactions] if body.transactions else None
        ),
        open_escalations=body.open_escalations,
        messages_count=body.messages_count,
    )
    log_event(
        logger,
        logging.INFO,
        "dashboard_metrics",
        executions=len(body.executions),
        open_escalations=report.open_escalations,
    )
    return DashboardResponse.model_validate(report)


@router.post(
    "/metrics/growth",
    response_model=GrowthResponse,
    status_code=status.HTTP_200_OK,
)
def growth_metrics(
    body: GrowthRequest,
    growth_service: GrowthService = Depends(get_growth_service),
) -> GrowthResponse:
    """
    Compute growth KPI tiles, big wins and the value-created panel.
    """
    report = growth_service.build_report(
        [row.to_record() for row in body.transactions],
        [row.to_record() for row in body.executions],
    )
    log_event(
        logger,
        logging.INFO,
        "growth_metrics",
        transactions=len(body.transactions),
        wins=len(report.wins),
    )
    return GrowthResponse.model_validate(report)


@router.post(
    "/cashflow/summary",
    response_model=CashflowSummarySchema,
    status_code=status.HTTP_200_OK,
)
def cashflow_summary(body: CashflowRequest) -> CashflowSummarySchema:
    """
    Aggregate ledger transactions into a cashflow snapshot.
    """
    summary = build_cashflow_summary([row.to_record() for row in body.transactions])
    return CashflowSummarySchema.model_validate(summary)
