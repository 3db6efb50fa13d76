"""
app/schemas/metrics.py

Request and response schemas for the dashboard, growth and cashflow endpoints.

Request records are deliberately permissive: upstream rows are untrusted,
so numbers may arrive as strings and unknown columns are ignored.  They
are converted to the frozen domain records before any calculation.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from records.models import CashflowSummary, ExecutionRecord, TransactionRecord

Number = float | str | None
Flag = bool | str | None


class _Row(BaseModel):
    model_config = ConfigDict(extra="ignore")


class ExecutionRow(_Row):
    """
    One ``executions`` row as supplied by the caller.
    """

    execution_id: str | int | None = None
    id: str | int | None = None
    workflow_name: str | None = None
    status: str | None = None
    started_at: str | None = None
    stopped_at: str | None = None
    updated_at: str | None = None
    governance_verdict: str | None = None
    total_charge: Number = None
    value_captured: Number = None
    time_saved_seconds: Number = None
    messages_sent: Number = None
    human_escalation_triggered: Flag = None
    escalation_status: str | None = None
    escalation_priority: str | None = None
    human_escalation_reason: str | None = None
    finished: Flag = None
    workflow_output: dict[str, Any] | None = None

    def to_record(self) -> ExecutionRecord:
        return ExecutionRecord.from_mapping(self.model_dump())


class TransactionRow(_Row):
    """
    One cashflow ledger row as supplied by the caller.
    """

    id: str | int | None = None
    guest: str | None = None
    code: str | None = None
    total_amount: Number = None
    payment_method: str | None = None
    collection_date: str | None = None
    created_at: str | None = None

    def to_record(self) -> TransactionRecord:
        return TransactionRecord.from_mapping(self.model_dump())


class CategoryTotalsSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    tax: float = 0.0
    checkout: float = 0.0
    checkin: float = 0.0
    breakfast: float = 0.0


class CashflowSummarySchema(BaseModel):
    """
    Ledger snapshot; accepted as a dashboard override and returned by
    the cashflow endpoint.
    """

    model_config = ConfigDict(from_attributes=True)

    total_revenue: float = 0.0
    transaction_count: int = Field(default=0, ge=0)
    avg_transaction: float = 0.0
    cash_count: int = Field(default=0, ge=0)
    stripe_count: int = Field(default=0, ge=0)
    transfer_count: int = Field(default=0, ge=0)
    service_count: int = Field(default=0, ge=0)
    categories: CategoryTotalsSchema = Field(default_factory=CategoryTotalsSchema)

    def to_record(self) -> CashflowSummary:
        return CashflowSummary.from_mapping(self.model_dump())


class KPIResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    label: str
    value: str
    trend: float
    trend_label: str
    subtext: str
    status: Literal["success", "warning", "error", "neutral"]


class DashboardRequest(BaseModel):
    executions: list[ExecutionRow] = Field(default_factory=list)
    transactions: list[TransactionRow] | None = None
    cashflow: CashflowSummarySchema | None = None
    open_escalations: int | None = Field(default=None, ge=0)
    messages_count: int = Field(default=0, ge=0)


class DashboardResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    kpis: list[KPIResponse]
    cashflow: CashflowSummarySchema | None = None
    open_escalations: int


class GrowthRequest(BaseModel):
    transactions: list[TransactionRow] = Field(default_factory=list)
    executions: list[ExecutionRow] = Field(default_factory=list)


class WinResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    value: str
    date: str
    status: str


class ValueItemResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    label: str
    value: str


class ResolvedEscalationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    phone: str
    reason: str
    resolved_at: datetime | None = None
    resolved_by: str


class EscalationSummaryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    total: int
    open: int
    resolved: int
    resolution_rate: int
    recent_resolutions: list[ResolvedEscalationResponse] = Field(default_factory=list)


class ValueCreatedResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    items: list[ValueItemResponse]
    escalations: EscalationSummaryResponse


class GrowthResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    kpis: list[KPIResponse]
    wins: list[WinResponse]
    value_created: ValueCreatedResponse


class CashflowRequest(BaseModel):
    transactions: list[TransactionRow] = Field(default_factory=list)
