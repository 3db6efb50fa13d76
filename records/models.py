"""
records/models.py

Immutable value records consumed by the metrics library.

All records are built by the caller from rows that were already fetched
and deserialized elsewhere.  Every field is optional and untrusted;
``from_mapping`` constructors coerce what they can and leave the rest at
the documented default rather than raising.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from records.coercion import (
    to_optional_bool,
    to_optional_datetime,
    to_optional_float,
    to_optional_str,
)


# ---------------------------------------------------------------------------
# Executions
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ExecutionRecord:
    """
    One automated workflow run as reported by the workflow engine.

    A run counts as *finished* for metric purposes when ``finished`` is
    true or ``stopped_at`` is present.  Unfinished runs never contribute
    to rate, latency or decision-integrity metrics.
    """

    id: str = ""
    workflow_name: str | None = None
    status: str | None = None
    started_at: datetime | None = None
    stopped_at: datetime | None = None
    governance_verdict: str | None = None
    total_charge: float | None = None
    value_captured: float | None = None
    time_saved_seconds: float | None = None
    messages_sent: float | None = None
    human_escalation_triggered: bool | None = None
    escalation_status: str | None = None
    escalation_priority: str | None = None
    human_escalation_reason: str | None = None
    finished: bool | None = None
    updated_at: datetime | None = None
    guest_phone: str | None = None
    resolved_by: str | None = None

    def __post_init__(self) -> None:
        # Naive timestamps are read as UTC so spans never mix naive and aware values.
        for name in ("started_at", "stopped_at", "updated_at"):
            object.__setattr__(self, name, to_optional_datetime(getattr(self, name)))

    @property
    def is_finished(self) -> bool:
        return self.finished is True or self.stopped_at is not None

    @property
    def has_escalation(self) -> bool:
        """True when any escalation signal is present on the run."""
        return bool(
            self.human_escalation_triggered
            or self.escalation_status
            or self.escalation_priority
        )

    @property
    def is_escalation_resolved(self) -> bool:
        return (self.escalation_status or "").strip().upper() == "RESOLVED"

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "ExecutionRecord":
        """Build a record from an ``executions`` row."""
        output = data.get("workflow_output")
        if not isinstance(output, Mapping):
            output = {}

        return cls(
            id=to_optional_str(data.get("execution_id")) or to_optional_str(data.get("id")) or "",
            workflow_name=to_optional_str(data.get("workflow_name")),
            status=to_optional_str(data.get("status")),
            started_at=to_optional_datetime(data.get("started_at")),
            stopped_at=to_optional_datetime(data.get("stopped_at")),
            governance_verdict=to_optional_str(data.get("governance_verdict")),
            total_charge=to_optional_float(data.get("total_charge")),
            value_captured=to_optional_float(data.get("value_captured")),
            time_saved_seconds=to_optional_float(data.get("time_saved_seconds")),
            messages_sent=to_optional_float(data.get("messages_sent")),
            human_escalation_triggered=to_optional_bool(data.get("human_escalation_triggered")),
            escalation_status=to_optional_str(data.get("escalation_status")),
            escalation_priority=to_optional_str(data.get("escalation_priority")),
            human_escalation_reason=to_optional_str(data.get("human_escalation_reason")),
            finished=to_optional_bool(data.get("finished")),
            updated_at=to_optional_datetime(data.get("updated_at")),
            guest_phone=to_optional_str(output.get("phone")),
            resolved_by=to_optional_str(output.get("resolved_by")),
        )


# ---------------------------------------------------------------------------
# Transactions and cashflow
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class TransactionRecord:
    """
    One collected payment from the cashflow ledger.

    ``total_amount`` is the display string stored upstream
    (e.g. ``"€ 1.250,00"``), not a number.
    """

    id: str = ""
    guest: str = ""
    code: str = ""
    total_amount: str = ""
    payment_method: str | None = None
    collection_date: str | None = None
    created_at: datetime | None = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "TransactionRecord":
        return cls(
            id=to_optional_str(data.get("id")) or "",
            guest=to_optional_str(data.get("guest")) or "",
            code=to_optional_str(data.get("code")) or "",
            total_amount=to_optional_str(data.get("total_amount")) or "",
            payment_method=to_optional_str(data.get("payment_method")),
            collection_date=to_optional_str(data.get("collection_date")),
            created_at=to_optional_datetime(data.get("created_at")),
        )


@dataclass(frozen=True)
class CategoryTotals:
    """Revenue per heuristic transaction category."""

    tax: float = 0.0
    checkout: float = 0.0
    checkin: float = 0.0
    breakfast: float = 0.0

    @property
    def services_total(self) -> float:
        """Sum of every classified category."""
        return self.tax + self.checkout + self.checkin + self.breakfast


@dataclass(frozen=True)
class CashflowSummary:
    """
    Precomputed cashflow snapshot.

    When handed to the dashboard aggregator, ``total_revenue`` replaces
    the value derived from executions.
    """

    total_revenue: float = 0.0
    transaction_count: int = 0
    avg_transaction: float = 0.0
    cash_count: int = 0
    stripe_count: int = 0
    transfer_count: int = 0
    service_count: int = 0
    categories: CategoryTotals = field(default_factory=CategoryTotals)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "CashflowSummary":
        raw_categories = data.get("categories")
        if not isinstance(raw_categories, Mapping):
            raw_categories = {}

        def _num(source: Mapping[str, Any], key: str) -> float:
            return to_optional_float(source.get(key)) or 0.0

        return cls(
            total_revenue=_num(data, "total_revenue"),
            transaction_count=int(_num(data, "transaction_count")),
            avg_transaction=_num(data, "avg_transaction"),
            cash_count=int(_num(data, "cash_count")),
            stripe_count=int(_num(data, "stripe_count")),
            transfer_count=int(_num(data, "transfer_count")),
            service_count=int(_num(data, "service_count")),
            categories=CategoryTotals(
                tax=_num(raw_categories, "tax"),
                checkout=_num(raw_categories, "checkout"),
                checkin=_num(raw_categories, "checkin"),
                breakfast=_num(raw_categories, "breakfast"),
            ),
        )


# ---------------------------------------------------------------------------
# Chat history
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ChatMessage:
    """
    Raw chat message body.

    ``content`` may itself be a JSON-encoded array, object or string.
    """

    type: str = ""
    content: str = ""

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "ChatMessage":
        content = data.get("content")
        if content is None:
            content = ""
        elif not isinstance(content, str):
            # Structured payloads are re-encoded so the sanitizer sees them as text.
            content = json.dumps(content, default=str)
        return cls(
            type=(to_optional_str(data.get("type")) or "").strip().lower(),
            content=content,
        )


@dataclass(frozen=True)
class HistoryEntry:
    """One row of the chat history table."""

    id: int
    session_id: str
    message: ChatMessage
    created_at: datetime | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "created_at", to_optional_datetime(self.created_at))

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "HistoryEntry":
        raw_message = data.get("message")
        if isinstance(raw_message, str):
            try:
                raw_message = json.loads(raw_message)
            except (json.JSONDecodeError, RecursionError):
                raw_message = {"content": raw_message}
        if not isinstance(raw_message, Mapping):
            raw_message = {}

        return cls(
            id=int(to_optional_float(data.get("id")) or 0),
            session_id=to_optional_str(data.get("session_id")) or "",
            message=ChatMessage.from_mapping(raw_message),
            created_at=to_optional_datetime(data.get("created_at")),
        )
