"""
tests/test_records.py

Tolerant construction of records from untyped upstream rows.
"""

from __future__ import annotations

import math
from datetime import datetime, timedelta, timezone

import pytest

from records.coercion import (
    to_optional_bool,
    to_optional_datetime,
    to_optional_float,
    to_optional_str,
)
from records.models import (
    CashflowSummary,
    ChatMessage,
    ExecutionRecord,
    HistoryEntry,
    TransactionRecord,
)


class TestCoercion:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [(3, 3.0), ("4.5", 4.5), (" 7 ", 7.0), ("", None), ("abc", None), (True, None), (None, None)],
    )
    def test_float(self, raw, expected) -> None:
        assert to_optional_float(raw) == expected

    @pytest.mark.parametrize("raw", [math.nan, math.inf, "nan", "-inf"])
    def test_float_rejects_non_finite(self, raw) -> None:
        assert to_optional_float(raw) is None

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [(True, True), ("true", True), ("YES", True), (1, True), ("false", False), (0, False), ("maybe", None), (None, None)],
    )
    def test_bool(self, raw, expected) -> None:
        assert to_optional_bool(raw) is expected

    def test_str(self) -> None:
        assert to_optional_str(None) is None
        assert to_optional_str(12) == "12"

    def test_datetime_trailing_z(self) -> None:
        assert to_optional_datetime("2026-03-01T12:00:00Z") == datetime(2026, 3, 1, 12, tzinfo=timezone.utc)

    def test_datetime_naive_assumed_utc(self) -> None:
        parsed = to_optional_datetime("2026-03-01T12:00:00")
        assert parsed is not None
        assert parsed.utcoffset() == timedelta(0)

    def test_datetime_offset_kept(self) -> None:
        parsed = to_optional_datetime("2026-03-01T12:00:00+01:00")
        assert parsed == datetime(2026, 3, 1, 11, tzinfo=timezone.utc)

    @pytest.mark.parametrize("raw", ["", "yesterday", 1700000000, None])
    def test_datetime_unparseable(self, raw) -> None:
        assert to_optional_datetime(raw) is None


class TestExecutionRecord:
    def test_from_mapping(self) -> None:
        record = ExecutionRecord.from_mapping(
            {
                "execution_id": 991,
                "workflow_name": "lara",
                "status": "success",
                "started_at": "2026-03-01T12:00:00Z",
                "stopped_at": "2026-03-01T12:00:02Z",
                "total_charge": "120.5",
                "messages_sent": "3",
                "human_escalation_triggered": "true",
                "escalation_status": "resolved",
                "workflow_output": {"phone": "+39 333 000", "resolved_by": "Giulia"},
            }
        )
        assert record.id == "991"
        assert record.total_charge == 120.5
        assert record.messages_sent == 3.0
        assert record.is_finished
        assert record.has_escalation
        assert record.is_escalation_resolved
        assert record.guest_phone == "+39 333 000"
        assert record.resolved_by == "Giulia"

    def test_falls_back_to_id_and_ignores_bad_fields(self) -> None:
        record = ExecutionRecord.from_mapping(
            {"id": "abc", "total_charge": "n/a", "stopped_at": "never", "workflow_output": "oops"}
        )
        assert record.id == "abc"
        assert record.total_charge is None
        assert record.stopped_at is None
        assert not record.is_finished
        assert record.guest_phone is None

    def test_finished_flag_without_stop_time(self) -> None:
        assert ExecutionRecord(finished=True).is_finished

    @pytest.mark.parametrize(
        "fields",
        [{"human_escalation_triggered": True}, {"escalation_status": "OPEN"}, {"escalation_priority": "high"}],
    )
    def test_escalation_signals(self, fields) -> None:
        assert ExecutionRecord(**fields).has_escalation

    def test_reason_alone_is_not_an_escalation(self) -> None:
        assert not ExecutionRecord(human_escalation_reason="guest asked").has_escalation


class TestTransactionAndCashflow:
    def test_transaction_from_mapping(self) -> None:
        tx = TransactionRecord.from_mapping(
            {"id": 7, "guest": "Rossi", "total_amount": "€ 25,00", "created_at": "2026-02-01T08:00:00Z"}
        )
        assert tx.id == "7"
        assert tx.code == ""
        assert tx.payment_method is None
        assert tx.created_at == datetime(2026, 2, 1, 8, tzinfo=timezone.utc)

    def test_cashflow_summary_from_mapping(self) -> None:
        summary = CashflowSummary.from_mapping(
            {"total_revenue": "1500", "transaction_count": 4, "categories": {"tax": 14, "breakfast": "bad"}}
        )
        assert summary.total_revenue == 1500.0
        assert summary.transaction_count == 4
        assert summary.categories.tax == 14.0
        assert summary.categories.breakfast == 0.0
        assert summary.categories.services_total == 14.0

    def test_cashflow_summary_without_categories(self) -> None:
        assert CashflowSummary.from_mapping({}).categories.services_total == 0.0


class TestHistoryEntry:
    def test_message_as_json_string(self) -> None:
        entry = HistoryEntry.from_mapping(
            {"id": "12", "session_id": "s-1", "message": '{"type": "AI", "content": "Ciao"}'}
        )
        assert entry.id == 12
        assert entry.message == ChatMessage(type="ai", content="Ciao")

    def test_structured_content_is_encoded(self) -> None:
        entry = HistoryEntry.from_mapping(
            {"id": 1, "session_id": "s", "message": {"type": "ai", "content": {"response": "Hi"}}}
        )
        assert entry.message.content == '{"response": "Hi"}'

    def test_non_json_message_string_becomes_content(self) -> None:
        entry = HistoryEntry.from_mapping({"id": 2, "session_id": "s", "message": "plain"})
        assert entry.message.content == "plain"
        assert entry.message.type == ""
