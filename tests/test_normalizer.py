"""
tests/test_normalizer.py

Label normalization is total: every function accepts any string, the
empty string and ``None`` without raising.
"""

from __future__ import annotations

import pytest

from normalization.normalizer import (
    FAILED_STATUSES,
    get_priority_variant,
    get_status_color,
    get_status_variant,
    map_execution_status,
    normalize_platform,
    normalize_priority,
    normalize_risk_level,
    normalize_status,
    normalize_verdict,
)

ODD_INPUTS = ["", None, "   ", "¿?", "SUCCESS!!", "0"]


class TestNormalizeStatus:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("success", "Completed"),
            ("FINISHED", "Completed"),
            ("failed", "Failed"),
            ("Error", "Failed"),
            ("pending", "In Progress"),
            ("RUNNING", "In Progress"),
        ],
    )
    def test_known_values(self, raw: str, expected: str) -> None:
        assert normalize_status(raw) == expected

    def test_unknown_passes_through(self) -> None:
        assert normalize_status("Escalated") == "Escalated"

    @pytest.mark.parametrize("raw", ["", None])
    def test_empty_defaults_to_pending(self, raw: str | None) -> None:
        assert normalize_status(raw) == "Pending"

    def test_surrounding_whitespace_ignored(self) -> None:
        assert normalize_status(" success ") == "Completed"
        assert normalize_priority("  HIGH\n") == "High"

    def test_failed_statuses_match_status_map(self) -> None:
        assert FAILED_STATUSES == {"failed", "error"}
        assert all(normalize_status(s) == "Failed" for s in FAILED_STATUSES)


class TestMapExecutionStatus:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("success", "Completed"),
            ("running", "In Progress"),
            ("error", "Failed"),
            ("waiting", "Pending"),
            ("cancelled", "Failed"),
            ("CANCELLED", "Failed"),
            ("new", "Pending"),
            (None, "Pending"),
        ],
    )
    def test_mapping(self, raw: str | None, expected: str) -> None:
        assert map_execution_status(raw) == expected


class TestNormalizePriority:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("critical", "Critical"),
            ("URGENT", "Critical"),
            ("High", "High"),
            ("medium", "Medium"),
            ("low", "Low"),
            ("whatever", "Low"),
            ("", "Low"),
            (None, "Low"),
        ],
    )
    def test_mapping(self, raw: str | None, expected: str) -> None:
        assert normalize_priority(raw) == expected

    @pytest.mark.parametrize("raw", ["urgent", "high", "medium", "", None, "x"])
    def test_risk_level_is_alias(self, raw: str | None) -> None:
        assert normalize_risk_level(raw) == normalize_priority(raw)


class TestNormalizeVerdict:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("passed", "PASSED"),
            ("OK", "PASSED"),
            ("flagged", "FLAGGED"),
            ("Warning", "FLAGGED"),
            ("failed", "FAILED"),
            ("unknown", "FAILED"),
            ("", "FAILED"),
            (None, "FAILED"),
        ],
    )
    def test_mapping(self, raw: str | None, expected: str) -> None:
        assert normalize_verdict(raw) == expected


class TestNormalizePlatform:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("whatsapp", "WhatsApp"),
            ("WhatsApp Business", "WhatsApp"),
            ("booking", "Booking.com"),
            ("Booking.com", "Booking.com"),
            ("AIRBNB", "Airbnb"),
            ("expedia", "Expedia"),
            ("Vrbo", "Vrbo"),
            ("", "Direct"),
            (None, "Direct"),
        ],
    )
    def test_mapping(self, raw: str | None, expected: str) -> None:
        assert normalize_platform(raw) == expected


class TestBadgeVariants:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("Completed", "success"),
            ("active", "success"),
            ("Failed", "error"),
            ("In Progress", "warning"),
            ("pending", "warning"),
            ("archived", "neutral"),
        ],
    )
    def test_status_variant(self, raw: str, expected: str) -> None:
        assert get_status_variant(raw) == expected

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("Critical", "error"),
            ("High", "warning"),
            ("Medium", "info"),
            ("Low", "neutral"),
        ],
    )
    def test_priority_variant(self, raw: str, expected: str) -> None:
        assert get_priority_variant(raw) == expected

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("resolved", "success"),
            ("CONFIRMED", "success"),
            ("trialing", "warning"),
            ("in_progress", "warning"),
            ("canceled", "error"),
            ("blocked", "error"),
            ("draft", "info"),
        ],
    )
    def test_status_color(self, raw: str, expected: str) -> None:
        assert get_status_color(raw) == expected

    def test_normalized_status_maps_to_variant(self) -> None:
        assert get_status_variant(normalize_status("running")) == "warning"
        assert get_priority_variant(normalize_priority("urgent")) == "error"


class TestTotality:
    @pytest.mark.parametrize("raw", ODD_INPUTS)
    def test_no_function_raises(self, raw: str | None) -> None:
        for fn in (
            normalize_status,
            map_execution_status,
            normalize_priority,
            normalize_risk_level,
            normalize_verdict,
            normalize_platform,
            get_status_variant,
            get_priority_variant,
            get_status_color,
        ):
            assert isinstance(fn(raw), str)
