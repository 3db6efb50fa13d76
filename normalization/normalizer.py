"""
normalization/normalizer.py

Canonicalization of free-text labels coming from upstream systems.

Statuses, priorities, governance verdicts and booking channels arrive
from several sources with inconsistent casing and vocabulary.  Every
function here is total: unknown, empty or ``None`` input degrades to a
documented default and nothing is ever raised.
"""

from __future__ import annotations

from typing import Literal

Priority = Literal["Critical", "High", "Medium", "Low"]
RiskLevel = Priority
Verdict = Literal["PASSED", "FLAGGED", "FAILED"]
BadgeVariant = Literal["success", "warning", "error", "info", "neutral"]

_STATUS_MAP: dict[str, str] = {
    "success": "Completed",
    "finished": "Completed",
    "failed": "Failed",
    "error": "Failed",
    "pending": "In Progress",
    "running": "In Progress",
}

# Raw run statuses that count as failures wherever runs are tallied.
FAILED_STATUSES: frozenset[str] = frozenset(k for k, v in _STATUS_MAP.items() if v == "Failed")

# Workflow-engine run states as shown in the execution log.
_EXECUTION_STATUS_MAP: dict[str, str] = {
    "success": "Completed",
    "running": "In Progress",
    "error": "Failed",
    "waiting": "Pending",
    "cancelled": "Failed",
}

_PRIORITY_MAP: dict[str, Priority] = {
    "critical": "Critical",
    "urgent": "Critical",
    "high": "High",
    "medium": "Medium",
}

_VERDICT_MAP: dict[str, Verdict] = {
    "PASSED": "PASSED",
    "OK": "PASSED",
    "FLAGGED": "FLAGGED",
    "WARNING": "FLAGGED",
}

# Checked in order; first keyword contained in the channel wins.
_PLATFORM_KEYWORDS: tuple[tuple[str, str], ...] = (
    ("whatsapp", "WhatsApp"),
    ("booking", "Booking.com"),
    ("airbnb", "Airbnb"),
    ("expedia", "Expedia"),
)

_STATUS_VARIANTS: dict[str, BadgeVariant] = {
    "completed": "success",
    "success": "success",
    "active": "success",
    "failed": "error",
    "error": "error",
    "in progress": "warning",
    "pending": "warning",
    "warning": "warning",
}

_PRIORITY_VARIANTS: dict[str, BadgeVariant] = {
    "critical": "error",
    "high": "warning",
    "medium": "info",
}

_STATUS_COLORS: dict[str, BadgeVariant] = {
    **{s: "success" for s in ("success", "active", "passed", "resolved", "confirmed")},
    **{s: "warning" for s in ("pending", "in_progress", "warning", "trialing")},
    **{s: "error" for s in ("failed", "error", "canceled", "blocked", "critical")},
}


def _key(raw: str | None) -> str:
    return (raw or "").strip().lower()


def normalize_status(raw: str | None) -> str:
    """
    Map an upstream status to Completed / Failed / In Progress.

    Unknown values pass through unchanged; empty values become ``"Pending"``.
    """
    return _STATUS_MAP.get(_key(raw)) or raw or "Pending"


def map_execution_status(raw: str | None) -> str:
    """Map a workflow-engine run state to the execution-log vocabulary."""
    return _EXECUTION_STATUS_MAP.get(_key(raw), "Pending")


def normalize_priority(raw: str | None) -> Priority:
    return _PRIORITY_MAP.get(_key(raw), "Low")


def normalize_risk_level(raw: str | None) -> RiskLevel:
    """Risk levels share the priority scale."""
    return normalize_priority(raw)


def normalize_verdict(raw: str | None) -> Verdict:
    """
    Map a governance verdict to PASSED / FLAGGED / FAILED.

    Anything unrecognised, including a missing verdict, is treated as FAILED.
    """
    return _VERDICT_MAP.get((raw or "").strip().upper(), "FAILED")


def normalize_platform(raw: str | None) -> str:
    channel = _key(raw)
    for keyword, label in _PLATFORM_KEYWORDS:
        if keyword in channel:
            return label
    return raw or "Direct"


def get_status_variant(status: str | None) -> BadgeVariant:
    return _STATUS_VARIANTS.get(_key(status), "neutral")


def get_priority_variant(priority: str | None) -> BadgeVariant:
    return _PRIORITY_VARIANTS.get(_key(priority), "neutral")


def get_status_color(status: str | None) -> BadgeVariant:
    return _STATUS_COLORS.get(_key(status), "info")
