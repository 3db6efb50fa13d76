"""
cashflow/aggregation.py

Cashflow ledger roll-ups: the summary snapshot used by the dashboard and
the "big wins" list shown on the growth page.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from cashflow.classifier import summarize_categories
from currency.codec import parse_currency
from records.models import CashflowSummary, TransactionRecord

logger = logging.getLogger(__name__)

DEFAULT_WIN_THRESHOLD = 500.0
DEFAULT_MAX_WINS = 10

_CASH_KEYWORDS = ("contanti", "cash")
_STRIPE_KEYWORDS = ("stripe",)
_TRANSFER_KEYWORDS = ("bonifico", "transfer")


@dataclass(frozen=True)
class Win:
    """A single high-value transaction highlighted on the growth page."""

    id: str
    title: str
    value: str
    date: str
    status: str = "Captured"


def _payment_bucket(method: str | None) -> str | None:
    lowered = (method or "").lower()
    if any(keyword in lowered for keyword in _CASH_KEYWORDS):
        return "cash"
    if any(keyword in lowered for keyword in _STRIPE_KEYWORDS):
        return "stripe"
    if any(keyword in lowered for keyword in _TRANSFER_KEYWORDS):
        return "transfer"
    return None


def build_cashflow_summary(transactions: Sequence[TransactionRecord]) -> CashflowSummary:
    """
    Aggregate a batch of ledger transactions.

    Payment methods are matched by keyword (Italian and English labels);
    unknown methods count toward the total only.
    """
    total_revenue = 0.0
    counts = {"cash": 0, "stripe": 0, "transfer": 0}

    for transaction in transactions:
        total_revenue += parse_currency(transaction.total_amount)
        bucket = _payment_bucket(transaction.payment_method)
        if bucket is not None:
            counts[bucket] += 1

    transaction_count = len(transactions)
    breakdown = summarize_categories(transactions)
    avg_transaction = total_revenue / transaction_count if transaction_count else 0.0

    logger.debug(
        "Cashflow summary: %d transactions, revenue=%.2f",
        transaction_count,
        total_revenue,
    )
    return CashflowSummary(
        total_revenue=total_revenue,
        transaction_count=transaction_count,
        avg_transaction=avg_transaction,
        cash_count=counts["cash"],
        stripe_count=counts["stripe"],
        transfer_count=counts["transfer"],
        service_count=breakdown.service_count,
        categories=breakdown.totals,
    )


def select_wins(
    transactions: Sequence[TransactionRecord],
    *,
    threshold: float = DEFAULT_WIN_THRESHOLD,
    limit: int = DEFAULT_MAX_WINS,
) -> list[Win]:
    """Return up to *limit* transactions worth at least *threshold*, in input order."""
    wins: list[Win] = []
    for transaction in transactions:
        if len(wins) >= limit:
            break
        if parse_currency(transaction.total_amount) < threshold:
            continue
        if transaction.collection_date:
            date = transaction.collection_date
        elif transaction.created_at is not None:
            date = transaction.created_at.date().isoformat()
        else:
            date = ""
        wins.append(
            Win(
                id=transaction.code or transaction.id[:8],
                title=f"{transaction.guest} - {transaction.code}",
                value=transaction.total_amount,
                date=date,
            )
        )
    return wins
