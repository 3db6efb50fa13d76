"""
cashflow/classifier.py

Amount-driven revenue classification for cashflow transactions.

The ledger carries no category column, so each transaction is bucketed
from its amount alone.  Rules are evaluated top to bottom and the first
match wins:

1. City tax:     amount rounds to a multiple of €7 for 1-8 person-nights
                 (7, 14, ..., 56).
2. Checkout fee: 15 <= amount <= 40.
3. Check-in fee: 10 <= amount <= 35.  Amounts in [15, 35] satisfy both
                 fee ranges; checkout is evaluated first and wins the tie.
4. Breakfast:    50 < amount <= 150 (medium-sized service).
5. Unclassified: everything else, including non-positive or
                 unparseable amounts and small amounts outside both fee
                 ranges.

Unclassified transactions still count toward the total transaction count
used as the upsell-rate denominator.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

from currency.codec import parse_currency
from records.models import CategoryTotals, TransactionRecord

logger = logging.getLogger(__name__)

CITY_TAX_PER_NIGHT = 7
CITY_TAX_AMOUNTS: frozenset[int] = frozenset(CITY_TAX_PER_NIGHT * n for n in range(1, 9))

SMALL_SERVICE_MAX = 50.0
CHECKOUT_FEE_RANGE = (15.0, 40.0)
CHECKIN_FEE_RANGE = (10.0, 35.0)
MEDIUM_SERVICE_MAX = 150.0


class TransactionCategory(str, Enum):
    TAX = "tax"
    CHECKOUT = "checkout"
    CHECKIN = "checkin"
    BREAKFAST = "breakfast"
    UNCLASSIFIED = "unclassified"


@dataclass(frozen=True)
class CategoryBreakdown:
    """
    Roll-up of a batch of classified transactions.

    ``service_count`` counts every transaction that landed in a known
    category; ``transaction_count`` counts all of them.
    """

    totals: CategoryTotals
    service_count: int
    transaction_count: int

    @property
    def services_total(self) -> float:
        return self.totals.services_total

    @property
    def upsell_rate(self) -> float:
        """Share of transactions in a known category, as a percentage."""
        if self.transaction_count == 0:
            return 0.0
        return self.service_count / self.transaction_count * 100


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def _in_range(amount: float, bounds: tuple[float, float]) -> bool:
    low, high = bounds
    return low <= amount <= high


def classify_amount(amount: float) -> TransactionCategory:
    """Classify a numeric amount using the precedence rules above."""
    if amount <= 0:
        return TransactionCategory.UNCLASSIFIED
    if _round_half_up(amount) in CITY_TAX_AMOUNTS:
        return TransactionCategory.TAX
    if amount <= SMALL_SERVICE_MAX:
        if _in_range(amount, CHECKOUT_FEE_RANGE):
            return TransactionCategory.CHECKOUT
        if _in_range(amount, CHECKIN_FEE_RANGE):
            return TransactionCategory.CHECKIN
        return TransactionCategory.UNCLASSIFIED
    if amount <= MEDIUM_SERVICE_MAX:
        return TransactionCategory.BREAKFAST
    return TransactionCategory.UNCLASSIFIED


def classify_transaction(transaction: TransactionRecord) -> TransactionCategory:
    """Classify *transaction* from its ``total_amount`` display string only."""
    return classify_amount(parse_currency(transaction.total_amount))


def summarize_categories(transactions: Iterable[TransactionRecord]) -> CategoryBreakdown:
    """Sum revenue per category and count classified transactions."""
    sums = {category: 0.0 for category in TransactionCategory}
    service_count = 0
    transaction_count = 0

    for transaction in transactions:
        transaction_count += 1
        amount = parse_currency(transaction.total_amount)
        category = classify_amount(amount)
        if category is TransactionCategory.UNCLASSIFIED:
            continue
        sums[category] += amount
        service_count += 1

    breakdown = CategoryBreakdown(
        totals=CategoryTotals(
            tax=sums[TransactionCategory.TAX],
            checkout=sums[TransactionCategory.CHECKOUT],
            checkin=sums[TransactionCategory.CHECKIN],
            breakfast=sums[TransactionCategory.BREAKFAST],
        ),
        service_count=service_count,
        transaction_count=transaction_count,
    )
    logger.debug(
        "Classified %d/%d transactions into service categories (total=%.2f)",
        service_count,
        transaction_count,
        breakdown.services_total,
    )
    return breakdown
