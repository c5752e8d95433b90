"""Volume-weighted average purchase price across several buys."""

from __future__ import annotations

import logging
import math
from typing import List, Sequence, Tuple

from investcalc.core.validation import REASON_OVERFLOW, FieldChecks, Outcome
from investcalc.schemas.average_cost import (
    AverageCostResult,
    PurchaseEntry,
    PurchaseSummaryRow,
)

logger = logging.getLogger(__name__)


def entry_quantity(entry: PurchaseEntry) -> float:
    """Units bought by one entry; zero unless both amount and price are positive."""
    amount = entry.amount or 0.0
    price = entry.unit_price or 0.0
    if amount > 0 and price > 0:
        return amount / price
    return 0.0


def purchase_totals(entries: Sequence[PurchaseEntry]) -> Tuple[float, float]:
    """Total invested and total units over the entries that bought something."""
    total_investment = 0.0
    total_quantity = 0.0
    for entry in entries:
        quantity = entry_quantity(entry)
        if quantity > 0:
            total_investment += entry.amount
            total_quantity += quantity
    return total_investment, total_quantity


def _totals_overflow(total_investment: float, total_quantity: float) -> bool:
    if not (math.isfinite(total_investment) and math.isfinite(total_quantity)):
        return True
    return total_quantity > 0 and not math.isfinite(total_investment / total_quantity)


def aggregate(entries: Sequence[PurchaseEntry]) -> AverageCostResult:
    """Sum invested money and units, then divide for the average unit price.

    Entries with a non-positive amount or price add nothing to either total
    but are still listed in the summary rows.
    """
    total_investment, total_quantity = purchase_totals(entries)
    rows: List[PurchaseSummaryRow] = [
        PurchaseSummaryRow(
            index=index,
            amount=entry.amount,
            unit_price=entry.unit_price,
            quantity=entry_quantity(entry),
        )
        for index, entry in enumerate(entries, start=1)
    ]

    average_price = 0.0
    is_unbounded = False
    if total_quantity > 0:
        average_price = total_investment / total_quantity
    elif total_investment > 0:
        # Money invested without any units bought has no finite average.
        is_unbounded = True

    logger.debug(
        "aggregated %d entries: invested=%s quantity=%s",
        len(rows),
        total_investment,
        total_quantity,
    )
    return AverageCostResult(
        total_investment=total_investment,
        total_quantity=total_quantity,
        average_price=average_price,
        is_unbounded=is_unbounded,
        entries=rows,
    )


def check_purchase_entries(entries: Sequence[PurchaseEntry]) -> FieldChecks:
    checks = FieldChecks()
    for position, entry in enumerate(entries):
        checks.required(f"entries.{position}.amount", entry.amount)
        checks.positive(f"entries.{position}.unit_price", entry.unit_price)
    return checks


def compute_average_cost(entries: Sequence[PurchaseEntry]) -> Outcome[AverageCostResult]:
    """Validate every entry, then aggregate when all of them pass."""
    error = check_purchase_entries(entries).error()
    if error is not None:
        logger.debug("purchase entries rejected: %s", error)
        return Outcome(error=error)

    if _totals_overflow(*purchase_totals(entries)):
        checks = FieldChecks()
        for position, entry in enumerate(entries):
            if entry_quantity(entry) > 0:
                checks.fail(f"entries.{position}.amount", REASON_OVERFLOW)
                checks.fail(f"entries.{position}.unit_price", REASON_OVERFLOW)
        error = checks.error()
        logger.debug("purchase totals overflowed: %s", error)
        return Outcome(error=error)
    return Outcome(result=aggregate(entries))
