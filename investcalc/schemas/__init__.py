"""Pydantic models exchanged with the calculation engine."""

from investcalc.schemas.average_cost import (
    AverageCostRequest,
    AverageCostResult,
    PurchaseEntry,
    PurchaseSummaryRow,
)
from investcalc.schemas.common import ReturnPercent, parse_raw_number
from investcalc.schemas.compounding import (
    CompoundingFrequency,
    CompoundingInput,
    CompoundingResult,
    PeriodRecord,
)

__all__ = [
    "AverageCostRequest",
    "AverageCostResult",
    "CompoundingFrequency",
    "CompoundingInput",
    "CompoundingResult",
    "PeriodRecord",
    "PurchaseEntry",
    "PurchaseSummaryRow",
    "ReturnPercent",
    "parse_raw_number",
]
