"""Data contracts for the average purchase price calculation."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from investcalc.schemas.common import RawNumber


class PurchaseEntry(BaseModel):
    """One buy: money invested at a given unit price."""

    model_config = ConfigDict(extra="forbid")

    amount: RawNumber = Field(None, description="Amount invested in this purchase.")
    unit_price: RawNumber = Field(None, description="Price paid per unit; must be > 0.")


class AverageCostRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    entries: List[PurchaseEntry] = Field(default_factory=list)


class PurchaseSummaryRow(BaseModel):
    """Per-entry breakdown; entries that bought nothing stay listed with zero quantity."""

    index: int = Field(..., ge=1)
    amount: Optional[float]
    unit_price: Optional[float]
    quantity: float = Field(..., ge=0)


class AverageCostResult(BaseModel):
    """Totals and weighted average price across all purchases."""

    total_investment: float = Field(..., ge=0)
    total_quantity: float = Field(..., ge=0)
    average_price: float = Field(..., ge=0)
    is_unbounded: bool = Field(
        False,
        description="Set when money was invested but no units were acquired.",
    )
    entries: List[PurchaseSummaryRow] = Field(default_factory=list)
