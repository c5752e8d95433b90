"""Data contracts for compounding simulations."""

from __future__ import annotations

from enum import IntEnum
from typing import Annotated, Any, List, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field

from investcalc.schemas.common import RawNumber, ReturnPercent


class CompoundingFrequency(IntEnum):
    """Compounding periods per year."""

    ANNUAL = 1
    SEMIANNUAL = 2
    QUARTERLY = 4
    MONTHLY = 12
    DAILY = 365

    @classmethod
    def resolve(cls, value: Any) -> Optional["CompoundingFrequency"]:
        """Look up a frequency by member, period count or name; None if unknown."""
        if isinstance(value, cls):
            return value
        if isinstance(value, bool):
            return None
        if isinstance(value, float) and value.is_integer():
            value = int(value)
        if isinstance(value, int):
            try:
                return cls(value)
            except ValueError:
                return None
        if isinstance(value, str):
            key = value.strip().lower()
            if key.isdigit():
                try:
                    return cls.resolve(int(key))
                except ValueError:
                    # digit strings past the int conversion limit
                    return None
            return _FREQUENCY_NAMES.get(key)
        return None


_FREQUENCY_NAMES = {
    "annual": CompoundingFrequency.ANNUAL,
    "annually": CompoundingFrequency.ANNUAL,
    "yearly": CompoundingFrequency.ANNUAL,
    "semiannual": CompoundingFrequency.SEMIANNUAL,
    "semiannually": CompoundingFrequency.SEMIANNUAL,
    "quarterly": CompoundingFrequency.QUARTERLY,
    "monthly": CompoundingFrequency.MONTHLY,
    "daily": CompoundingFrequency.DAILY,
}


def _parse_frequency(value: Any) -> Optional[CompoundingFrequency]:
    # An empty selection falls back to annual compounding; anything
    # unrecognised resolves to None and is flagged by the validator.
    if value is None or value == "":
        return CompoundingFrequency.ANNUAL
    return CompoundingFrequency.resolve(value)


FrequencyField = Annotated[Optional[CompoundingFrequency], BeforeValidator(_parse_frequency)]


class CompoundingInput(BaseModel):
    """Inputs required to simulate compounding growth."""

    model_config = ConfigDict(extra="forbid")

    principal: RawNumber = Field(None, description="Initial amount invested at period 0.")
    annual_rate_percent: RawNumber = Field(
        None,
        description="Annual interest rate in percent (e.g. 5 for 5%).",
    )
    years: RawNumber = Field(None, description="Investment horizon in years.")
    compounding_frequency: FrequencyField = Field(
        CompoundingFrequency.ANNUAL,
        description="Compounding periods per year.",
    )
    contribution_per_period: RawNumber = Field(
        None,
        description="Amount added at the end of every period; empty means none.",
    )


class PeriodRecord(BaseModel):
    """Single row of a compounding ledger."""

    period_index: int = Field(..., ge=1)
    starting_balance: float
    interest_earned: float
    contribution: float = Field(..., ge=0)
    ending_balance: float
    cumulative_return: ReturnPercent


class CompoundingResult(BaseModel):
    """Simulated ledger and totals."""

    final_balance: float
    overall_return: ReturnPercent
    periods_per_year: int = Field(..., ge=1)
    total_periods: int = Field(..., ge=0)
    total_contributions: float = Field(..., ge=0)
    total_interest: float
    ledger: List[PeriodRecord]
