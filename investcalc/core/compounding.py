"""Period-by-period compounding simulation with optional recurring contributions."""

from __future__ import annotations

import logging
import math
from typing import List, Optional

from investcalc.config import DEFAULT_MAX_TOTAL_PERIODS
from investcalc.core.returns import percent_return
from investcalc.core.validation import REASON_OVERFLOW, FieldChecks, Outcome
from investcalc.schemas.compounding import (
    CompoundingFrequency,
    CompoundingInput,
    CompoundingResult,
    PeriodRecord,
)

logger = logging.getLogger(__name__)

# Absorbs float noise in years * periods_per_year (e.g. 2.9999999999 -> 3).
_PERIOD_EPSILON = 1e-9


def count_periods(years: float, frequency: CompoundingFrequency) -> int:
    """Number of whole periods in ``years``; fractional periods are dropped."""
    return max(int(math.floor(years * int(frequency) + _PERIOD_EPSILON)), 0)


def exceeds_period_limit(years: float, frequency: CompoundingFrequency, max_periods: int) -> bool:
    # Compare the raw product first; years * 365 can overflow to inf.
    raw_periods = years * int(frequency)
    if not math.isfinite(raw_periods) or raw_periods > max_periods + 1:
        return True
    return count_periods(years, frequency) > max_periods


def is_representable(result: CompoundingResult) -> bool:
    """False when any balance or return in ``result`` overflowed to inf or nan."""
    totals = (
        result.final_balance,
        result.total_interest,
        result.total_contributions,
        result.overall_return.value,
    )
    if not all(math.isfinite(value) for value in totals):
        return False
    return all(
        math.isfinite(row.ending_balance) and math.isfinite(row.cumulative_return.value)
        for row in result.ledger
    )


def simulate(
    principal: float,
    annual_rate_percent: float,
    years: float,
    frequency: CompoundingFrequency = CompoundingFrequency.ANNUAL,
    contribution_per_period: float = 0.0,
) -> CompoundingResult:
    """Step the balance through every compounding period.

    Order of operations (per period):
      1) Interest on the starting balance at annual_rate / periods_per_year.
      2) Add the contribution at the END of the period (no interest this period).
      3) Record the row; cumulative return is measured against the initial
         principal only, contributions are not part of the denominator.

    A non-positive contribution means "no contribution", never a withdrawal.
    Callers are expected to have validated the inputs already.
    """
    periods_per_year = int(frequency)
    total_periods = count_periods(years, frequency)
    rate_per_period = annual_rate_percent / 100 / periods_per_year
    contribution = contribution_per_period if contribution_per_period > 0 else 0.0

    logger.debug(
        "simulating %d periods (%d/year) at %.6f per period",
        total_periods,
        periods_per_year,
        rate_per_period,
    )

    balance = float(principal)
    total_interest = 0.0
    ledger: List[PeriodRecord] = []
    for index in range(1, total_periods + 1):
        start = balance
        interest = start * rate_per_period
        balance = start + interest + contribution
        total_interest += interest

        ledger.append(
            PeriodRecord(
                period_index=index,
                starting_balance=start,
                interest_earned=interest,
                contribution=contribution,
                ending_balance=balance,
                cumulative_return=percent_return(balance, principal),
            )
        )

    return CompoundingResult(
        final_balance=balance,
        overall_return=percent_return(balance, principal),
        periods_per_year=periods_per_year,
        total_periods=total_periods,
        total_contributions=contribution * total_periods,
        total_interest=total_interest,
        ledger=ledger,
    )


def check_compounding_input(
    data: CompoundingInput,
    max_periods: int = DEFAULT_MAX_TOTAL_PERIODS,
) -> FieldChecks:
    checks = FieldChecks()
    has_principal = checks.required("principal", data.principal)
    checks.required("annual_rate_percent", data.annual_rate_percent)
    has_years = checks.required("years", data.years)
    checks.optional("contribution_per_period", data.contribution_per_period)

    frequency = data.compounding_frequency
    if frequency is None:
        checks.fail("compounding_frequency", "unknown compounding frequency")

    if has_principal and data.principal < 0:
        checks.fail("principal", "principal cannot be negative")
    if has_years:
        if data.years <= 0:
            checks.fail("years", "enter a number greater than 0")
        elif frequency is not None and exceeds_period_limit(data.years, frequency, max_periods):
            checks.fail("years", f"too many periods; the limit is {max_periods}")
    return checks


def simulate_compounding(
    data: CompoundingInput,
    max_periods: Optional[int] = None,
) -> Outcome[CompoundingResult]:
    """Validate ``data`` and run the simulation when every field passes."""
    limit = max_periods if max_periods is not None else DEFAULT_MAX_TOTAL_PERIODS
    error = check_compounding_input(data, max_periods=limit).error()
    if error is not None:
        logger.debug("compounding input rejected: %s", error)
        return Outcome(error=error)

    result = simulate(
        principal=data.principal,
        annual_rate_percent=data.annual_rate_percent,
        years=data.years,
        frequency=data.compounding_frequency,
        contribution_per_period=data.contribution_per_period or 0.0,
    )
    if not is_representable(result):
        checks = FieldChecks()
        for name in ("principal", "annual_rate_percent"):
            checks.fail(name, REASON_OVERFLOW)
        if (data.contribution_per_period or 0.0) > 0:
            checks.fail("contribution_per_period", REASON_OVERFLOW)
        error = checks.error()
        logger.debug("compounding result overflowed: %s", error)
        return Outcome(error=error)
    return Outcome(result=result)
