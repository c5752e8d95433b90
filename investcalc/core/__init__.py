"""Calculation engine: compounding simulation, average cost and return metrics."""

from investcalc.core.average_cost import aggregate, compute_average_cost
from investcalc.core.compounding import simulate, simulate_compounding
from investcalc.core.returns import percent_return
from investcalc.core.validation import InputValidationError, Outcome, validate_fields

__all__ = [
    "InputValidationError",
    "Outcome",
    "aggregate",
    "compute_average_cost",
    "percent_return",
    "simulate",
    "simulate_compounding",
    "validate_fields",
]
