"""Field checks shared by the calculators.

Each raw input is either a float or ``None`` (left empty). Checks run over
every field before anything is decided, so a caller learns about all bad
fields at once rather than only the first one.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Dict, Generic, List, Mapping, Optional, TypeVar, cast

T = TypeVar("T")

REASON_REQUIRED = "enter a number"
REASON_POSITIVE = "enter a number greater than 0"
REASON_FINITE = "enter a finite number"
REASON_OVERFLOW = "result is too large to calculate"


class InputValidationError(ValueError):
    """One or more input fields failed validation."""

    def __init__(self, flags: Mapping[str, bool], reasons: Optional[Mapping[str, str]] = None):
        self.flags: Dict[str, bool] = dict(flags)
        self.fields: List[str] = [name for name, invalid in self.flags.items() if invalid]
        self.reasons: Dict[str, str] = {
            name: reason for name, reason in (reasons or {}).items() if self.flags.get(name)
        }
        super().__init__("invalid fields: " + ", ".join(self.fields))

    def to_dict(self) -> Dict[str, object]:
        return {
            "detail": str(self),
            "fields": list(self.fields),
            "invalid": dict(self.flags),
            "reasons": dict(self.reasons),
        }


@dataclass
class Outcome(Generic[T]):
    """Either a calculation result or the validation error that prevented it."""

    result: Optional[T] = None
    error: Optional[InputValidationError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        if self.error is not None:
            raise self.error
        return cast(T, self.result)


def is_finite_number(value: Optional[float]) -> bool:
    return value is not None and not isinstance(value, bool) and math.isfinite(value)


@dataclass
class FieldChecks:
    """Accumulates per-field invalid flags and the reason for each failure."""

    flags: Dict[str, bool] = field(default_factory=dict)
    reasons: Dict[str, str] = field(default_factory=dict)

    def required(self, name: str, value: Optional[float]) -> bool:
        """Flag ``name`` when it is empty or not a finite number."""
        ok = is_finite_number(value)
        self._record(name, ok, REASON_REQUIRED)
        return ok

    def positive(self, name: str, value: Optional[float]) -> bool:
        """Flag ``name`` when it is empty, not finite, or not strictly positive."""
        ok = is_finite_number(value) and value > 0
        self._record(name, ok, REASON_POSITIVE)
        return ok

    def optional(self, name: str, value: Optional[float]) -> bool:
        """An empty optional field is fine; a present one must be finite."""
        ok = value is None or is_finite_number(value)
        self._record(name, ok, REASON_FINITE)
        return ok

    def fail(self, name: str, reason: str) -> None:
        if not self.flags.get(name):
            self.reasons[name] = reason
        self.flags[name] = True

    def _record(self, name: str, ok: bool, reason: str) -> None:
        if ok:
            self.flags.setdefault(name, False)
        else:
            self.fail(name, reason)

    @property
    def has_errors(self) -> bool:
        return any(self.flags.values())

    def error(self) -> Optional[InputValidationError]:
        if not self.has_errors:
            return None
        return InputValidationError(self.flags, self.reasons)


def validate_fields(
    required: Optional[Mapping[str, Optional[float]]] = None,
    positive: Optional[Mapping[str, Optional[float]]] = None,
    optional: Optional[Mapping[str, Optional[float]]] = None,
) -> Dict[str, bool]:
    """Map every given field name to True when it is invalid."""
    checks = FieldChecks()
    for name, value in (required or {}).items():
        checks.required(name, value)
    for name, value in (positive or {}).items():
        checks.positive(name, value)
    for name, value in (optional or {}).items():
        checks.optional(name, value)
    return checks.flags
