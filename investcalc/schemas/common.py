"""Shared field types for calculator inputs and outputs."""

from __future__ import annotations

import math
import re
from typing import Annotated, Any, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field

# Plain decimal notation only: no exponents, underscores, "inf" or "nan".
_DECIMAL_RE = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)$")


def parse_raw_number(value: Any) -> Any:
    """Turn a raw form value into a float, or None when it is absent.

    Numbers pass through; integers too large for a float become ``inf`` so the
    validator flags them. Strings may carry thousands separators
    ("1,000,000") and must otherwise be plain decimals; empty or unparseable
    strings count as absent. Containers are returned untouched and left for
    pydantic to reject.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            return float(value)
        except OverflowError:
            return math.inf if value > 0 else -math.inf
    if isinstance(value, str):
        cleaned = value.replace(",", "").strip()
        if not _DECIMAL_RE.match(cleaned):
            return None
        return float(cleaned)
    return value


# None means the field was left empty.
RawNumber = Annotated[Optional[float], BeforeValidator(parse_raw_number)]


class ReturnPercent(BaseModel):
    """Percentage return, or an unbounded marker when the baseline is zero."""

    model_config = ConfigDict(frozen=True)

    value: float = Field(0.0, description="Return in percent; 0 when unbounded.")
    is_unbounded: bool = Field(
        False,
        description="True when the baseline is zero and the current value is above it.",
    )
