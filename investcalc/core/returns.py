"""Percentage return relative to a baseline amount."""

from investcalc.schemas.common import ReturnPercent


def percent_return(current: float, baseline: float) -> ReturnPercent:
    """Return ``(current - baseline) / baseline`` in percent.

    A zero baseline with a larger current value has no finite return; that case
    is reported with ``is_unbounded`` instead of an infinite float so that it can
    be serialised and rendered as "∞%" downstream.
    """
    if baseline > 0:
        return ReturnPercent(value=(current - baseline) / baseline * 100)
    if baseline == 0 and current > baseline:
        return ReturnPercent(value=0.0, is_unbounded=True)
    return ReturnPercent(value=0.0)
