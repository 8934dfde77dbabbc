"""Numeric helpers shared by the zoom engine."""

from __future__ import annotations

import math
from typing import Any, Sequence


def is_invalid_number(value: Any) -> bool:
    """Check whether a value should be treated as an unspecified bound.

    Args:
        value: Candidate bound value.

    Returns:
        True for None, NaN, and anything that cannot be read as a float.
    """
    if value is None or isinstance(value, bool):
        return True
    try:
        return math.isnan(float(value))
    except (TypeError, ValueError):
        return True


def linear_map(
    value: float,
    domain: Sequence[float],
    range_: Sequence[float],
    clamp: bool = False,
) -> float:
    """Linearly map a value from one interval to another.

    Args:
        value: Value in ``domain`` space.
        domain: Source interval ``[d0, d1]``.
        range_: Target interval ``[r0, r1]``.
        clamp: Whether to clamp the result into ``range_``.

    Returns:
        The mapped value. A degenerate domain maps to the middle of ``range_``.
    """
    d0, d1 = domain[0], domain[1]
    r0, r1 = range_[0], range_[1]
    sub_domain = d1 - d0
    sub_range = r1 - r0

    if sub_domain == 0:
        return r0 if sub_range == 0 else (r0 + r1) / 2

    if clamp:
        if sub_domain > 0:
            if value <= d0:
                return r0
            if value >= d1:
                return r1
        else:
            if value >= d0:
                return r0
            if value <= d1:
                return r1

    return (value - d0) / sub_domain * sub_range + r0


def asc(values: list[float]) -> list[float]:
    """Sort a list ascending in place and return it."""
    values.sort()
    return values
