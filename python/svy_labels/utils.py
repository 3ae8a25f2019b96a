# python/svy_labels/utils.py
from __future__ import annotations

import math
import numbers

from typing import Any, Iterable, List


# ───────────────────────── missing values ─────────────────────────


def is_missing(v: Any) -> bool:
    """
    True for None, float NaN and the literal string "NaN".

    The string form mirrors R's `factor(x, exclude = c(NA, "NaN"))`.
    """
    if v is None:
        return True
    if isinstance(v, float):
        return math.isnan(v)
    if isinstance(v, str):
        return v == "NaN"
    return False


# ───────────────────────── text helpers ─────────────────────────


def format_value(v: Any) -> str:
    """String form of a raw value; integral floats drop the trailing '.0'."""
    if isinstance(v, float) and v.is_integer():
        return str(int(v))
    return str(v)


# ───────────────────────── level helpers ─────────────────────────


def _is_number(v: Any) -> bool:
    return isinstance(v, numbers.Number) and not isinstance(v, complex)


def sorted_levels(values: Iterable[Any]) -> List[Any]:
    """
    Distinct non-missing values in natural order.

    Numeric data sorts numerically, string data lexically. Equal values
    (1 and 1.0) collapse onto the first occurrence. Mixed data falls back
    to ordering by string form; `sorted` is stable, so ties keep their
    first-seen order.
    """
    seen: dict = {}
    for v in values:
        if is_missing(v) or v in seen:
            continue
        seen[v] = None
    distinct = list(seen)

    if all(_is_number(v) for v in distinct):
        return sorted(distinct)
    if all(isinstance(v, str) for v in distinct):
        return sorted(distinct)
    return sorted(distinct, key=format_value)
