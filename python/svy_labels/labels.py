# python/svy_labels/labels.py
from __future__ import annotations

import dataclasses
import warnings

from typing import Any, Dict, List, Optional

import polars as pl

from .categorical import Factor
from .labelled import Labelled
from .utils import format_value, is_missing, sorted_levels


class LabelTypeMismatchWarning(UserWarning):
    """A stored value label could not be matched to the column's type and was skipped."""


INT_DTYPES = (
    pl.Int8,
    pl.Int16,
    pl.Int32,
    pl.Int64,
    pl.UInt8,
    pl.UInt16,
    pl.UInt32,
    pl.UInt64,
)

FLOAT_DTYPES = (
    pl.Float32,
    pl.Float64,
)


# ---------------- raw data access ----------------


def _raw_values(x: Any) -> List[Any]:
    if isinstance(x, (Labelled, Factor)):
        return x.as_list()
    if isinstance(x, pl.Series):
        return x.to_list()
    if isinstance(x, (list, tuple)):
        return list(x)
    raise TypeError(
        f"expected a Labelled, Factor, polars.Series or a sequence, got {type(x).__name__}"
    )


def _explicit_labels(x: Any) -> Dict[Any, str]:
    labels = getattr(x, "labels", None)
    if not isinstance(labels, dict):
        return {}
    return {k: v for k, v in labels.items() if not is_missing(k)}


# ---------------- value labels ----------------


def get_value_labels(x: Any, include_unlabelled: bool = False) -> Dict[Any, str]:
    """
    Return the value -> label mapping attached to `x`.

    With `include_unlabelled=True`, every distinct non-missing value present
    in the data that has no explicit label is added with its own string form
    as label, and the result is ordered by value. Missing values never appear.
    """
    explicit = _explicit_labels(x)
    if not include_unlabelled:
        return explicit
    return complete_value_labels(explicit, _raw_values(x))


def complete_value_labels(labels: Dict[Any, str], values: List[Any]) -> Dict[Any, str]:
    """Add a self-named label for every unlabelled value in `values`, ordered by value."""
    out = dict(labels)
    for v in sorted_levels(values):
        if v not in out:
            out[v] = format_value(v)

    # labelled codes absent from the data sort with the rest
    return {k: out[k] for k in sorted_levels(out.keys())}


def set_value_labels(x: Any, labels: Optional[Dict[Any, str]]) -> Any:
    """
    Return a copy of `x` carrying `labels` as its value labels.

    Plain sequences and series are promoted to `Labelled`.
    """
    if isinstance(x, Labelled):
        return dataclasses.replace(x, labels=labels)
    if isinstance(x, Factor):
        # labels only attach to levels that occur
        levels = set(x.levels)
        kept = {k: v for k, v in (labels or {}).items() if k in levels}
        return dataclasses.replace(x, labels=kept)
    return Labelled(data=_raw_values(x), labels=labels)


# ---------------- variable label ----------------


def get_variable_label(x: Any) -> Optional[str]:
    if isinstance(x, (Labelled, Factor)):
        return x.label
    return None


def set_variable_label(x: Any, label: Optional[str]) -> Any:
    if isinstance(x, (Labelled, Factor)):
        return dataclasses.replace(x, label=label)
    return Labelled(data=_raw_values(x), label=label)


# ---------------- meta-dict accessors (reader output) ----------------


def get_column_labels(meta: dict) -> dict[str, str | None]:
    return {v["name"]: v.get("label") for v in meta.get("vars", [])}


def get_value_labels_for_column(meta: dict, col_name: str) -> dict[str, str] | None:
    col_info = next((v for v in meta.get("vars", []) if v["name"] == col_name), None)
    if not col_info:
        return None
    set_name = col_info.get("label_set")
    if not set_name:
        return None
    return next(
        (vl["mapping"] for vl in meta.get("value_labels", []) if vl["set_name"] == set_name), None
    )


def _cast_key(k: Any, dtype: pl.DataType) -> Any:
    if dtype in INT_DTYPES or dtype in FLOAT_DTYPES:
        if isinstance(k, (int, float)) and not isinstance(k, bool):
            return k
        num = float(k)  # ValueError for non-numeric text
        if dtype in INT_DTYPES:
            if not num.is_integer():
                raise ValueError(f"{k!r} is not an integer code")
            return int(num)
        return num
    if dtype == pl.Utf8:
        return str(k)
    return k


def typed_value_labels(mapping: Dict[Any, str] | None, dtype: pl.DataType) -> Dict[Any, str]:
    """
    Coerce stored label keys (strings in reader metadata) toward `dtype`.

    Keys that cannot be coerced are skipped with a LabelTypeMismatchWarning.
    """
    out: Dict[Any, str] = {}
    skipped = []
    for k, lab in (mapping or {}).items():
        try:
            key = _cast_key(k, dtype)
        except (TypeError, ValueError):
            skipped.append(k)
            continue
        if is_missing(key):
            continue
        out[key] = lab

    if skipped:
        warnings.warn(
            f"Skipping value labels whose codes do not match column type {dtype}: "
            + ", ".join(repr(k) for k in skipped),
            LabelTypeMismatchWarning,
            stacklevel=2,
        )
    return out
