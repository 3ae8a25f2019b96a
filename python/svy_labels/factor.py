# python/svy_labels/factor.py
from __future__ import annotations

import copy

from collections.abc import Mapping
from functools import singledispatch
from typing import Any, Dict, List, Optional, Set, Tuple

import polars as pl

from .categorical import Factor, is_factor
from .labels import (
    _raw_values,
    complete_value_labels,
    get_value_labels,
    get_value_labels_for_column,
    get_variable_label,
    typed_value_labels,
)
from .select import resolve_selectors
from .utils import format_value, is_missing, sorted_levels


# ---------------- single vector ----------------


def _factor_from_values(
    values: List[Any],
    value_labels: Dict[Any, str],
    label: Optional[str],
    name: Optional[str],
) -> Factor:
    levels = sorted_levels(values)
    position = {v: i for i, v in enumerate(levels)}
    codes = [None if is_missing(v) else position[v] for v in values]

    # labels for values that never occur are dropped
    labels = {v: value_labels[v] for v in levels if v in value_labels}
    return Factor(codes=codes, levels=levels, labels=labels, label=label, name=name)


def _to_factor(x: Any, add_non_labelled: bool, name: Optional[str] = None) -> Any:
    # already a factor: nothing to do
    if is_factor(x):
        return x

    value_labels = get_value_labels(x, include_unlabelled=add_non_labelled)
    varlab = get_variable_label(x)

    if name is None and isinstance(x, pl.Series) and x.name:
        name = x.name
    return _factor_from_values(_raw_values(x), value_labels, varlab, name)


# ---------------- dispatch ----------------


@singledispatch
def as_factor(x: Any, *selectors: Any, add_non_labelled: bool = False, meta: dict | None = None):
    """
    Convert a vector or a table to factor(s), keeping value and variable labels.

    Vectors (`Labelled`, `pl.Series`, list/tuple) return a `Factor` whose
    levels are the sorted distinct non-missing values. Value labels carry
    over to the levels they name; with `add_non_labelled=True` unlabelled
    levels are labelled with their own value. Factors (and categorical
    series) are returned unchanged.

    Tables convert only the columns picked by `selectors` (all columns when
    none are given):
      • dict of columns -> new dict
      • pl.DataFrame (+ reader `meta`) -> (df_out, meta_out)
    """
    if selectors:
        raise TypeError("column selectors are only supported for tables")
    if meta is not None:
        raise TypeError("meta is only supported together with a polars.DataFrame")
    return _to_factor(x, add_non_labelled)


@as_factor.register(Mapping)
def _as_factor_mapping(
    x: Mapping, *selectors: Any, add_non_labelled: bool = False, meta: dict | None = None
) -> Dict[str, Any]:
    if meta is not None:
        raise TypeError("meta is only supported together with a polars.DataFrame")

    # resolve everything up front: a bad selector must not leave half a table
    cols = resolve_selectors(list(x.keys()), selectors)

    out = dict(x)
    for name in cols:
        out[name] = _to_factor(x[name], add_non_labelled, name=name)
    return out


# ---------------- polars frame + reader meta ----------------


def _unique_set_name(base: str, taken: Set[str]) -> str:
    name = base
    i = 1
    while name in taken:
        name = f"{base}_{i}"
        i += 1
    return name


@as_factor.register(pl.DataFrame)
def _as_factor_frame(
    df: pl.DataFrame,
    *selectors: Any,
    add_non_labelled: bool = False,
    meta: dict | None = None,
) -> Tuple[pl.DataFrame, Dict[str, Any]]:
    cols = resolve_selectors(df.columns, selectors)

    # never mutate the caller's meta
    meta_out: Dict[str, Any] = copy.deepcopy(meta) if meta is not None else {}
    meta_out.setdefault("vars", [])
    meta_out.setdefault("value_labels", [])

    vmap = {v.get("name"): v for v in meta_out["vars"]}
    taken = {vl["set_name"] for vl in meta_out["value_labels"]}

    replacements: List[pl.Series] = []
    replaced_sets: Set[str] = set()
    for name in cols:
        s = df[name]
        if is_factor(s):
            continue

        values = s.to_list()
        value_labels = typed_value_labels(get_value_labels_for_column(meta_out, name), s.dtype)
        if add_non_labelled:
            value_labels = complete_value_labels(value_labels, values)

        var = vmap.get(name)
        if var is None:
            var = {"name": name, "label": None, "label_set": None, "fmt": None}
            meta_out["vars"].append(var)
            vmap[name] = var

        fac = _factor_from_values(values, value_labels, var.get("label"), name)
        if var.get("label_set"):
            replaced_sets.add(var["label_set"])
        replacements.append(fac.to_series())

        # stored label sets are keyed by the level's string form
        if fac.labels:
            set_name = _unique_set_name(name, taken)
            taken.add(set_name)
            meta_out["value_labels"].append(
                {
                    "set_name": set_name,
                    "mapping": {format_value(k): v for k, v in fac.labels.items()},
                }
            )
            var["label_set"] = set_name
        else:
            var["label_set"] = None
        var["kind"] = "factor"

    # drop superseded sets unless another column still points at them
    in_use = {v.get("label_set") for v in meta_out["vars"]}
    orphaned = replaced_sets - in_use
    if orphaned:
        meta_out["value_labels"] = [
            vl for vl in meta_out["value_labels"] if vl["set_name"] not in orphaned
        ]

    return (df.with_columns(replacements) if replacements else df), meta_out


to_factor = as_factor
