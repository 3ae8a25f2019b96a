# python/svy_labels/labelled.py
from __future__ import annotations

import numbers
import warnings

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union


Value = Union[int, float, str, None]


# ---------- helpers: typing & validation ----------


def _is_bool(x: Any) -> bool:
    # In Python, bool is a subclass of int; exclude explicitly.
    return isinstance(x, bool)


def _is_numeric_scalar(x: Any) -> bool:
    return isinstance(x, numbers.Real) and not _is_bool(x)


def _is_char_scalar(x: Any) -> bool:
    return isinstance(x, str)


def _is_numeric_seq(seq: Sequence[Any]) -> bool:
    return all((_is_numeric_scalar(v) or v is None) for v in seq)


def _is_string_seq(seq: Sequence[Any]) -> bool:
    return all((_is_char_scalar(v) or v is None) for v in seq)


def _ensure_seq(x: Any) -> List[Value]:
    if x is None:
        return []
    if isinstance(x, (list, tuple)):
        return list(x)
    if hasattr(x, "to_list"):
        # polars Series
        return list(x.to_list())
    # allow a scalar (e.g. 1 -> [1])
    return [x]


def _normalize_labels(
    labels: Optional[Dict[Any, str] | Sequence[Tuple[Any, str]]],
) -> Dict[Any, str]:
    if labels is None:
        return {}

    # Accept dict or sequence of (code, label) pairs
    if isinstance(labels, dict):
        items = list(labels.items())
    elif isinstance(labels, Sequence) and not isinstance(labels, (str, bytes)):
        items = list(labels)
        for pair in items:
            if not (isinstance(pair, tuple) and len(pair) == 2 and isinstance(pair[1], str)):
                raise TypeError(
                    "labels must be dict[value->str] or sequence of (value, str) pairs"
                )
    else:
        raise TypeError("labels must be dict[value->str] or sequence of (value, str) pairs")

    codes = [k for k, _ in items if k is not None]
    if len(set(codes)) != len(codes):
        raise ValueError("label codes must be unique")

    # Several codes sharing one label (e.g. "missing") is common in survey files
    names = [v for _, v in items if v is not None]
    if len(set(names)) != len(names):
        warnings.warn("duplicate label strings detected; each value keeps its own label")

    return dict(items)


def _validate_labels_match_data_type(values: List[Value], labels: Dict[Any, str]) -> None:
    if not all(isinstance(v, str) for v in labels.values()):
        raise TypeError("labels must have names (string values)")

    if _is_numeric_seq(values):
        if not all((_is_numeric_scalar(k) or k is None) for k in labels.keys()):
            raise TypeError("labels must be the same type as data (numeric)")
    elif _is_string_seq(values):
        if not all((_is_char_scalar(k) or k is None) for k in labels.keys()):
            raise TypeError("labels must be the same type as data (character)")
    else:
        raise TypeError("x must be a numeric or a character vector.")


def _validate_label(label: Optional[str]) -> None:
    if label is None:
        return
    if not isinstance(label, str):
        raise TypeError("label must be a character vector of length one")


# ---------- core class ----------


@dataclass
class Labelled:
    """
    Lightweight haven-like labelled vector.

    data:   sequence of numbers or strings (None allowed for missing)
    labels: mapping from *value* -> *label string* (e.g., {1: "Good"})
    label:  optional variable label string
    """

    data: Any = field(default_factory=list)
    labels: Optional[Dict[Any, str]] = None
    label: Optional[str] = None

    def __post_init__(self):
        self.data = _ensure_seq(self.data)
        if not (_is_numeric_seq(self.data) or _is_string_seq(self.data)):
            # This rejects bools (TRUE/FALSE) and mixed types.
            raise TypeError("x must be a numeric or a character vector.")
        _validate_label(self.label)

        # normalized copy, so later edits to the caller's dict don't leak in
        self.labels = _normalize_labels(self.labels)
        _validate_labels_match_data_type(self.data, self.labels)

    # ---------- basic API ----------
    def as_list(self) -> List[Value]:
        return list(self.data)

    def as_character(self) -> List[str]:
        return ["" if v is None else str(v) for v in self.data]

    # ---------- python sequence protocol ----------
    def __len__(self) -> int:
        return len(self.data)

    def __iter__(self):
        return iter(self.data)

    def __getitem__(self, idx):
        if isinstance(idx, slice):
            # Return new Labelled with sliced data but same metadata
            return self.__class__(data=self.data[idx], labels=self.labels, label=self.label)
        return self.data[idx]

    # ---------- repr ----------
    def __repr__(self):
        class_name = self.__class__.__name__
        data_repr = repr(self.data[:10]) if len(self.data) > 10 else repr(self.data)
        if len(self.data) > 10:
            data_repr = data_repr[:-1] + ", ...]"

        parts = [f"data={data_repr}"]
        if self.labels:
            parts.append(f"labels={self.labels}")
        if self.label:
            parts.append(f"label={self.label!r}")

        return f"{class_name}({', '.join(parts)})"


# ---- convenience factory / predicate ----


def labelled(
    x: Any = None,
    labels: Optional[Dict[Any, str]] = None,
    label: Optional[str] = None,
) -> Labelled:
    return Labelled(data=x, labels=labels, label=label)


def is_labelled(x: Any) -> bool:
    return isinstance(x, Labelled)
