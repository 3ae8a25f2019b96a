# python/svy_labels/categorical.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import polars as pl

from .utils import format_value


@dataclass
class Factor:
    """
    Categorical vector that keeps survey metadata.

    codes:  per-row position in `levels` (None for a missing row)
    levels: ordered distinct raw values
    labels: mapping from *level value* -> display label, for labelled levels
    label:  optional variable label string
    name:   optional column name, used by `to_series`
    """

    codes: List[Optional[int]] = field(default_factory=list)
    levels: List[Any] = field(default_factory=list)
    labels: Dict[Any, str] = field(default_factory=dict)
    label: Optional[str] = None
    name: Optional[str] = None

    def __post_init__(self):
        self.codes = list(self.codes)
        self.levels = list(self.levels)
        self.labels = dict(self.labels or {})

        n = len(self.levels)
        for c in self.codes:
            if c is not None and not (0 <= c < n):
                raise ValueError(f"code {c} out of range for {n} levels")
        unknown = [k for k in self.labels if k not in self.levels]
        if unknown:
            raise ValueError(f"labels for values that are not levels: {unknown}")
        if not all(isinstance(v, str) for v in self.labels.values()):
            raise TypeError("labels must have names (string values)")
        if self.label is not None and not isinstance(self.label, str):
            raise TypeError("label must be a character vector of length one")

    # ---------- level views ----------
    def level_strings(self) -> List[str]:
        return [format_value(v) for v in self.levels]

    def level_labels(self) -> List[Optional[str]]:
        """One display label per level, None where the level is unlabelled."""
        return [self.labels.get(v) for v in self.levels]

    # ---------- row views ----------
    def as_list(self) -> List[Any]:
        return [None if c is None else self.levels[c] for c in self.codes]

    def as_character(self) -> List[Optional[str]]:
        strings = self.level_strings()
        return [None if c is None else strings[c] for c in self.codes]

    def _display_levels(self) -> List[str]:
        return [
            lab if lab is not None else s
            for lab, s in zip(self.level_labels(), self.level_strings())
        ]

    def as_labels(self) -> List[Optional[str]]:
        """Display form per row: the level's label, else its raw value."""
        display = self._display_levels()
        return [None if c is None else display[c] for c in self.codes]

    def to_series(self, *, labels: bool = False) -> pl.Series:
        """
        Export as a polars Enum series; categories keep the level order.

        With `labels=True` the categories are the display labels instead of
        the level strings. Levels sharing a label then share a category.
        """
        if labels:
            cats = self._display_levels()
            values = self.as_labels()
        else:
            cats = self.level_strings()
            values = self.as_character()
        return pl.Series(self.name or "", values, dtype=pl.Enum(list(dict.fromkeys(cats))))

    # ---------- python sequence protocol ----------
    def __len__(self) -> int:
        return len(self.codes)

    def __iter__(self):
        return iter(self.as_list())

    def __getitem__(self, idx):
        if isinstance(idx, slice):
            # levels are kept even if a slice no longer uses them, as R does
            return self.__class__(
                codes=self.codes[idx],
                levels=self.levels,
                labels=self.labels,
                label=self.label,
                name=self.name,
            )
        c = self.codes[idx]
        return None if c is None else self.levels[c]

    # ---------- repr ----------
    def __repr__(self):
        class_name = self.__class__.__name__
        values = self.as_character()
        data_repr = repr(values[:10])
        if len(values) > 10:
            data_repr = data_repr[:-1] + ", ...]"

        parts = [f"data={data_repr}", f"levels={self.level_strings()}"]
        if self.labels:
            parts.append(f"labels={self.labels}")
        if self.label:
            parts.append(f"label={self.label!r}")

        return f"{class_name}({', '.join(parts)})"


def is_factor(x: Any) -> bool:
    if isinstance(x, Factor):
        return True
    if isinstance(x, pl.Series):
        return isinstance(x.dtype, (pl.Categorical, pl.Enum))
    return False
