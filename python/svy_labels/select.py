# python/svy_labels/select.py
from __future__ import annotations

import re

from dataclasses import dataclass
from typing import Any, Callable, Iterable, List, Sequence, Union


class SelectorResolutionError(ValueError):
    """A column selector is malformed or names a column that does not exist."""


# ───────────────────────── selector variants ─────────────────────────


@dataclass(frozen=True)
class ByName:
    name: str


@dataclass(frozen=True)
class ByRange:
    """Columns from `start` through `end`, in the table's left-to-right order."""

    start: str
    end: str


@dataclass(frozen=True)
class ByPredicate:
    predicate: Callable[[str], bool]
    description: str = "<predicate>"

    def __repr__(self) -> str:
        return f"ByPredicate({self.description})"


# ───────────────────────── select helpers ─────────────────────────


def contains(text: str, *, ignore_case: bool = True) -> ByPredicate:
    if ignore_case:
        needle = text.lower()
        return ByPredicate(lambda c: needle in c.lower(), f"contains({text!r})")
    return ByPredicate(lambda c: text in c, f"contains({text!r})")


def starts_with(prefix: str, *, ignore_case: bool = True) -> ByPredicate:
    if ignore_case:
        needle = prefix.lower()
        return ByPredicate(lambda c: c.lower().startswith(needle), f"starts_with({prefix!r})")
    return ByPredicate(lambda c: c.startswith(prefix), f"starts_with({prefix!r})")


def ends_with(suffix: str, *, ignore_case: bool = True) -> ByPredicate:
    if ignore_case:
        needle = suffix.lower()
        return ByPredicate(lambda c: c.lower().endswith(needle), f"ends_with({suffix!r})")
    return ByPredicate(lambda c: c.endswith(suffix), f"ends_with({suffix!r})")


def matches(pattern: str, *, ignore_case: bool = True) -> ByPredicate:
    try:
        rx = re.compile(pattern, re.IGNORECASE if ignore_case else 0)
    except re.error as e:
        raise SelectorResolutionError(f"invalid pattern {pattern!r}: {e}") from e
    return ByPredicate(lambda c: rx.search(c) is not None, f"matches({pattern!r})")


def everything() -> ByPredicate:
    return ByPredicate(lambda c: True, "everything()")


# ───────────────────────── resolution ─────────────────────────


def _flatten(selectors: Iterable[Any]) -> List[Any]:
    out: List[Any] = []
    for s in selectors:
        if isinstance(s, (list, tuple)):
            out.extend(_flatten(s))
        else:
            out.append(s)
    return out


def _parse(sel: Any, columns: Sequence[str]) -> Union[ByName, ByRange, ByPredicate]:
    if isinstance(sel, (ByName, ByRange, ByPredicate)):
        return sel
    if isinstance(sel, str):
        # a literal column name wins over the "a:b" range form
        if sel in columns or ":" not in sel:
            return ByName(sel)
        start, _, end = sel.partition(":")
        start, end = start.strip(), end.strip()
        if not start or not end:
            raise SelectorResolutionError(f"malformed column range {sel!r}")
        return ByRange(start, end)
    if callable(sel):
        return ByPredicate(sel, getattr(sel, "__name__", "<predicate>"))
    raise SelectorResolutionError(
        f"column selectors must be names, ranges or predicates, got {type(sel).__name__}"
    )


def _position(name: str, columns: List[str]) -> int:
    try:
        return columns.index(name)
    except ValueError:
        raise SelectorResolutionError(f"column {name!r} does not exist") from None


def resolve_selectors(columns: Sequence[str], selectors: Iterable[Any] = ()) -> List[str]:
    """
    Resolve selectors against `columns` into a list of column names.

    No selectors selects every column. Names are returned once, in the order
    they were first selected. Unknown names raise SelectorResolutionError;
    a predicate matching nothing simply contributes no columns.
    """
    columns = list(columns)
    parsed = [_parse(s, columns) for s in _flatten(selectors)]
    if not parsed:
        return list(columns)

    picked: dict = {}
    for sel in parsed:
        if isinstance(sel, ByName):
            _position(sel.name, columns)
            picked[sel.name] = None
        elif isinstance(sel, ByRange):
            lo = _position(sel.start, columns)
            hi = _position(sel.end, columns)
            step = 1 if lo <= hi else -1
            for name in columns[lo : hi + step if hi + step >= 0 else None : step]:
                picked[name] = None
        else:
            for name in columns:
                if sel.predicate(name):
                    picked[name] = None

    return list(picked)
