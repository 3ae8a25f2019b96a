from __future__ import annotations

import polars as pl
import pytest

from svy_labels.labelled import Labelled, is_labelled, labelled


# ---- constructors / validation ----


def test_labelled_zero_length_vector():
    x = labelled()
    assert isinstance(x, Labelled)
    assert len(x) == 0


def test_x_must_be_numeric_or_character():
    with pytest.raises(TypeError):
        _ = labelled([True, False])  # bools -> not allowed
    with pytest.raises(TypeError):
        _ = labelled([1, "a"])  # mixed -> not allowed


def test_x_and_labels_must_be_compatible():
    with pytest.raises(TypeError):
        _ = labelled([1], labels={"a": "female"})  # keys must be numeric if x numeric
    with pytest.raises(TypeError):
        _ = labelled(["a"], labels={1: "female"})

    _ = labelled([1], labels={2: "female", 1: "male"})
    _ = labelled([1], labels={2.0: "female", 1.0: "male"})


def test_labels_can_be_none():
    x = labelled([1, 2, 3], labels=None)
    assert x.as_list() == [1, 2, 3]
    assert x.labels == {}


def test_labels_must_have_names():
    with pytest.raises(TypeError):
        _ = labelled([1], labels={1: 1})  # label must be str


def test_label_must_be_string_or_missing():
    _ = labelled([1], labels={1: "female"}, label="foo")
    with pytest.raises(TypeError):
        _ = labelled([1], labels={1: "female"}, label=1)


def test_labels_from_pairs():
    x = labelled([1, 2], labels=[(1, "low"), (2, "high")])
    assert x.labels == {1: "low", 2: "high"}


def test_duplicate_label_strings_warn_but_are_kept():
    with pytest.warns(UserWarning):
        x = labelled([8, 9], labels={8: "missing", 9: "missing"})
    assert x.labels == {8: "missing", 9: "missing"}


def test_labels_are_copied():
    labs = {1: "a"}
    x = labelled([1], labels=labs)
    labs[2] = "b"
    assert x.labels == {1: "a"}


def test_scalar_and_series_inputs():
    assert labelled(3).as_list() == [3]
    x = labelled(pl.Series("q", [1, None, 2]), labels={1: "yes"})
    assert x.as_list() == [1, None, 2]


# ---- basic api ----


def test_as_character():
    x = labelled([1, None, 3], labels={1: "x"})
    assert x.as_character() == ["1", "", "3"]


def test_slicing_keeps_metadata():
    x = labelled([1, 2, 3], labels={1: "a"}, label="Q1")
    y = x[1:]
    assert isinstance(y, Labelled)
    assert y.as_list() == [2, 3]
    assert y.labels == {1: "a"}
    assert y.label == "Q1"
    assert x[0] == 1


def test_equality_and_repr():
    a = labelled([1, 2], labels={1: "a"}, label="L")
    b = labelled([1, 2], labels={1: "a"}, label="L")
    assert a == b
    assert a != labelled([1, 2])
    r = repr(labelled(list(range(12)), label="L"))
    assert r.startswith("Labelled(data=[0, 1,")
    assert ", ...]" in r
    assert "label='L'" in r


def test_is_labelled():
    assert is_labelled(labelled([1]))
    assert not is_labelled([1])
