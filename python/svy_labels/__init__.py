from .categorical import Factor, is_factor
from .factor import as_factor, to_factor
from .labelled import Labelled, is_labelled, labelled
from .labels import (
    LabelTypeMismatchWarning,
    get_column_labels,
    get_value_labels,
    get_value_labels_for_column,
    get_variable_label,
    set_value_labels,
    set_variable_label,
    typed_value_labels,
)
from .select import (
    ByName,
    ByPredicate,
    ByRange,
    SelectorResolutionError,
    contains,
    ends_with,
    everything,
    matches,
    resolve_selectors,
    starts_with,
)
from .utils import format_value, is_missing


__all__ = [
    "as_factor",
    "ByName",
    "ByPredicate",
    "ByRange",
    "contains",
    "ends_with",
    "everything",
    "Factor",
    "format_value",
    "get_column_labels",
    "get_value_labels",
    "get_value_labels_for_column",
    "get_variable_label",
    "is_factor",
    "is_labelled",
    "is_missing",
    "Labelled",
    "labelled",
    "LabelTypeMismatchWarning",
    "matches",
    "resolve_selectors",
    "SelectorResolutionError",
    "set_value_labels",
    "set_variable_label",
    "starts_with",
    "to_factor",
    "typed_value_labels",
]

__version__ = "0.1.0"
