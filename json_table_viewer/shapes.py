from __future__ import annotations

from typing import Any

from .values import JsonKind, kind_of


def is_object(value: Any) -> bool:
    return kind_of(value) is JsonKind.OBJECT


def is_array_of_objects(value: Any) -> bool:
    """True for a non-empty list whose elements are all JSON objects."""
    if kind_of(value) is not JsonKind.ARRAY or not value:
        return False
    return all(is_object(item) for item in value)


def can_display_as_table(value: Any) -> bool:
    """Routing gate: any array or object, empty ones included."""
    return kind_of(value) in (JsonKind.ARRAY, JsonKind.OBJECT)


def is_nested_structure(value: Any) -> bool:
    """Whether a field deserves its own sub-table or panel.

    Non-empty arrays of objects and objects with at least one key qualify.
    Scalars and empty arrays never do.
    """
    kind = kind_of(value)
    if kind is JsonKind.ARRAY:
        return is_array_of_objects(value)
    if kind is JsonKind.OBJECT:
        return len(value) > 0
    return False
