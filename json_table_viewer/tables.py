from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Set, Tuple

from .shapes import is_object
from .values import MISSING, JsonKind, kind_of

INDEX_VALUE_HEADERS = ("Index", "Value")
KEY_VALUE_HEADERS = ("Key", "Value")
VALUE_HEADERS = ("Value",)


@dataclass(frozen=True)
class TableGrid:
    headers: Tuple[str, ...]
    rows: Tuple[Tuple[Any, ...], ...]

    @property
    def width(self) -> int:
        return len(self.headers)


def union_keys(records: Iterable[dict], exclude_keys: Iterable[str] = ()) -> list:
    """Sorted union of the keys of every record, minus `exclude_keys`.

    A key present in a single record still becomes a column.
    """
    excluded: Set[str] = set(exclude_keys)
    keys: Set[str] = set()
    for record in records:
        keys.update(k for k in record if k not in excluded)
    return sorted(keys)


def build_table(value: Any, exclude_keys: Iterable[str] = ()) -> TableGrid:
    """Compute the (headers, rows) grid for any JSON value."""
    excluded = set(exclude_keys)
    kind = kind_of(value)

    if kind is JsonKind.ARRAY:
        if not value:
            return TableGrid(INDEX_VALUE_HEADERS, ())

        if all(is_object(item) for item in value):
            headers = union_keys(value, excluded)
            rows = tuple(
                tuple(item.get(header, MISSING) for header in headers)
                for item in value
            )
            return TableGrid(tuple(headers), rows)

        # Primitives or mixed kinds
        return TableGrid(INDEX_VALUE_HEADERS, tuple((i, item) for i, item in enumerate(value)))

    if kind is JsonKind.OBJECT:
        rows = tuple((k, v) for k, v in value.items() if k not in excluded)
        return TableGrid(KEY_VALUE_HEADERS, rows)

    return TableGrid(VALUE_HEADERS, ((value,),))
