from __future__ import annotations

import json
from typing import Any, Dict

from .shapes import is_array_of_objects
from .values import JsonKind, is_container, kind_of, scalar_text


def compact_json(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False, separators=(',', ':'))


def element_text(value: Any) -> str:
    """Text for one element of a non-record list."""
    if is_container(value):
        return compact_json(value)
    return scalar_text(value)


def flatten_record(record: Dict[str, Any], prefix: str = '') -> Dict[str, str]:
    """Flatten one record into dot-path keys with string values for CSV.

    - null becomes an empty cell, an empty list becomes '[]'
    - a list of objects is kept whole as compact JSON
    - any other list is joined with '; '
    - nested objects recurse under 'parent.child' keys
    """
    flattened: Dict[str, str] = {}
    for key, value in record.items():
        path = f"{prefix}.{key}" if prefix else key
        kind = kind_of(value)

        if kind is JsonKind.NULL:
            flattened[path] = ''
        elif kind is JsonKind.ARRAY:
            if not value:
                flattened[path] = '[]'
            elif is_array_of_objects(value):
                flattened[path] = compact_json(value)
            else:
                flattened[path] = '; '.join(element_text(v) for v in value)
        elif kind is JsonKind.OBJECT:
            flattened.update(flatten_record(value, path))
        else:
            flattened[path] = scalar_text(value)

    return flattened
