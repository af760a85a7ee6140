from __future__ import annotations

import math
from enum import Enum
from typing import Any


class JsonKind(Enum):
    NULL = "null"
    BOOL = "bool"
    NUMBER = "number"
    STRING = "string"
    ARRAY = "array"
    OBJECT = "object"


class _Missing:
    """Marker for a table cell whose record has no value for the column."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING = _Missing()


def kind_of(value: Any) -> JsonKind:
    """Map a parsed JSON value onto its kind.

    bool is checked before numbers since bool is an int subclass. Anything
    that json.loads would never produce is treated as a string.
    """
    if value is None or value is MISSING:
        return JsonKind.NULL
    if isinstance(value, bool):
        return JsonKind.BOOL
    if isinstance(value, (int, float)):
        return JsonKind.NUMBER
    if isinstance(value, list):
        return JsonKind.ARRAY
    if isinstance(value, dict):
        return JsonKind.OBJECT
    return JsonKind.STRING


def is_container(value: Any) -> bool:
    return kind_of(value) in (JsonKind.ARRAY, JsonKind.OBJECT)


def format_number(value: float) -> str:
    if isinstance(value, int):
        return str(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    return repr(value)


def scalar_text(value: Any) -> str:
    """Text form of a scalar, matching how a browser stringifies it.

    None gives 'null', booleans are lower-case and integral floats drop the
    trailing '.0'.
    """
    kind = kind_of(value)
    if kind is JsonKind.NULL:
        return "undefined" if value is MISSING else "null"
    if kind is JsonKind.BOOL:
        return "true" if value else "false"
    if kind is JsonKind.NUMBER:
        return format_number(value)
    return str(value)
