from __future__ import annotations

from typing import Any

from .values import JsonKind, kind_of


def compute_depth(value: Any, base: int = 0) -> int:
    """Maximum nesting depth of a JSON value.

    Scalars and empty containers sit at `base`; each non-empty array or
    object adds one level over its deepest child. Walks with an explicit
    stack so arbitrarily deep values can be measured.
    """
    deepest = base
    stack = [(value, base)]
    while stack:
        current, level = stack.pop()
        kind = kind_of(current)
        if kind is JsonKind.ARRAY:
            children = current
        elif kind is JsonKind.OBJECT:
            children = current.values()
        else:
            children = ()

        pushed = False
        for child in children:
            stack.append((child, level + 1))
            pushed = True
        if not pushed:
            deepest = max(deepest, level)
    return deepest
