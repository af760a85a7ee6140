from __future__ import annotations

from typing import Iterable, List, Union

ROOT_ID = "(root)"


def escape_path_segment(segment: Union[str, int]) -> str:
    """Escape a single key segment for dot-path representation.

    - Dots are escaped as '\\.' so keys like 'gpt-3.5-turbo' remain one segment.
    - Backslashes are escaped as '\\\\' to preserve round-tripping.
    """
    if not isinstance(segment, str):
        segment = str(segment)
    return segment.replace('\\', '\\\\').replace('.', '\\.')


def join_path(segments: Iterable[Union[str, int]]) -> str:
    """Dot path naming a location in the document, '(root)' for the top."""
    parts: List[str] = [escape_path_segment(s) for s in segments]
    return '.'.join(parts) if parts else ROOT_ID


def table_id_for(segments: Iterable[Union[str, int]]) -> str:
    return f"table:{join_path(segments)}"


def copy_id_for(segments: Iterable[Union[str, int]]) -> str:
    return f"record:{join_path(segments)}"


def section_id_for(key: str) -> str:
    """Identifier of a top-level object entry shown as its own section."""
    return f"section:{escape_path_segment(key)}"
