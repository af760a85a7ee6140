from __future__ import annotations

import json
import logging
import math
from typing import Any

from .config import DEFAULT_MAX_DEPTH
from .depth import compute_depth
from .errors import ParseError

logger = logging.getLogger(__name__)

JSON_SUFFIX = '.json'


def _reject_constant(name: str):
    raise ValueError(f"Unexpected token {name} in JSON")


def _parse_float(text: str) -> float:
    # Overflowing literals would serialize back as Infinity.
    value = float(text)
    if math.isinf(value):
        raise ValueError(f"Number {text} is out of range")
    return value


def parse_json_text(text: str, max_depth: int = DEFAULT_MAX_DEPTH) -> Any:
    """Parse JSON text, raising ParseError with the parser's message.

    NaN, Infinity and numbers too large for a float are rejected, as are
    documents nested deeper than `max_depth`.
    """
    try:
        data = json.loads(text, parse_constant=_reject_constant, parse_float=_parse_float)
    except ValueError as e:
        logger.warning("Invalid JSON: %s", e)
        raise ParseError(str(e)) from e
    except RecursionError as e:
        logger.warning("JSON nesting exceeds interpreter limits")
        raise ParseError("JSON is nested too deeply") from e

    depth = compute_depth(data)
    if depth > max_depth:
        logger.warning("JSON depth %d exceeds limit %d", depth, max_depth)
        raise ParseError(f"JSON is nested too deeply ({depth} levels, limit {max_depth})")
    return data


def _looks_like_json_file(name: str, mime_type: str = '') -> bool:
    return name.lower().endswith(JSON_SUFFIX) or 'json' in mime_type


def read_json_upload(file_obj) -> str:
    """Read JSON text from an uploaded file or file path and validate it.

    Returns the text itself so the caller can put it in the input box.
    """
    if file_obj is None:
        raise ParseError("No file uploaded.")

    path = file_obj if isinstance(file_obj, str) else getattr(file_obj, 'name', '') or ''
    mime_type = getattr(file_obj, 'mime_type', '') or ''
    if not _looks_like_json_file(str(path), mime_type):
        raise ParseError("Please select a JSON file")

    try:
        if hasattr(file_obj, 'read'):
            if hasattr(file_obj, 'seek'):
                file_obj.seek(0)
            content = file_obj.read()
        else:
            with open(path, 'r', encoding='utf-8') as f:
                content = f.read()
        if isinstance(content, bytes):
            content = content.decode('utf-8')
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("Error reading %s: %s", path, e)
        raise ParseError("Error reading file") from e

    parse_json_text(content)
    return content


def copy_payload(record: Any) -> str:
    """Pretty-printed JSON (2-space indent) of exactly this record."""
    return json.dumps(record, indent=2, ensure_ascii=False)
