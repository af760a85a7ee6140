from __future__ import annotations

import logging
import os
import tempfile
from typing import Any, Dict, Iterable, List, Optional, Tuple

import gradio as gr

from .config import DEFAULT_CONFIG, ViewerConfig
from .csv_export import export_csv_bytes, safe_filename
from .depth import compute_depth
from .errors import ParseError
from .html_renderer import PLACEHOLDER_HTML, render_document
from .io_utils import copy_payload, parse_json_text, read_json_upload
from .paths import section_id_for
from .shapes import is_object
from .view_model import build_view_model, collapsible_ids, find_row, find_table, iter_tables

logger = logging.getLogger(__name__)


def describe_value(data: Any) -> str:
    if isinstance(data, list):
        return f"array of {len(data)} {'item' if len(data) == 1 else 'items'}"
    if isinstance(data, dict):
        return f"object with {len(data)} {'key' if len(data) == 1 else 'keys'}"
    return "scalar value"


def object_sections(data: Any) -> Dict[str, Tuple[str, dict]]:
    """Top-level entries holding a non-empty object, keyed by section id.

    Each one exports as a single-record CSV and copies as one record.
    """
    if not is_object(data):
        return {}
    return {
        section_id_for(key): (key, value)
        for key, value in data.items()
        if is_object(value) and value
    }


def table_choices(tree, data: Any = None) -> List[Tuple[str, str]]:
    choices = [(f"{t.title} [{t.table_id}] ({t.item_count})", t.table_id) for t in iter_tables(tree)]
    choices.extend((f"{key} [{section_id}] (1)", section_id) for section_id, (key, _) in object_sections(data).items())
    return choices


def record_choices(tree, data: Any = None) -> List[Tuple[str, str]]:
    choices = [(row.copy_id, row.copy_id) for t in iter_tables(tree) for row in t.rows]
    choices.extend((section_id, section_id) for section_id in object_sections(data))
    return choices


def render_view(data: Any, collapsed: Optional[Iterable[str]] = None, config: ViewerConfig = DEFAULT_CONFIG):
    """Build the view-model for `data` and return (html, table choices, record choices)."""
    tree = build_view_model(data, config, collapsed or ())
    return render_document(tree), table_choices(tree, data), record_choices(tree, data)


def load_json_text(text: str):
    """Handle a change of the input box.

    Outputs: data state, collapse state, status, html, export dropdown,
    record dropdown. On a parse error only the status changes, so the last
    good view stays on screen.
    """
    if not text or not text.strip():
        empty = gr.update(choices=[], value=None)
        return None, [], "", PLACEHOLDER_HTML, empty, empty

    try:
        data = parse_json_text(text)
    except ParseError as e:
        keep = gr.update()
        return keep, keep, e.message, keep, keep, keep

    html, tables, records = render_view(data)
    status = f"Valid JSON: {describe_value(data)}, depth {compute_depth(data)}."
    logger.info("Loaded document: %s, %d tables", describe_value(data), len(tables))
    return (
        data,
        [],
        status,
        html,
        gr.update(choices=tables, value=tables[0][1] if tables else None),
        gr.update(choices=records, value=None),
    )


def handle_file_upload(file_obj):
    """Outputs: input text, status."""
    try:
        content = read_json_upload(file_obj)
    except ParseError as e:
        return gr.update(), e.message
    return content, ""


def clear_input():
    return "", ""


def write_export_file(payload: bytes, file_name: str) -> str:
    # A fresh directory per export keeps same-named downloads apart.
    temp_dir = tempfile.mkdtemp(prefix="jtv-", dir=tempfile.gettempdir())
    path = os.path.join(temp_dir, os.path.basename(safe_filename(file_name)))
    with open(path, 'wb') as f:
        f.write(payload)
    return path


def export_table_handler(data, table_id, collapsed=None):
    """Outputs: download path, status."""
    if data is None:
        return None, "No data loaded."
    if not table_id:
        return None, "Select a table to export."

    section = object_sections(data).get(table_id)
    if section is not None:
        key, value = section
        records, name = [value], key
    else:
        table = find_table(build_view_model(data, DEFAULT_CONFIG, collapsed or ()), table_id)
        if table is None:
            return None, "Selected table is no longer in the document."
        records, name = table.records, table.title

    result = export_csv_bytes(records, name)
    if result is None:
        return None, "Nothing to export."

    payload, file_name = result
    try:
        path = write_export_file(payload, file_name)
    except OSError as e:
        logger.error("Error writing %s: %s", file_name, e)
        return None, f"Error during export: {str(e)}"
    return path, f"Export successful! Saved to {path}"


def copy_record_handler(data, copy_id):
    if data is None or not copy_id:
        return ""
    section = object_sections(data).get(copy_id)
    if section is not None:
        return copy_payload(section[1])
    row = find_row(build_view_model(data), copy_id)
    if row is None:
        return ""
    return copy_payload(row.record)


def collapse_all_handler(data):
    """Outputs: collapse state, html."""
    if data is None:
        return [], PLACEHOLDER_HTML
    collapsed = sorted(collapsible_ids(build_view_model(data)))
    html, _, _ = render_view(data, collapsed)
    return collapsed, html


def expand_all_handler(data):
    if data is None:
        return [], PLACEHOLDER_HTML
    html, _, _ = render_view(data, [])
    return [], html
