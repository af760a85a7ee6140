"""Core logic for JSON Table Viewer.

The Gradio UI lives in `app.py`. This package contains pure functions that:
- parse JSON input
- classify each subtree and build a nested-table view-model
- flatten record arrays and export them as CSV
"""

from .config import DEFAULT_CONFIG, FieldRule, ViewerConfig  # noqa: F401
from .csv_export import CsvDocument, export_csv, export_csv_bytes  # noqa: F401
from .depth import compute_depth  # noqa: F401
from .errors import JsonTableViewerError, ParseError  # noqa: F401
from .io_utils import copy_payload, parse_json_text  # noqa: F401
from .shapes import can_display_as_table, is_nested_structure  # noqa: F401
from .tables import TableGrid, build_table  # noqa: F401
from .view_model import build_view_model  # noqa: F401

__version__ = "0.1.0"
