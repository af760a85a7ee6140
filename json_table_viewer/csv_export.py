"""CSV export of record arrays.

One fixed dialect: comma separated, LF between rows, header row first. A
cell is quoted only when it holds a comma, a double quote or a newline.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Any, Optional, Tuple

from .flattening import flatten_record
from .shapes import is_array_of_objects
from .tables import union_keys

logger = logging.getLogger(__name__)

DELIMITER = ','
LINE_TERMINATOR = '\n'
ENCODING = 'utf-8'
REPLACEMENT_CHAR = '\ufffd'

_LONE_SURROGATE = re.compile('[\ud800-\udfff]')


@dataclass(frozen=True)
class CsvDocument:
    headers: Tuple[str, ...]
    rows: Tuple[Tuple[str, ...], ...]

    def to_text(self) -> str:
        lines = [DELIMITER.join(escape_cell(h) for h in self.headers)]
        lines.extend(DELIMITER.join(row) for row in self.rows)
        return LINE_TERMINATOR.join(lines)

    def to_bytes(self) -> bytes:
        # JSON escapes can leave unpaired surrogates, which UTF-8 cannot encode.
        return _LONE_SURROGATE.sub(REPLACEMENT_CHAR, self.to_text()).encode(ENCODING)


def escape_cell(text: str) -> str:
    if ',' in text or '"' in text or '\n' in text:
        return '"' + text.replace('"', '""') + '"'
    return text


def export_csv(records: Any) -> Optional[CsvDocument]:
    """Flatten a list of objects into a CsvDocument.

    Returns None for an empty list or anything that is not a list of
    objects.
    """
    if not is_array_of_objects(records):
        return None

    flattened = [flatten_record(record) for record in records]
    headers = union_keys(flattened)
    rows = tuple(
        tuple(escape_cell(flat.get(header, '')) for header in headers)
        for flat in flattened
    )
    return CsvDocument(tuple(headers), rows)


def suggested_filename(name: str, today: Optional[date] = None) -> str:
    if today is None:
        today = datetime.now(timezone.utc).date()
    return f"{name}_{today.isoformat()}.csv"


def safe_filename(file_name: str, fallback: str = 'export.csv') -> str:
    """Reduce a suggested filename to a single plain path component.

    Table titles come from document keys, so separators and leading dots
    are replaced before the name touches the filesystem.
    """
    for sep in ('/', '\\'):
        file_name = file_name.replace(sep, '_')
    file_name = file_name.replace('\x00', '').strip().lstrip('.')
    return file_name or fallback


def export_csv_bytes(records: Any, name: str, today: Optional[date] = None) -> Optional[Tuple[bytes, str]]:
    document = export_csv(records)
    if document is None:
        logger.info("Nothing to export for %r", name)
        return None

    filename = suggested_filename(name, today)
    logger.info("Exported %d records, %d columns to %s", len(document.rows), len(document.headers), filename)
    return document.to_bytes(), filename
