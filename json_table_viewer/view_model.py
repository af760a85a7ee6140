"""View-model builder: decides how each JSON subtree is displayed.

The result is a tree of frozen render nodes. It embeds the values it shows
and is rebuilt from scratch for every new document; the renderer never
needs the original JSON beyond what the nodes carry.

Routing, for any value:

1. non-empty array of objects -> Table, or CollapsibleTable when the key it
   sits under is a configured collapsible field;
2. other non-empty arrays -> BadgeList of every element;
3. empty array / empty object -> Scalar marker;
4. object holding an array of objects -> KeyValuePanel whose collapsible
   fields are pulled out into a titled TableGroup;
5. any other object -> KeyValuePanel;
6. scalars -> Scalar.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, FrozenSet, Iterable, Iterator, List, Optional, Tuple, Union

from .config import DEFAULT_CONFIG, ViewerConfig
from .paths import copy_id_for, table_id_for
from .shapes import is_array_of_objects
from .tables import TableGrid, build_table
from .values import JsonKind, kind_of

logger = logging.getLogger(__name__)

ROOT_TABLE_TITLE = "Table"
ANONYMOUS_TABLE_TITLE = "Array"

PathSegments = Tuple[Union[str, int], ...]


@dataclass(frozen=True)
class Scalar:
    value: Any


@dataclass(frozen=True)
class BadgeList:
    items: Tuple["RenderNode", ...]
    bulleted: bool = False


@dataclass(frozen=True)
class TableRow:
    """One rendered row, tied to the original record it was built from."""

    record: Any
    cells: Tuple["RenderNode", ...]
    details: Tuple[Tuple[str, "RenderNode"], ...]
    copy_id: str


@dataclass(frozen=True)
class Table:
    title: str
    grid: TableGrid
    item_count: int
    table_id: str
    rows: Tuple[TableRow, ...]

    @property
    def records(self) -> List[Any]:
        return [row.record for row in self.rows]


@dataclass(frozen=True)
class CollapsibleTable:
    title: str
    grid: TableGrid
    sort_index: int
    collapsed: bool
    table_id: str
    rows: Tuple[TableRow, ...]

    @property
    def item_count(self) -> int:
        return len(self.rows)

    @property
    def records(self) -> List[Any]:
        return [row.record for row in self.rows]


@dataclass(frozen=True)
class TableGroup:
    title: str
    tables: Tuple[CollapsibleTable, ...]


@dataclass(frozen=True)
class KeyValuePanel:
    entries: Tuple[Tuple[str, "RenderNode"], ...]
    table_group: Optional[TableGroup] = None


RenderNode = Union[Scalar, BadgeList, KeyValuePanel, TableGroup, Table, CollapsibleTable]
AnyTable = Union[Table, CollapsibleTable]


class ViewModelBuilder:
    """Builds render trees for one config and one collapse state.

    Both are read-only inputs; the builder keeps no other state between
    calls.
    """

    def __init__(self, config: ViewerConfig = DEFAULT_CONFIG, collapsed: Iterable[str] = ()):
        self.config = config
        self.collapsed: FrozenSet[str] = frozenset(collapsed)

    def build(self, value: Any) -> RenderNode:
        return self._node(value, None, (), 0)

    def _node(
        self,
        value: Any,
        parent_key: Optional[str],
        path: PathSegments,
        level: int,
        in_panel: bool = False,
    ) -> RenderNode:
        if level > self.config.max_depth:
            logger.debug("Nesting guard hit at %s (level %d)", path, level)
            return Scalar(value)

        kind = kind_of(value)
        if kind is JsonKind.ARRAY:
            return self._array_node(value, parent_key, path, level, in_panel)
        if kind is JsonKind.OBJECT:
            return self._object_node(value, path, level)
        return Scalar(value)

    def _array_node(self, value, parent_key, path, level, in_panel) -> RenderNode:
        if not value:
            return Scalar(value)

        if is_array_of_objects(value):
            sort_index = self.config.collapsible_sort_index(parent_key)
            if sort_index is not None:
                return self._collapsible_table(parent_key, value, sort_index, path, level)
            return self._table(parent_key, value, path, level)

        # Every element is shown, never truncated.
        items = tuple(
            self._node(item, parent_key, path + (index,), level + 1)
            for index, item in enumerate(value)
        )
        return BadgeList(items, bulleted=in_panel)

    def _object_node(self, value: dict, path: PathSegments, level: int) -> RenderNode:
        if not value:
            return Scalar(value)

        has_nested_tables = any(is_array_of_objects(v) for v in value.values())
        table_keys = []
        if has_nested_tables:
            table_keys = [
                k for k, v in value.items()
                if self.config.is_collapsible(k) and is_array_of_objects(v)
            ]

        # Badges next to a table group, bulleted lists otherwise.
        bulleted = not table_keys
        entries = tuple(
            (k, self._node(v, k, path + (k,), level + 1, in_panel=bulleted))
            for k, v in value.items()
            if k not in table_keys
        )

        group = None
        if table_keys:
            tables = [
                self._collapsible_table(k, value[k], self.config.collapsible_sort_index(k), path + (k,), level + 1)
                for k in table_keys
            ]
            tables.sort(key=lambda t: t.sort_index)
            group = TableGroup(self.config.group_title, tuple(tables))

        return KeyValuePanel(entries, table_group=group)

    def _table(self, parent_key: Optional[str], value: list, path: PathSegments, level: int) -> Table:
        excluded = self.config.excluded_columns(parent_key)
        grid = build_table(value, excluded)
        if parent_key is not None:
            title = parent_key
        else:
            title = ROOT_TABLE_TITLE if not path else ANONYMOUS_TABLE_TITLE
        return Table(
            title=title,
            grid=grid,
            item_count=len(value),
            table_id=table_id_for(path),
            rows=self._rows(value, grid, excluded, path, level),
        )

    def _collapsible_table(
        self, key: str, value: list, sort_index: int, path: PathSegments, level: int
    ) -> CollapsibleTable:
        grid = build_table(value)
        table_id = table_id_for(path)
        return CollapsibleTable(
            title=key,
            grid=grid,
            sort_index=sort_index,
            collapsed=table_id in self.collapsed,
            table_id=table_id,
            rows=self._rows(value, grid, set(), path, level),
        )

    def _rows(self, records: list, grid: TableGrid, excluded, path: PathSegments, level: int):
        rows = []
        for row_index, (record, cells) in enumerate(zip(records, grid.rows)):
            row_path = path + (row_index,)
            cell_nodes = tuple(
                self._node(cell, header, row_path + (header,), level + 2)
                for header, cell in zip(grid.headers, cells)
            )
            rows.append(
                TableRow(
                    record=record,
                    cells=cell_nodes,
                    details=self._row_details(record, excluded, row_path, level + 2),
                    copy_id=copy_id_for(row_path),
                )
            )
        return tuple(rows)

    def _row_details(self, record: dict, excluded, row_path: PathSegments, level: int):
        """Nodes for the columns a table left out, shown beneath the row."""
        present = [k for k in record if k in excluded]
        present.sort(key=lambda k: self.config.collapsible_sort_index(k) or 0)
        return tuple((k, self._node(record[k], k, row_path + (k,), level)) for k in present)


def build_view_model(
    value: Any,
    config: ViewerConfig = DEFAULT_CONFIG,
    collapsed: Iterable[str] = (),
) -> RenderNode:
    """Build the render tree for a parsed JSON value. Never raises."""
    return ViewModelBuilder(config, collapsed).build(value)


def iter_children(node: RenderNode) -> Iterator[RenderNode]:
    if isinstance(node, BadgeList):
        yield from node.items
    elif isinstance(node, KeyValuePanel):
        for _, child in node.entries:
            yield child
        if node.table_group is not None:
            yield node.table_group
    elif isinstance(node, TableGroup):
        yield from node.tables
    elif isinstance(node, (Table, CollapsibleTable)):
        for row in node.rows:
            yield from row.cells
            for _, child in row.details:
                yield child


def iter_nodes(node: RenderNode) -> Iterator[RenderNode]:
    """Depth-first walk over a render tree, the node itself first."""
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(list(iter_children(current))))


def iter_tables(node: RenderNode) -> Iterator[AnyTable]:
    for current in iter_nodes(node):
        if isinstance(current, (Table, CollapsibleTable)):
            yield current


def find_table(node: RenderNode, table_id: str) -> Optional[AnyTable]:
    for table in iter_tables(node):
        if table.table_id == table_id:
            return table
    return None


def find_row(node: RenderNode, copy_id: str) -> Optional[TableRow]:
    for table in iter_tables(node):
        for row in table.rows:
            if row.copy_id == copy_id:
                return row
    return None


def collapsible_ids(node: RenderNode) -> FrozenSet[str]:
    return frozenset(t.table_id for t in iter_tables(node) if isinstance(t, CollapsibleTable))
