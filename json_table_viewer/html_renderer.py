"""HTML rendering of a view-model tree for the Gradio UI."""

from __future__ import annotations

from html import escape
from typing import List

from .flattening import compact_json
from .values import MISSING, JsonKind, is_container, kind_of, scalar_text
from .view_model import (
    BadgeList,
    CollapsibleTable,
    KeyValuePanel,
    RenderNode,
    Scalar,
    Table,
    TableGroup,
    TableRow,
)

STYLE = """
<style>
.jtv { font-family: system-ui, sans-serif; font-size: 13px; }
.jtv table { border-collapse: collapse; width: 100%; margin: 4px 0; }
.jtv th, .jtv td { border: 1px solid #d4d4d8; padding: 4px 8px; vertical-align: top; text-align: left; }
.jtv th { background: #f4f4f5; font-weight: 600; }
.jtv .jtv-header { display: flex; gap: 8px; align-items: baseline; margin-top: 8px; }
.jtv .jtv-count { color: #71717a; font-size: 11px; }
.jtv .jtv-null, .jtv .jtv-missing, .jtv .jtv-empty { color: #a1a1aa; }
.jtv .jtv-badge { display: inline-block; border: 1px solid #d4d4d8; border-radius: 4px; padding: 0 4px; margin: 1px; }
.jtv .jtv-group-title { font-weight: 700; text-transform: uppercase; border-bottom: 2px solid #d4d4d8; margin-top: 12px; }
.jtv .jtv-index { display: inline-block; background: #e4e4e7; border-radius: 3px; padding: 0 4px; margin-right: 4px; }
.jtv dl { margin: 0; }
.jtv dt { font-weight: 600; color: #52525b; }
.jtv dd { margin: 0 0 4px 12px; }
</style>
"""

PLACEHOLDER_HTML = '<div class="jtv"><p class="jtv-empty">Enter JSON to view table</p></div>'


def _count_label(count: int) -> str:
    return f"{count} item" if count == 1 else f"{count} items"


def render_scalar(node: Scalar) -> str:
    value = node.value
    if value is MISSING:
        return '<span class="jtv-missing">undefined</span>'

    kind = kind_of(value)
    if kind is JsonKind.NULL:
        return '<span class="jtv-null">null</span>'
    if kind is JsonKind.BOOL:
        return '<span class="jtv-bool">%s</span>' % ('✓' if value else '✗')
    if kind is JsonKind.ARRAY and not value:
        return '<span class="jtv-empty">[]</span>'
    if kind is JsonKind.OBJECT and not value:
        return '<span class="jtv-empty">{}</span>'
    if is_container(value):
        # Subtree past the nesting guard, shown whole.
        return '<code>%s</code>' % escape(compact_json(value))
    return '<span class="jtv-%s">%s</span>' % (kind.value, escape(scalar_text(value)))


def render_badges(node: BadgeList) -> str:
    if node.bulleted:
        items = ''.join('<li>%s</li>' % render_node(item) for item in node.items)
        return '<ul>%s</ul>' % items
    items = ''.join('<span class="jtv-badge">%s</span>' % render_node(item) for item in node.items)
    return '<div class="jtv-badges">%s</div>' % items


def render_panel(node: KeyValuePanel) -> str:
    parts: List[str] = ['<dl>']
    for key, child in node.entries:
        parts.append('<dt>%s</dt><dd>%s</dd>' % (escape(key), render_node(child)))
    parts.append('</dl>')
    if node.table_group is not None:
        parts.append(render_group(node.table_group))
    return ''.join(parts)


def render_group(node: TableGroup) -> str:
    tables = ''.join(render_collapsible(t) for t in node.tables)
    return '<div class="jtv-group"><div class="jtv-group-title">%s</div>%s</div>' % (escape(node.title), tables)


def _render_rows(headers, rows: List[TableRow]) -> str:
    head = ''.join('<th>%s</th>' % escape(h) for h in headers)
    body: List[str] = []
    for row in rows:
        cells = ''.join('<td>%s</td>' % render_node(cell) for cell in row.cells)
        body.append('<tr data-copy-id="%s">%s</tr>' % (escape(row.copy_id), cells))
        if row.details:
            details = ''.join(
                '<div><strong>%s</strong>%s</div>' % (escape(key), render_node(child))
                for key, child in row.details
            )
            body.append('<tr class="jtv-details"><td colspan="%d">%s</td></tr>' % (max(1, len(headers)), details))
    return '<table><thead><tr>%s</tr></thead><tbody>%s</tbody></table>' % (head, ''.join(body))


def render_table(node: Table) -> str:
    header = '<div class="jtv-header"><strong>%s</strong><span class="jtv-count">%s</span></div>' % (
        escape(node.title),
        _count_label(node.item_count),
    )
    return '<div class="jtv-table" id="%s">%s%s</div>' % (
        escape(node.table_id),
        header,
        _render_rows(node.grid.headers, list(node.rows)),
    )


def render_collapsible(node: CollapsibleTable) -> str:
    summary = '<summary><span class="jtv-index">%d</span><strong>%s</strong> <span class="jtv-count">%s</span></summary>' % (
        node.sort_index,
        escape(node.title),
        _count_label(node.item_count),
    )
    return '<details id="%s"%s>%s%s</details>' % (
        escape(node.table_id),
        '' if node.collapsed else ' open',
        summary,
        _render_rows(node.grid.headers, list(node.rows)),
    )


def render_node(node: RenderNode) -> str:
    if isinstance(node, Scalar):
        return render_scalar(node)
    if isinstance(node, BadgeList):
        return render_badges(node)
    if isinstance(node, KeyValuePanel):
        return render_panel(node)
    if isinstance(node, TableGroup):
        return render_group(node)
    if isinstance(node, Table):
        return render_table(node)
    if isinstance(node, CollapsibleTable):
        return render_collapsible(node)
    raise TypeError(f"Unknown render node: {type(node).__name__}")


def render_document(node: RenderNode) -> str:
    return '%s<div class="jtv">%s</div>' % (STYLE, render_node(node))
