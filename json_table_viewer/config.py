"""Field policy for the view-model builder.

The engine itself knows nothing about particular field names. Which fields
become collapsible sub-tables, their order, and which parent tables drop them
from their columns is all configured here.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Mapping, Optional, Set

DEFAULT_MAX_DEPTH = 100


@dataclass(frozen=True)
class FieldRule:
    """How one field name is treated wherever it appears.

    sort_index orders collapsible tables within a group (lower first).
    exclude_under lists parent keys whose tables omit this field from their
    columns and render it beneath each row instead.
    """

    sort_index: int
    exclude_under: FrozenSet[str] = frozenset()


@dataclass(frozen=True)
class ViewerConfig:
    field_rules: Mapping[str, FieldRule] = field(default_factory=dict)
    group_title: str = "Table"
    max_depth: int = DEFAULT_MAX_DEPTH

    def collapsible_sort_index(self, key: Optional[str]) -> Optional[int]:
        rule = self.field_rules.get(key) if key is not None else None
        return rule.sort_index if rule is not None else None

    def is_collapsible(self, key: Optional[str]) -> bool:
        return self.collapsible_sort_index(key) is not None

    def excluded_columns(self, parent_key: Optional[str]) -> Set[str]:
        if parent_key is None:
            return set()
        return {name for name, rule in self.field_rules.items() if parent_key in rule.exclude_under}

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "ViewerConfig":
        """Build a config from plain data, e.g. a loaded JSON file.

        Expected shape::

            {"fields": {"Packages": {"sort_index": 2, "exclude_under": ["Results"]}},
             "group_title": "Table", "max_depth": 100}
        """
        rules: Dict[str, FieldRule] = {}
        for name, spec in (data.get("fields") or {}).items():
            rules[name] = FieldRule(
                sort_index=int(spec.get("sort_index", 99)),
                exclude_under=frozenset(spec.get("exclude_under") or ()),
            )
        return cls(
            field_rules=rules,
            group_title=str(data.get("group_title", "Table")),
            max_depth=int(data.get("max_depth", DEFAULT_MAX_DEPTH)),
        )


DEFAULT_CONFIG = ViewerConfig(
    field_rules={
        "Vulnerabilities": FieldRule(sort_index=1, exclude_under=frozenset({"Results"})),
        "Packages": FieldRule(sort_index=2, exclude_under=frozenset({"Results"})),
    }
)
