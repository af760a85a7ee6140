"""Unit tests for shape classification, table grids and depth."""

from json_table_viewer.depth import compute_depth
from json_table_viewer.shapes import (
    can_display_as_table,
    is_array_of_objects,
    is_nested_structure,
)
from json_table_viewer.tables import TableGrid, build_table, union_keys
from json_table_viewer.values import MISSING, JsonKind, kind_of, scalar_text


# ── Values ────────────────────────────────────────────────────────────

class TestValues:
    def test_kind_of_bool_before_number(self):
        assert kind_of(True) is JsonKind.BOOL
        assert kind_of(0) is JsonKind.NUMBER
        assert kind_of(1.5) is JsonKind.NUMBER

    def test_kind_of_containers_and_null(self):
        assert kind_of([]) is JsonKind.ARRAY
        assert kind_of({}) is JsonKind.OBJECT
        assert kind_of(None) is JsonKind.NULL
        assert kind_of(MISSING) is JsonKind.NULL
        assert kind_of("x") is JsonKind.STRING

    def test_scalar_text_matches_browser_output(self):
        assert scalar_text(True) == "true"
        assert scalar_text(False) == "false"
        assert scalar_text(None) == "null"
        assert scalar_text(2.0) == "2"
        assert scalar_text(2.5) == "2.5"
        assert scalar_text(-7) == "-7"
        assert scalar_text("a b") == "a b"

    def test_missing_is_falsy_singleton(self):
        assert not MISSING
        assert repr(MISSING) == "MISSING"


# ── ShapeClassifier ──────────────────────────────────────────────────

class TestShapes:
    def test_can_display_as_table(self):
        assert can_display_as_table([])
        assert can_display_as_table({})
        assert can_display_as_table([1, 2])
        assert can_display_as_table({"a": 1})
        assert not can_display_as_table(None)
        assert not can_display_as_table(0)
        assert not can_display_as_table("text")
        assert not can_display_as_table(False)

    def test_is_nested_structure(self):
        assert is_nested_structure([{"a": 1}])
        assert is_nested_structure({"a": 1})
        assert not is_nested_structure([])
        assert not is_nested_structure({})
        assert not is_nested_structure([1, 2])
        assert not is_nested_structure([{"a": 1}, 2])
        assert not is_nested_structure("x")
        assert not is_nested_structure(None)

    def test_array_of_arrays_is_not_array_of_objects(self):
        assert not is_array_of_objects([[1], [2]])
        assert not is_array_of_objects([])
        assert is_array_of_objects([{}, {"a": 1}])


# ── TableBuilder ─────────────────────────────────────────────────────

class TestBuildTable:
    def test_empty_array(self):
        assert build_table([]) == TableGrid(("Index", "Value"), ())

    def test_column_union_not_intersection(self):
        grid = build_table([{"a": 1}, {"b": 2}])
        assert grid.headers == ("a", "b")
        assert grid.rows == ((1, MISSING), (MISSING, 2))

    def test_headers_sorted_regardless_of_key_order(self):
        first = build_table([{"b": 1, "a": 2, "c": 3}])
        second = build_table([{"c": 3, "a": 2, "b": 1}])
        assert first.headers == ("a", "b", "c")
        assert first.headers == second.headers
        assert first.rows == second.rows

    def test_explicit_null_is_kept_distinct_from_missing(self):
        grid = build_table([{"a": None}, {"b": 1}])
        assert grid.rows[0] == (None, MISSING)

    def test_exclude_keys_for_records(self):
        records = [{"Name": "x", "Packages": [{"n": 1}], "Vulnerabilities": [{"id": 1}]}]
        grid = build_table(records, {"Packages", "Vulnerabilities"})
        assert grid.headers == ("Name",)
        assert grid.rows == (("x",),)

    def test_cells_may_hold_nested_values(self):
        grid = build_table([{"a": {"b": [1, 2]}}])
        assert grid.rows == (({"b": [1, 2]},),)

    def test_primitive_array(self):
        grid = build_table(["x", 2, None])
        assert grid.headers == ("Index", "Value")
        assert grid.rows == ((0, "x"), (1, 2), (2, None))

    def test_mixed_array_uses_index_value(self):
        grid = build_table([{"a": 1}, 3])
        assert grid.headers == ("Index", "Value")
        assert grid.rows == ((0, {"a": 1}), (1, 3))

    def test_object_keeps_insertion_order(self):
        grid = build_table({"z": 1, "a": 2, "m": 3}, exclude_keys={"a"})
        assert grid.headers == ("Key", "Value")
        assert grid.rows == (("z", 1), ("m", 3))

    def test_scalar(self):
        assert build_table(42) == TableGrid(("Value",), ((42,),))
        assert build_table(None) == TableGrid(("Value",), ((None,),))

    def test_every_row_matches_header_width(self):
        grid = build_table([{"a": 1}, {"b": 2, "c": 3}, {}])
        assert all(len(row) == grid.width for row in grid.rows)

    def test_union_keys(self):
        assert union_keys([{"b": 1}, {"a": 1, "c": 2}], exclude_keys=["c"]) == ["a", "b"]


# ── DepthAnalyzer ────────────────────────────────────────────────────

class TestDepth:
    def test_examples(self):
        assert compute_depth([]) == 0
        assert compute_depth({"a": 1}) == 1
        assert compute_depth({"a": {"b": [1, 2]}}) == 3

    def test_scalars_and_base(self):
        assert compute_depth(5) == 0
        assert compute_depth(None, base=2) == 2
        assert compute_depth({}, base=1) == 1

    def test_empty_child_counts_its_own_level(self):
        assert compute_depth({"a": []}) == 1
        assert compute_depth([1, [2, [3]]]) == 3

    def test_very_deep_value(self):
        value = 0
        for _ in range(5000):
            value = [value]
        assert compute_depth(value) == 5000
