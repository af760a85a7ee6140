"""Unit tests for record flattening and CSV export."""

from datetime import date

import pytest

from json_table_viewer.csv_export import (
    CsvDocument,
    escape_cell,
    export_csv,
    export_csv_bytes,
    safe_filename,
    suggested_filename,
)
from json_table_viewer.flattening import compact_json, flatten_record
from json_table_viewer.io_utils import parse_json_text


# ── Flattening ────────────────────────────────────────────────────────

class TestFlattenRecord:
    def test_nested_objects_use_dot_paths(self):
        assert flatten_record({"a": {"b": 1, "c": {"d": "x"}}}) == {"a.b": "1", "a.c.d": "x"}

    def test_prefix(self):
        assert flatten_record({"b": 1}, "a") == {"a.b": "1"}

    def test_null_and_empty_array(self):
        assert flatten_record({"a": None, "b": []}) == {"a": "", "b": "[]"}

    def test_array_of_objects_is_compact_json(self):
        assert flatten_record({"a": [{"x": 1}, {"y": "é"}]}) == {"a": '[{"x":1},{"y":"é"}]'}

    def test_array_of_primitives_is_joined(self):
        assert flatten_record({"a": [1, "b", True, None, 2.0]}) == {"a": "1; b; true; null; 2"}

    def test_containers_inside_mixed_array(self):
        assert flatten_record({"a": [1, [2, 3], {"k": "v"}]}) == {"a": '1; [2,3]; {"k":"v"}'}

    def test_scalars(self):
        assert flatten_record({"t": True, "f": False, "n": 2.5, "s": "x"}) == {
            "t": "true",
            "f": "false",
            "n": "2.5",
            "s": "x",
        }

    def test_empty_nested_object_adds_no_columns(self):
        assert flatten_record({"a": {}, "b": 1}) == {"b": "1"}

    def test_compact_json(self):
        assert compact_json({"a": [1, 2]}) == '{"a":[1,2]}'


# ── Escaping ──────────────────────────────────────────────────────────

class TestEscapeCell:
    @pytest.mark.parametrize(
        "text, expected",
        [
            ("plain", "plain"),
            ("", ""),
            ("x,y", '"x,y"'),
            ('say "hi"', '"say ""hi"""'),
            ("line1\nline2", '"line1\nline2"'),
            ("tab\there", "tab\there"),
        ],
    )
    def test_quoting_rule(self, text, expected):
        assert escape_cell(text) == expected


# ── Export ────────────────────────────────────────────────────────────

class TestExportCsv:
    def test_flat_data(self):
        document = export_csv([{"a": "x,y", "b": 2}])
        assert document.headers == ("a", "b")
        assert document.rows == (('"x,y"', "2"),)
        assert document.to_text() == 'a,b\n"x,y",2'

    def test_nested_scalars(self):
        document = export_csv([{"a": {"b": 1, "c": 2}}])
        assert document.to_text() == "a.b,a.c\n1,2"

    def test_array_of_objects_column(self):
        document = export_csv([{"a": [{"x": 1}]}])
        assert document.headers == ("a",)
        assert document.rows == (('"[{""x"":1}]"',),)

    def test_header_union_across_records(self):
        document = export_csv([{"b": 1}, {"a": {"z": 2}}, {"c": None}])
        assert document.headers == ("a.z", "b", "c")
        assert document.rows == (("", "1", ""), ("2", "", ""), ("", "", ""))

    def test_rows_match_header_width(self):
        document = export_csv([{"a": 1}, {"b": {"c": [1, 2]}}, {}])
        assert all(len(row) == len(document.headers) for row in document.rows)

    @pytest.mark.parametrize("value", [[], None, {"a": 1}, [1, 2], [{"a": 1}, 2], "text"])
    def test_no_data_is_a_silent_no_op(self, value):
        assert export_csv(value) is None
        assert export_csv_bytes(value, "Table") is None

    def test_bytes_and_filename(self):
        payload, filename = export_csv_bytes([{"name": "ü", "n": 1}], "Results", today=date(2024, 5, 1))
        assert filename == "Results_2024-05-01.csv"
        assert payload.decode("utf-8") == "n,name\n1,ü"

    def test_default_filename_uses_iso_date(self):
        name = suggested_filename("Packages")
        assert name.startswith("Packages_")
        assert name.endswith(".csv")
        date.fromisoformat(name[len("Packages_"):-len(".csv")])

    def test_headers_are_escaped(self):
        document = CsvDocument(headers=("a,b",), rows=(("1",),))
        assert document.to_text() == '"a,b"\n1'

    def test_lone_surrogate_is_replaced_in_bytes(self):
        records = parse_json_text('[{"a": "x\\ud800y", "b": "\\ud83d\\ude00"}]')
        payload, _ = export_csv_bytes(records, "Table", today=date(2024, 5, 1))
        assert payload.decode("utf-8") == "a,b\nx\ufffdy,\U0001f600"


# ── Filenames ─────────────────────────────────────────────────────────

class TestSafeFilename:
    @pytest.mark.parametrize(
        "name, expected",
        [
            ("Packages_2024-05-01.csv", "Packages_2024-05-01.csv"),
            ("reports/2024_2024-05-01.csv", "reports_2024_2024-05-01.csv"),
            ("../x.csv", "_x.csv"),
            ("/etc/passwd_2024-05-01.csv", "_etc_passwd_2024-05-01.csv"),
            ("C:\\temp\\x.csv", "C:_temp_x.csv"),
            ("..", "export.csv"),
            ("", "export.csv"),
        ],
    )
    def test_single_component(self, name, expected):
        assert safe_filename(name) == expected
        assert "/" not in safe_filename(name)
