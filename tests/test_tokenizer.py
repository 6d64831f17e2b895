"""CSV tokenizer tests: quoting state machine, row zipping and the RawRow boundary.

Usage: pytest tests/test_tokenizer.py -v
"""

from src.facility_insights.models import RawRow
from src.facility_insights.tokenizer import (
    parse_csv,
    parse_csv_line,
    read_headers,
    recognized_columns,
    tokenize,
    unknown_columns,
)


class TestParseCsvLine:
    """Character-level line tokenizer."""

    def test_quoted_fields_with_commas_and_escaped_quotes(self):
        line = '"Accra Regional Hospital","123 Main St, Accra","[""Cardiology"",""ER""]"'
        assert parse_csv_line(line) == [
            "Accra Regional Hospital",
            "123 Main St, Accra",
            '["Cardiology","ER"]',
        ]

    def test_plain_fields_are_trimmed(self):
        assert parse_csv_line(" a , b ,c ") == ["a", "b", "c"]

    def test_empty_fields_kept(self):
        assert parse_csv_line("a,,c,") == ["a", "", "c", ""]

    def test_empty_line_is_one_empty_field(self):
        assert parse_csv_line("") == [""]

    def test_quote_in_middle_toggles_state(self):
        # Quotes may open mid-field; the comma inside them is literal.
        assert parse_csv_line('St "A, B" Clinic,x') == ["St A, B Clinic", "x"]

    def test_unterminated_quote_swallows_rest_of_line(self):
        assert parse_csv_line('"open,still open') == ["open,still open"]


class TestParseCsv:
    """Header + rows."""

    def test_fewer_than_two_lines_is_empty(self):
        assert parse_csv("") == []
        assert parse_csv("name,facilityTypeId") == []

    def test_header_only_with_trailing_newline_is_empty(self):
        assert parse_csv("name,facilityTypeId\n") == []

    def test_rows_zip_with_headers(self):
        rows = parse_csv("name,facilityTypeId\nSt. Mary Clinic,clinic\n")
        assert rows == [{"name": "St. Mary Clinic", "facilityTypeId": "clinic"}]

    def test_missing_trailing_fields_default_to_empty(self):
        rows = parse_csv("a,b,c\n1\n")
        assert rows == [{"a": "1", "b": "", "c": ""}]

    def test_extra_fields_dropped(self):
        rows = parse_csv("a,b\n1,2,3,4\n")
        assert rows == [{"a": "1", "b": "2"}]

    def test_blank_lines_skipped(self):
        rows = parse_csv("a\n\n1\n   \n2\n")
        assert [r["a"] for r in rows] == ["1", "2"]

    def test_crlf_line_endings(self):
        rows = parse_csv("name,city\r\nRidge,Accra\r\n")
        assert rows == [{"name": "Ridge", "city": "Accra"}]

    def test_leading_bom_dropped(self):
        rows = parse_csv("\ufeffunique_id,name\nu-1,Ridge\n")
        assert rows == [{"unique_id": "u-1", "name": "Ridge"}]
        assert read_headers("\ufeffunique_id,name\n") == ["unique_id", "name"]


class TestRawRowBoundary:
    """Typed accessor over the recognized columns."""

    def test_camel_case_headers_map_to_fields(self):
        row = RawRow.from_mapping({"facilityTypeId": "hospital", "address_stateOrRegion": "Ashanti"})
        assert row.facility_type_id == "hospital"
        assert row.address_state_or_region == "Ashanti"

    def test_blank_values_become_none(self):
        row = RawRow.from_mapping({"name": "", "email": "   "})
        assert row.name is None
        assert row.email is None

    def test_null_literal_is_kept(self):
        row = RawRow.from_mapping({"specialties": "null"})
        assert row.specialties == "null"

    def test_unknown_headers_ignored(self):
        row = RawRow.from_mapping({"name": "X", "mongo DB": "abc", "area": "12"})
        assert row.name == "X"
        assert not hasattr(row, "mongo_db")

    def test_header_names_match_exactly(self):
        row = RawRow.from_mapping({"Name": "X", "uniqueId": "u-1", "facility_type_id": "hospital"})
        assert row.name is None
        assert row.unique_id is None
        assert row.facility_type_id is None

    def test_lookalike_header_does_not_override(self):
        [row] = tokenize("name,Name,facilityTypeId,facility_type_id\nRidge,Wrong,clinic,hospital\n")
        assert row.name == "Ridge"
        assert row.facility_type_id == "clinic"

    def test_tokenize_returns_raw_rows(self, sample_csv):
        rows = tokenize(sample_csv)
        assert len(rows) == 5
        assert all(isinstance(r, RawRow) for r in rows)
        assert rows[0].unique_id == "kb-1"
        assert rows[2].unique_id is None
        assert rows[0].capability == '["24/7 Emergency Unit"]'

    def test_column_diagnostics(self):
        headers = ["name", "facilityTypeId", "mongo DB", "area"]
        assert recognized_columns(headers) == ["name", "facilityTypeId"]
        assert unknown_columns(headers) == ["mongo DB", "area"]
        assert recognized_columns(["Name", "uniqueId", "address_state_or_region"]) == []

    def test_read_headers(self, sample_csv):
        headers = read_headers(sample_csv)
        assert headers[0] == "unique_id"
        assert len(headers) == 20
        assert read_headers("") == []
