from io import BytesIO

import pytest
from openpyxl import Workbook, load_workbook

from conftest import HEADERS, make_workbook
from roster.core.exceptions import MalformedSpreadsheetError
from roster.services.spreadsheet import build_template, parse_workbook


class TestParseWorkbook:
    """Test Excel parsing."""

    def test_rows_are_keyed_by_header(self):
        content = make_workbook([["A123", "Jane Doe", "10", "A", 123456789, "jane@example.com"]])

        rows = parse_workbook(content)

        assert rows == [
            {
                "student_id": "A123",
                "student_name": "Jane Doe",
                "grade_name": "10",
                "class_name": "A",
                "phone": 123456789,
                "email": "jane@example.com",
            }
        ]

    def test_headers_are_normalized(self):
        content = make_workbook([["A1", "Jane"]], headers=[" Student_ID ", "STUDENT_NAME"])

        assert parse_workbook(content) == [{"student_id": "A1", "student_name": "Jane"}]

    def test_blank_rows_are_skipped(self):
        content = make_workbook(
            [
                ["A1", "Jane", "10", "A", "123456789", "a@example.com"],
                [None, None, None, None, None, None],
                ["", "  ", None, None, None, None],
                ["A2", "John", "10", "A", "123456789", "b@example.com"],
            ]
        )

        rows = parse_workbook(content)

        assert [row["student_id"] for row in rows] == ["A1", "A2"]

    def test_zero_valued_row_is_kept(self):
        content = make_workbook([[0, None, None, None, None, None]])

        assert parse_workbook(content) == [
            {
                "student_id": 0,
                "student_name": None,
                "grade_name": None,
                "class_name": None,
                "phone": None,
                "email": None,
            }
        ]

    def test_header_only_sheet_has_no_rows(self):
        assert parse_workbook(make_workbook([])) == []

    def test_only_first_sheet_is_read(self):
        wb = Workbook()
        wb.active.append(HEADERS)
        wb.active.append(["A1", "Jane", "10", "A", "123456789", "a@example.com"])
        other = wb.create_sheet("Other")
        other.append(HEADERS)
        other.append(["B1", "John", "10", "A", "123456789", "b@example.com"])
        output = BytesIO()
        wb.save(output)

        rows = parse_workbook(output.getvalue())

        assert [row["student_id"] for row in rows] == ["A1"]

    def test_malformed_file_raises(self):
        with pytest.raises(MalformedSpreadsheetError) as exc_info:
            parse_workbook(b"not a spreadsheet")

        assert exc_info.value.status_code == 400
        assert exc_info.value.code == "MALFORMED_SPREADSHEET"


class TestTemplate:
    """Test the upload template."""

    def test_template_has_roster_headers_and_valid_sample(self):
        sheet = load_workbook(BytesIO(build_template())).active

        assert [cell.value for cell in sheet[1]] == HEADERS
        assert sheet.cell(row=2, column=1).value == "A123"

    def test_template_round_trips_through_parser(self):
        rows = parse_workbook(build_template())

        assert len(rows) == 1
        assert rows[0]["email"] == "jane@example.com"
