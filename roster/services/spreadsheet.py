"""Excel workbook reading and the roster upload template."""

import logging
from io import BytesIO
from typing import Any

from openpyxl import Workbook, load_workbook
from openpyxl.styles import Font

from roster.core.exceptions import MalformedSpreadsheetError
from roster.services.validation import STUDENT_FIELDS

logger = logging.getLogger(__name__)

TEMPLATE_SAMPLE_ROW = ["A123", "Jane Doe", "10", "A", "123456789", "jane@example.com"]
TEMPLATE_COLUMN_WIDTHS = [15, 30, 12, 12, 15, 35]


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def parse_workbook(file_content: bytes) -> list[dict[str, Any]]:
    """
    Parse the first worksheet into one dictionary per data row.

    The first row supplies the keys (trimmed and lower-cased). Columns with a
    blank header and rows whose cells are all blank are skipped.
    """
    try:
        workbook = load_workbook(filename=BytesIO(file_content), read_only=True, data_only=True)
    except Exception as e:
        logger.warning(f"[EXCEL PARSE] Unreadable workbook: {e}")
        raise MalformedSpreadsheetError(f"Error processing file: {e}")

    try:
        if not workbook.worksheets:
            raise MalformedSpreadsheetError("Excel file has no worksheets")
        rows = list(workbook.worksheets[0].iter_rows(values_only=True))
    except MalformedSpreadsheetError:
        raise
    except Exception as e:
        logger.warning(f"[EXCEL PARSE] Failed to read rows: {e}")
        raise MalformedSpreadsheetError(f"Error processing file: {e}")
    finally:
        workbook.close()

    logger.debug(f"[EXCEL PARSE] Total raw rows in Excel (including header): {len(rows)}")
    if not rows:
        return []

    headers = [str(h).strip().lower() if h is not None else "" for h in rows[0]]
    logger.debug(f"[EXCEL PARSE] Detected headers: {headers}")

    data = []
    skipped_empty_rows = 0
    for row in rows[1:]:
        row_dict = {
            headers[i]: value
            for i, value in enumerate(row)
            if i < len(headers) and headers[i]
        }
        if all(_is_blank(value) for value in row_dict.values()):
            skipped_empty_rows += 1
            continue
        data.append(row_dict)

    logger.info(
        f"[EXCEL PARSE] Summary: {len(data)} data rows extracted, "
        f"{skipped_empty_rows} empty rows skipped"
    )
    return data


def build_template() -> bytes:
    """Generate an Excel template for roster uploads."""
    wb = Workbook()
    ws = wb.active
    ws.title = "Students"

    for col_idx, header in enumerate(STUDENT_FIELDS, start=1):
        cell = ws.cell(row=1, column=col_idx, value=header)
        cell.font = Font(bold=True)

    for col_idx, value in enumerate(TEMPLATE_SAMPLE_ROW, start=1):
        ws.cell(row=2, column=col_idx, value=value)

    for col_idx, width in enumerate(TEMPLATE_COLUMN_WIDTHS, start=1):
        ws.column_dimensions[chr(64 + col_idx)].width = width

    output = BytesIO()
    wb.save(output)
    return output.getvalue()
