"""Workbook and CSV files rendered as one text block per sheet."""

import csv
import io
from collections.abc import Iterable
from pathlib import PurePosixPath

import openpyxl
import xlrd  # type: ignore[import-untyped]

from case_ingestion.extraction.exceptions import SpreadsheetExtractionError
from case_ingestion.extraction.models import file_extension

# .xls uploads that are really OOXML workbooks go to openpyxl
_ZIP_MAGIC = b"PK\x03\x04"


def sheet_header(name: str) -> str:
    return f"=== Sheet: {name} ==="


def _render_rows(rows: Iterable[Iterable[object]]) -> list[str]:
    lines: list[str] = []
    for row in rows:
        cells = ["" if value is None else str(value).strip() for value in row]
        if any(cells):
            lines.append(",".join(cells).rstrip(","))
    return lines


def _xls_cell_value(cell: xlrd.sheet.Cell) -> object:
    # xlrd stores every number as float; whole numbers are shown as integers
    if cell.ctype == xlrd.XL_CELL_NUMBER and float(cell.value).is_integer():
        return int(cell.value)
    if cell.ctype in (xlrd.XL_CELL_EMPTY, xlrd.XL_CELL_BLANK):
        return None
    return cell.value


class SpreadsheetReader:
    """Converts every sheet to CSV-style lines under a sheet-name header.

    Sheets keep workbook order and blank rows are dropped. A CSV upload is
    treated as a single sheet named after the file.
    """

    def extract(self, data: bytes, filename: str) -> str:
        extension = file_extension(filename)
        if extension == "csv":
            sheets = [(PurePosixPath(filename).stem or "Sheet1", self._csv_rows(data))]
        elif extension == "xls" and not data.startswith(_ZIP_MAGIC):
            sheets = self._legacy_workbook_sheets(data)
        else:
            sheets = self._workbook_sheets(data)

        blocks = []
        for name, lines in sheets:
            blocks.append("\n".join([sheet_header(name), *lines]))
        return "\n\n".join(blocks).strip()

    @staticmethod
    def _csv_rows(data: bytes) -> list[str]:
        text = data.decode("utf-8-sig", errors="replace")
        try:
            return _render_rows(csv.reader(io.StringIO(text)))
        except csv.Error as exc:
            raise SpreadsheetExtractionError(f"CSV could not be parsed: {exc}") from exc

    @staticmethod
    def _legacy_workbook_sheets(data: bytes) -> list[tuple[str, list[str]]]:
        """BIFF .xls workbooks (Excel 97-2003), read with xlrd."""
        try:
            book = xlrd.open_workbook(file_contents=data, on_demand=True)
        except Exception as exc:
            raise SpreadsheetExtractionError(f"xlrd could not open workbook: {exc}") from exc
        try:
            sheets = []
            for index in range(book.nsheets):
                sheet = book.sheet_by_index(index)
                rows = (
                    [_xls_cell_value(cell) for cell in sheet.row(r)] for r in range(sheet.nrows)
                )
                sheets.append((sheet.name, _render_rows(rows)))
                book.unload_sheet(index)
            return sheets
        finally:
            book.release_resources()

    @staticmethod
    def _workbook_sheets(data: bytes) -> list[tuple[str, list[str]]]:
        try:
            workbook = openpyxl.load_workbook(io.BytesIO(data), data_only=True, read_only=True)
        except Exception as exc:
            raise SpreadsheetExtractionError(f"openpyxl could not open workbook: {exc}") from exc
        try:
            return [
                (sheet.title, _render_rows(sheet.iter_rows(values_only=True)))
                for sheet in workbook.worksheets
            ]
        finally:
            workbook.close()
