"""Workbook to delimited text rendering.

OOXML workbooks (.xlsx, .xlsm) are read with openpyxl, legacy BIFF
workbooks (.xls) with xlrd. Both render through the same row and sheet
formatting.
"""

import csv
import io
import zipfile
from collections.abc import Iterable, Iterator
from typing import Any

import xlrd
from xlrd.sheet import Cell
from xlrd.sheet import Sheet as XlsSheet
from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException

from filecontext.extraction.base import BaseExtractor
from filecontext.extraction.exceptions import DecodeError
from filecontext.logging.logger import Log
from filecontext.pipeline.models import InputFile

# Compound File Binary signature shared by every BIFF8 .xls file.
OLE_SIGNATURE = b"\xd0\xcf\x11\xe0\xa1\xb1\x1a\xe1"

Sheet = tuple[str, str]


def sheet_header(index: int, name: str) -> str:
    """Delimiter line placed before each sheet of a multi-sheet workbook."""
    return f"=== Sheet {index}: {name} ==="


def is_legacy_workbook(raw: bytes) -> bool:
    return raw.startswith(OLE_SIGNATURE)


class SpreadsheetExtractor(BaseExtractor):
    """Renders every sheet of a workbook as CSV, in workbook order."""

    def extract(self, file: InputFile) -> str:
        raw = file.read_bytes()
        if is_legacy_workbook(raw):
            Log.debug(f"Reading {file.name} as a legacy .xls workbook")
            sheets = self._read_xls(file.name, raw)
        else:
            sheets = self._read_xlsx(file.name, raw)

        if len(sheets) == 1:
            return sheets[0][1]

        blocks = [
            f"{sheet_header(index, title)}\n{body}" if body else sheet_header(index, title)
            for index, (title, body) in enumerate(sheets, start=1)
        ]
        return "\n\n".join(blocks)

    def _read_xlsx(self, name: str, raw: bytes) -> list[Sheet]:
        try:
            workbook = load_workbook(io.BytesIO(raw), read_only=True, data_only=True)
        except (InvalidFileException, zipfile.BadZipFile, KeyError, ValueError, OSError) as exc:
            raise DecodeError(f"Could not open workbook {name}: {exc}") from exc

        try:
            return [
                (worksheet.title, self._render_rows(worksheet.iter_rows(values_only=True)))
                for worksheet in workbook.worksheets
            ]
        finally:
            workbook.close()

    def _read_xls(self, name: str, raw: bytes) -> list[Sheet]:
        try:
            book = xlrd.open_workbook(file_contents=raw)
        except Exception as exc:
            raise DecodeError(f"Could not open legacy workbook {name}: {exc}") from exc

        try:
            return [
                (sheet.name, self._render_rows(self._xls_rows(sheet, book.datemode)))
                for sheet in book.sheets()
            ]
        finally:
            book.release_resources()

    @staticmethod
    def _xls_rows(sheet: XlsSheet, datemode: int) -> Iterator[tuple[Any, ...]]:
        for row_index in range(sheet.nrows):
            yield tuple(
                xls_cell_value(cell, datemode) for cell in sheet.row(row_index)
            )

    @staticmethod
    def _render_rows(rows: Iterable[tuple[Any, ...]]) -> str:
        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator="\n")
        pending_blank = 0
        for row in rows:
            cells = ["" if value is None else str(value) for value in row]
            while cells and cells[-1] == "":
                cells.pop()
            if not cells:
                pending_blank += 1
                continue
            # Blank rows between data rows are kept, trailing ones are not.
            for _ in range(pending_blank):
                writer.writerow([])
            pending_blank = 0
            writer.writerow(cells)
        return buffer.getvalue().rstrip("\n")


def xls_cell_value(cell: Cell, datemode: int) -> Any:
    """Map an xlrd cell to the value openpyxl would report for it."""
    if cell.ctype in (xlrd.XL_CELL_EMPTY, xlrd.XL_CELL_BLANK):
        return None
    if cell.ctype == xlrd.XL_CELL_NUMBER and float(cell.value).is_integer():
        return int(cell.value)
    if cell.ctype == xlrd.XL_CELL_DATE:
        return xlrd.xldate_as_datetime(cell.value, datemode)
    if cell.ctype == xlrd.XL_CELL_BOOLEAN:
        return bool(cell.value)
    if cell.ctype == xlrd.XL_CELL_ERROR:
        return xlrd.error_text_from_code.get(cell.value, "#ERR")
    return cell.value
