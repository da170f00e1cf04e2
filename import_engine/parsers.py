"""
import_engine.parsers - Turn an uploaded file into raw row dicts.

Responsibilities:
  • Accept or reject by file extension (.csv / .xlsx / .xls)
  • Workbooks are routed by their magic bytes, not their name
  • BOM removal and delimiter detection for delimited text
  • Header trimming + lowercasing, so later stages use one vocabulary
  • Returns a plain list of {header: value} dicts in file order

Values are handed on as loosely-typed strings; validation happens
per row in import_engine.validator.
"""

from __future__ import annotations

import csv
import io
import logging
import zipfile
from datetime import date, datetime, time
from typing import Any, Callable, Iterable, Optional

import xlrd
from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException

from import_engine.errors import EmptyFileError, UnsupportedFormatError

logger = logging.getLogger(__name__)

Row = dict[str, Any]

ZIP_MAGIC = b"PK\x03\x04"                  # .xlsx (OOXML)
OLE_MAGIC = b"\xd0\xcf\x11\xe0\xa1\xb1\x1a\xe1"  # .xls (BIFF in OLE2)
CSV_DELIMITERS = ",;\t|"
BLANK_HEADER = "__empty"


def read_rows(content: bytes, filename: str) -> list[Row]:
    """
    Parse *content* with the adapter matching *filename*'s extension.

    Raises UnsupportedFormatError for unknown extensions and
    EmptyFileError when nothing but (at most) a header comes out.
    """
    parser = _adapter_for(filename)
    rows = parser(content)
    if not rows:
        raise EmptyFileError(f"{filename}: no data rows")
    logger.debug("Parsed %d rows from %s", len(rows), filename)
    return rows


def normalize_header(header: Any) -> str:
    return str(header).strip().lower()


def _adapter_for(filename: str) -> Callable[[bytes], list[Row]]:
    lowered = (filename or "").lower()
    if lowered.endswith(".csv"):
        return parse_csv
    if lowered.endswith((".xlsx", ".xls")):
        return parse_workbook
    raise UnsupportedFormatError(f"Unsupported file type: {filename!r}")


# ── Delimited text ─────────────────────────────────────────────────────

def parse_csv(raw: str | bytes) -> list[Row]:
    """
    Header row required.  Blank lines are skipped by DictReader.

    The separator is guessed from the header line among , ; TAB and |
    (semicolons are what European Excel writes); comma when in doubt.
    """
    if isinstance(raw, bytes):
        text = raw.decode("utf-8-sig", errors="replace")
    else:
        text = raw.removeprefix("\ufeff")
    if not text.strip():
        return []

    reader = csv.DictReader(io.StringIO(text), delimiter=sniff_delimiter(text))
    if reader.fieldnames is None:
        return []

    reader.fieldnames = [normalize_header(h) for h in reader.fieldnames]

    rows: list[Row] = []
    for record in reader:
        # Overflow cells land under the None key; there is no header for them
        record.pop(None, None)
        rows.append(record)
    return rows


def sniff_delimiter(text: str) -> str:
    header = next((line for line in text.splitlines() if line.strip()), "")
    try:
        return csv.Sniffer().sniff(header, delimiters=CSV_DELIMITERS).delimiter
    except csv.Error:
        return csv.excel.delimiter


# ── Spreadsheets ───────────────────────────────────────────────────────

def parse_workbook(raw: bytes) -> list[Row]:
    """
    Route .xlsx/.xls uploads by content.  Browsers and web exports often
    name an OOXML workbook '.xls', so the extension is not trusted here.
    """
    if raw.startswith(ZIP_MAGIC):
        return parse_xlsx(raw)
    if raw.startswith(OLE_MAGIC):
        return parse_xls(raw)
    # Bare BIFF streams have no OLE wrapper; xlrd raises for anything else
    return parse_xls(raw)


def parse_xlsx(raw: bytes) -> list[Row]:
    """First worksheet only; the first non-empty row is the header."""
    try:
        wb = load_workbook(io.BytesIO(raw), read_only=True, data_only=True)
    except (InvalidFileException, zipfile.BadZipFile, KeyError, OSError) as exc:
        raise EmptyFileError(f"Cannot open workbook: {exc}") from exc

    try:
        if not wb.worksheets:
            return []
        sheet = wb.worksheets[0]
        return _rows_from_grid(sheet.iter_rows(values_only=True))
    finally:
        wb.close()


def parse_xls(raw: bytes) -> list[Row]:
    """Legacy BIFF workbooks via xlrd; first sheet only."""
    try:
        book = xlrd.open_workbook(file_contents=raw)
    except (xlrd.XLRDError, AssertionError, ValueError) as exc:
        raise EmptyFileError(f"Cannot open workbook: {exc}") from exc

    if book.nsheets == 0:
        return []
    sheet = book.sheet_by_index(0)

    def cells():
        for r in range(sheet.nrows):
            yield tuple(_xls_value(cell, book.datemode) for cell in sheet.row(r))

    return _rows_from_grid(cells())


def _xls_value(cell, datemode: int) -> Any:
    if cell.ctype in (xlrd.XL_CELL_EMPTY, xlrd.XL_CELL_BLANK):
        return None
    if cell.ctype == xlrd.XL_CELL_DATE:
        return xlrd.xldate.xldate_as_datetime(cell.value, datemode)
    if cell.ctype == xlrd.XL_CELL_BOOLEAN:
        return bool(cell.value)
    return cell.value


def _rows_from_grid(grid: Iterable[tuple]) -> list[Row]:
    """
    Convert a cell grid into header-keyed dicts.

    Empty cells are left out of a row's dict entirely and rows with no
    values at all are skipped, matching what spreadsheet users expect.
    """
    headers: Optional[list[str]] = None
    rows: list[Row] = []

    for values in grid:
        if _is_blank(values):
            continue
        if headers is None:
            headers = _grid_headers(values)
            continue

        row: Row = {}
        for idx, value in enumerate(values):
            if idx >= len(headers):
                continue
            text = _cell_text(value)
            if text is not None:
                row[headers[idx]] = text
        if row:
            rows.append(row)

    return rows


def _grid_headers(values: tuple) -> list[str]:
    """
    Header cells, lowercased.  Blank ones become __empty, __empty_1, ...
    so values sitting under them still keep their row alive.
    """
    headers: list[str] = []
    blanks = 0
    for value in values:
        text = _cell_text(value)
        header = normalize_header(text) if text is not None else ""
        if not header:
            header = BLANK_HEADER if blanks == 0 else f"{BLANK_HEADER}_{blanks}"
            blanks += 1
        headers.append(header)
    return headers


def _is_blank(values: tuple) -> bool:
    return all(_cell_text(v) is None for v in values)


def _cell_text(value: Any) -> Optional[str]:
    """Stringify a spreadsheet cell; None for empty cells."""
    if value is None:
        return None
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if isinstance(value, float) and value.is_integer():
        # Phone numbers typed as numbers must not grow a trailing '.0'
        return str(int(value))
    if isinstance(value, datetime):
        if value.time() == time(0, 0):
            return value.date().isoformat()
        return value.isoformat()
    if isinstance(value, (date, time)):
        return value.isoformat()
    text = str(value)
    return text if text != "" else None
