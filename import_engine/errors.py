"""
import_engine.errors - Exception taxonomy for the people import pipeline.

File-level errors abort a run before any row is touched.  Row-level
errors are caught by the importer and recorded against the row.
"""


class ImportFileError(Exception):
    """The uploaded file could not be turned into rows."""


class UnsupportedFormatError(ImportFileError):
    """File extension is not one of .csv / .xlsx / .xls."""


class EmptyFileError(ImportFileError):
    """File parsed to zero data rows, or could not be opened at all."""


class RowError(Exception):
    """Raised when a row cannot be imported."""

    def __init__(self, row: int, reason: str, name: str | None = None):
        self.row = row
        self.reason = reason
        self.name = name
        super().__init__(format_row_message(row, reason, name))


class MissingNameError(RowError):
    def __init__(self, row: int):
        super().__init__(row, "Name is required")


class InvalidEmailError(RowError):
    def __init__(self, row: int, name: str):
        super().__init__(row, "Invalid email format", name)


def format_row_message(row: int, reason: str, name: str | None = None) -> str:
    """'Row 3: reason' or 'Row 3 (Jane): reason'."""
    if name:
        return f"Row {row} ({name}): {reason}"
    return f"Row {row}: {reason}"
