"""
import_engine.importer - Top-level orchestrator.

Coordinates parsers → validator → duplicates → store and produces
a structured ImportResult.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from import_engine.duplicates import find_duplicate
from import_engine.errors import RowError, format_row_message
from import_engine.parsers import read_rows
from import_engine.report import ImportResult
from import_engine.store import PeopleStore, StoreError
from import_engine.validator import normalize_row

logger = logging.getLogger(__name__)

FIRST_DATA_ROW = 2      # row 1 = header


@dataclass(frozen=True)
class ImportOptions:
    skip_duplicates: bool = False


def run_import(
    file_content: bytes,
    filename: str,
    *,
    store: PeopleStore,
    owner_id: str,
    options: Optional[ImportOptions] = None,
) -> ImportResult:
    """
    Import an uploaded people file on behalf of *owner_id*.

    Parameters
    ----------
    file_content : raw upload bytes
    filename : original file name; only its extension is used
    store : where existing people are read from and new ones written to
    owner_id : every snapshot read and insert is scoped to this owner
    options : ImportOptions (skip_duplicates)

    Returns
    -------
    ImportResult covering every parsed row.

    UnsupportedFormatError / EmptyFileError, and anything the snapshot
    read raises, propagate; nothing has been written at that point.
    """
    options = options or ImportOptions()
    rows = read_rows(file_content, filename)
    snapshot = store.snapshot(owner_id)

    result = ImportResult()
    for row_number, raw in enumerate(rows, start=FIRST_DATA_ROW):
        try:
            candidate = normalize_row(raw, row_number)
        except RowError as exc:
            logger.debug("Row %d rejected: %s", row_number, exc.reason)
            result.add_failure(str(exc))
            continue

        match = find_duplicate(candidate, snapshot)
        if match is not None:
            logger.debug("Row %d (%s) duplicates %r by %s",
                         row_number, candidate.name, match.matched_name, match.signal)
            result.add_duplicate(row_number, candidate.name)
            if options.skip_duplicates:
                result.add_skipped()
                continue

        try:
            store.insert(owner_id, candidate)
        except StoreError as exc:
            result.add_failure(format_row_message(row_number, str(exc), candidate.name))
        else:
            result.add_success()

    logger.info(
        "Import %s for owner %s: %d rows, %d imported, %d failed, %d duplicates",
        filename, owner_id, len(rows), result.success, result.failed, result.duplicates,
    )
    return result
