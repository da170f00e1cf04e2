"""
import_engine - People import pipeline.

Public API:
    run_import(content, filename, store=, owner_id=, options=) → ImportResult
    build_template()                                          → .xlsx bytes
"""

from import_engine.importer import run_import, ImportOptions          # noqa: F401
from import_engine.report import ImportResult                         # noqa: F401
from import_engine.store import PeopleStore, SqlPeopleStore, StoreError  # noqa: F401
from import_engine.template import build_template                     # noqa: F401
from import_engine.errors import (                                    # noqa: F401
    ImportFileError, UnsupportedFormatError, EmptyFileError,
    RowError, MissingNameError, InvalidEmailError,
)
