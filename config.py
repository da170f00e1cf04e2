"""
NocBook - Centralised configuration.

All tunables live here.  Every other module imports from config
instead of reading os.environ directly.
"""

from __future__ import annotations
import os
from pathlib import Path


# ── Paths ──────────────────────────────────────────────────────────────
BASE_DIR = Path(__file__).resolve().parent

# ── Database ───────────────────────────────────────────────────────────
DB_URL = os.environ.get("NOCBOOK_DB", f"sqlite:///{BASE_DIR / 'nocbook.sqlite'}")

# ── Server ─────────────────────────────────────────────────────────────
HOST   = os.environ.get("NOCBOOK_HOST", "0.0.0.0")
PORT   = int(os.environ.get("NOCBOOK_PORT", "5000"))
DEBUG  = os.environ.get("NOCBOOK_DEBUG", "0") == "1"
SECRET = os.environ.get("NOCBOOK_SECRET", "nocbook-dev-key-change-in-prod")

# ── Logging ────────────────────────────────────────────────────────────
LOG_LEVEL = os.environ.get("NOCBOOK_LOG_LEVEL", "INFO").upper()

# ── Uploads ────────────────────────────────────────────────────────────
MAX_UPLOAD_MB = int(os.environ.get("NOCBOOK_MAX_UPLOAD_MB", "10"))
ALLOWED_EXTENSIONS = (".csv", ".xlsx", ".xls")

# ── Export ─────────────────────────────────────────────────────────────
EXPORT_FORMATS = ("xlsx", "csv")
TEMPLATE_FILENAME = "nocbook-import-template.xlsx"
