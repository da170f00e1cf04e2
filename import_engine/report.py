"""
import_engine.report - Structured result of a people import run.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class ImportResult:
    success: int = 0
    failed: int = 0
    duplicates: int = 0
    skipped: int = 0                                           # duplicates not inserted
    errors: list[str] = field(default_factory=list)
    duplicate_records: list[dict] = field(default_factory=list)  # [{row, name}]

    def add_success(self):
        self.success += 1

    def add_failure(self, message: str):
        self.errors.append(message)
        self.failed += 1

    def add_duplicate(self, row: int, name: str):
        self.duplicate_records.append({"row": row, "name": name})
        self.duplicates += 1

    def add_skipped(self):
        self.skipped += 1

    @property
    def total_processed(self) -> int:
        return self.success + self.failed + self.skipped

    def to_dict(self) -> dict:
        return {
            "success": self.success,
            "failed": self.failed,
            "duplicates": self.duplicates,
            "errors": self.errors,
            "duplicateRecords": self.duplicate_records,
        }
