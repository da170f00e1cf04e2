"""
services.people_service - Owner-scoped listing and export of Person rows.

All session management is the caller's responsibility (open before,
close after).  Exports use the import column vocabulary so an exported
file can be fed straight back into /people/import.
"""

from __future__ import annotations

import csv
import io
from typing import Iterable, Optional

from openpyxl import Workbook
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from db.models import Person
from import_engine.field_map import COLUMNS, CONTACT_CHANNELS, LIST_FIELDS
from import_engine.template import write_table

MIMETYPES = {
    "csv":  "text/csv",
    "xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
}


class PeopleService:

    # ── Read ───────────────────────────────────────────────────────────

    @staticmethod
    def list_for_owner(
        session: Session,
        owner_id: str,
        *,
        role: Optional[str] = None,
        tag: Optional[str] = None,
        skill: Optional[str] = None,
    ) -> list[Person]:
        """
        People belonging to *owner_id*, ordered by name.

        role matches exactly (case-insensitive); tag / skill must be one
        of the person's list entries (case-insensitive).
        """
        stmt = select(Person).where(Person.user_id == owner_id)
        if role:
            stmt = stmt.where(func.lower(Person.role) == role.strip().lower())
        stmt = stmt.order_by(func.lower(Person.name), Person.created_at)
        people = list(session.scalars(stmt))

        # JSON list membership is filtered here to stay dialect-neutral
        if tag:
            people = [p for p in people if _has_item(p.tags, tag)]
        if skill:
            people = [p for p in people if _has_item(p.skills, skill)]
        return people

    # ── Export ─────────────────────────────────────────────────────────

    @staticmethod
    def to_row(person: Person) -> list[Optional[str]]:
        """Flatten a Person into COLUMNS order."""
        contacts = person.contacts or {}
        values: dict[str, Optional[str]] = {
            "name": person.name,
            "profession": person.profession,
            "role": person.role,
            "notes": person.notes,
        }
        for field in LIST_FIELDS:
            items = getattr(person, field)
            values[field] = ", ".join(items) if items else None
        for channel in CONTACT_CHANNELS:
            values[channel] = contacts.get(channel)
        return [values[col] for col in COLUMNS]

    @classmethod
    def export(cls, people: Iterable[Person], fmt: str) -> tuple[bytes, str]:
        """Render *people* as csv or xlsx; returns (payload, mimetype)."""
        rows = [cls.to_row(p) for p in people]
        if fmt == "csv":
            return _to_csv(rows), MIMETYPES["csv"]
        if fmt == "xlsx":
            return _to_xlsx(rows), MIMETYPES["xlsx"]
        raise ValueError(f"Unsupported export format: {fmt!r}")


def _has_item(items: Optional[list], wanted: str) -> bool:
    wanted = wanted.strip().lower()
    return any(str(i).strip().lower() == wanted for i in (items or []))


def _to_csv(rows: list[list]) -> bytes:
    buf = io.StringIO()
    writer = csv.writer(buf)
    writer.writerow(COLUMNS)
    for row in rows:
        writer.writerow(["" if v is None else v for v in row])
    # BOM so Excel opens UTF-8 names correctly; the importer strips it
    return ("\ufeff" + buf.getvalue()).encode("utf-8")


def _to_xlsx(rows: list[list]) -> bytes:
    wb = Workbook()
    ws = wb.active
    ws.title = "People"
    write_table(ws, COLUMNS, rows)
    buf = io.BytesIO()
    wb.save(buf)
    return buf.getvalue()
