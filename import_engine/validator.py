"""
import_engine.validator - Validate and normalise one raw import row.

Single-responsibility: given a raw {header: value} dict and its 1-based
source row number, either return a PersonCandidate ready for duplicate
checking and insertion, or raise a RowError subclass.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from import_engine.errors import InvalidEmailError, MissingNameError
from import_engine.field_map import CONTACT_CHANNELS

_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


@dataclass
class PersonCandidate:
    """A normalised row.  Absent optional values are None, never ''/[]/{}."""

    row: int
    name: str
    profession: Optional[str] = None
    role: Optional[str] = None
    skills: Optional[list[str]] = None
    tags: Optional[list[str]] = None
    contacts: Optional[dict[str, str]] = None
    notes: Optional[str] = None

    def contact(self, channel: str) -> Optional[str]:
        return (self.contacts or {}).get(channel)

    def to_record(self) -> dict:
        """Column values for a new Person, minus identity/owner."""
        return {
            "name": self.name,
            "profession": self.profession,
            "role": self.role,
            "skills": self.skills,
            "tags": self.tags,
            "contacts": self.contacts,
            "notes": self.notes,
        }


def normalize_row(raw: Mapping[str, Any], row_number: int) -> PersonCandidate:
    """
    Validate *raw* and build a PersonCandidate.

    Name is checked first, then email; the first failure is raised.
    """
    name = clean_text(raw.get("name"))
    if name is None:
        raise MissingNameError(row_number)

    email = clean_text(raw.get("email"))
    if email is not None and not is_valid_email(email):
        raise InvalidEmailError(row_number, name)

    return PersonCandidate(
        row=row_number,
        name=name,
        profession=clean_text(raw.get("profession")),
        role=clean_text(raw.get("role")),
        skills=split_list(raw.get("skills")),
        tags=split_list(raw.get("tags")),
        contacts=build_contacts(raw),
        notes=clean_text(raw.get("notes")),
    )


# ── Field helpers ──────────────────────────────────────────────────────

def is_valid_email(email: str) -> bool:
    return bool(_EMAIL_RE.match(email))


def clean_text(value: Any) -> Optional[str]:
    """Trimmed string, or None when absent/blank."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def split_list(value: Any) -> Optional[list[str]]:
    """
    'Go, Rust,  Go' → ['Go', 'Rust', 'Go'].

    Absent or blank input gives None so the column can stay NULL.
    Order and repeats are preserved.
    """
    text = clean_text(value)
    if text is None:
        return None
    return [item.strip() for item in text.split(",") if item.strip()]


def build_contacts(raw: Mapping[str, Any]) -> Optional[dict[str, str]]:
    """Collect non-blank contact channels; None when there are none."""
    contacts: dict[str, str] = {}
    for channel in CONTACT_CHANNELS:
        val = clean_text(raw.get(channel))
        if val is not None:
            contacts[channel] = val
    return contacts or None
