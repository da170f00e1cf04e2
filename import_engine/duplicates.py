"""
import_engine.duplicates - Decide whether a candidate already exists.

Matching runs against a snapshot taken once before the row loop, so
rows inserted earlier in the same run are never matched.

A candidate is a duplicate of an existing person when either
  • the names are equal ignoring case (only the incoming name is trimmed;
    stored names are compared as saved), or
  • any of phone / email / whatsapp is exactly equal on both sides.
Phone numbers are compared verbatim; '+1-555-0100' and '5550100' differ.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from import_engine.field_map import DUPLICATE_CHANNELS
from import_engine.validator import PersonCandidate


@dataclass(frozen=True)
class ExistingPerson:
    """Snapshot entry: just what duplicate matching needs."""
    name: str
    contacts: Optional[dict] = None


@dataclass(frozen=True)
class DuplicateMatch:
    signal: str            # "name" or the contact channel that matched
    matched_name: str


def match_person(
    candidate: PersonCandidate,
    existing: ExistingPerson,
) -> Optional[DuplicateMatch]:
    """Return which signal matched, or None."""
    if existing.name and existing.name.lower() == candidate.name.lower():
        return DuplicateMatch("name", existing.name)

    theirs = existing.contacts if isinstance(existing.contacts, dict) else {}
    if not theirs:
        return None

    for channel in DUPLICATE_CHANNELS:
        mine = candidate.contact(channel)
        if mine is not None and theirs.get(channel) == mine:
            return DuplicateMatch(channel, existing.name)
    return None


def find_duplicate(
    candidate: PersonCandidate,
    snapshot: Iterable[ExistingPerson],
) -> Optional[DuplicateMatch]:
    """First match in snapshot order, or None."""
    for existing in snapshot:
        match = match_person(candidate, existing)
        if match is not None:
            return match
    return None
