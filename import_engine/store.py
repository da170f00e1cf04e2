"""
import_engine.store - Persistence seam for the import pipeline.

The importer only ever talks to a PeopleStore, so tests can hand it an
in-memory fake while the web layer passes a SqlPeopleStore bound to the
request's session.
"""

from __future__ import annotations

import logging
from typing import Protocol

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from db.models import Person
from import_engine.duplicates import ExistingPerson
from import_engine.validator import PersonCandidate

logger = logging.getLogger(__name__)


class StoreError(Exception):
    """An insert was rejected by the store (constraint, type, ...)."""


class PeopleStore(Protocol):
    def snapshot(self, owner_id: str) -> list[ExistingPerson]: ...

    def insert(self, owner_id: str, candidate: PersonCandidate) -> str: ...


class SqlPeopleStore:
    """
    SQLAlchemy-backed store.

    Each insert runs inside its own SAVEPOINT so a rejected row is rolled
    back alone.  Committing the outer transaction is the caller's job.
    """

    def __init__(self, session: Session):
        self.session = session

    def snapshot(self, owner_id: str) -> list[ExistingPerson]:
        rows = self.session.execute(
            select(Person.name, Person.contacts).where(Person.user_id == owner_id)
        ).all()
        return [ExistingPerson(name=name, contacts=contacts) for name, contacts in rows]

    def insert(self, owner_id: str, candidate: PersonCandidate) -> str:
        person = Person(user_id=owner_id, **candidate.to_record())
        try:
            with self.session.begin_nested():
                self.session.add(person)
                self.session.flush()
        except SQLAlchemyError as exc:
            # Drop the half-added object so the next flush doesn't retry it
            if person in self.session:
                self.session.expunge(person)
            raise StoreError(_short_message(exc)) from exc
        return person.id


def _short_message(exc: SQLAlchemyError) -> str:
    orig = getattr(exc, "orig", None)
    if orig is not None:
        return str(orig)
    return str(exc).splitlines()[0]
