"""
db.models - SQLAlchemy ORM declarations.

Tables
------
users   - account owners.  Each carries an API token used by the
          bearer-auth check in auth.py.
people  - one row per contact, always scoped to an owner.  List and
          mapping attributes (skills, tags, contacts) are JSON columns
          and stay NULL rather than holding empty containers.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    JSON, CheckConstraint, Column, DateTime, ForeignKey, Index, String, Text,
)
from sqlalchemy.orm import DeclarativeBase, relationship


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _new_id() -> str:
    return uuid.uuid4().hex


class Base(DeclarativeBase):
    pass


class User(Base):
    __tablename__ = "users"

    id         = Column(String(32), primary_key=True, default=_new_id)
    email      = Column(String(320), unique=True, nullable=False)
    api_token  = Column(String(128), unique=True, nullable=False, index=True)
    created_at = Column(DateTime, default=_utcnow)

    people = relationship(
        "Person", back_populates="owner",
        cascade="all, delete-orphan", lazy="select",
    )


class Person(Base):
    __tablename__ = "people"

    # ── Identity ───────────────────────────────────────────────────────
    id      = Column(String(32), primary_key=True, default=_new_id)
    user_id = Column(String(32),
                     ForeignKey("users.id", ondelete="CASCADE"),
                     nullable=False, index=True)

    # ── Profile ────────────────────────────────────────────────────────
    name       = Column(String(200), nullable=False)
    profession = Column(String(200), nullable=True)
    role       = Column(String(100), nullable=True)
    skills     = Column(JSON(none_as_null=True), nullable=True)       # list[str]
    tags       = Column(JSON(none_as_null=True), nullable=True)       # list[str]
    contacts   = Column(JSON(none_as_null=True), nullable=True)       # {channel: value}
    notes      = Column(Text, nullable=True)

    # ── Timestamps ─────────────────────────────────────────────────────
    created_at = Column(DateTime, default=_utcnow)
    updated_at = Column(DateTime, default=_utcnow, onupdate=_utcnow)

    owner = relationship("User", back_populates="people")

    __table_args__ = (
        CheckConstraint("length(trim(name)) > 0", name="ck_people_name_not_blank"),
        Index("ix_people_owner_name", "user_id", "name"),
    )

    # ── Serialisation ──────────────────────────────────────────────────
    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "name": self.name,
            "profession": self.profession,
            "role": self.role,
            "skills": self.skills,
            "tags": self.tags,
            "contacts": self.contacts,
            "notes": self.notes,
            "created_at": self.created_at.isoformat() if self.created_at else "",
            "updated_at": self.updated_at.isoformat() if self.updated_at else "",
        }
