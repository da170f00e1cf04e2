"""
auth - Resolve the calling owner from an API token.

Clients send ``Authorization: Bearer <token>``; the token is looked up
in users.api_token.  Anything else is treated as anonymous.
"""

from __future__ import annotations

import secrets
from typing import Optional

from flask import request
from sqlalchemy import select
from sqlalchemy.orm import Session

from db.models import User


def bearer_token() -> Optional[str]:
    header = request.headers.get("Authorization", "")
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def current_user(session: Session) -> Optional[User]:
    """The authenticated User for this request, or None."""
    token = bearer_token()
    if token is None:
        return None
    return session.scalars(select(User).where(User.api_token == token)).first()


def new_token() -> str:
    return secrets.token_urlsafe(32)
