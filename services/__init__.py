"""
services - Business-logic layer sitting between API and DB.
"""

from services.people_service import PeopleService     # noqa: F401
