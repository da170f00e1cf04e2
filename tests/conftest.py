import pytest

from db import get_session, User, Person
from tests.helpers import FakeStore
from main import create_app


@pytest.fixture
def app():
    """Flask app on a private in-memory SQLite database."""
    app = create_app("sqlite://")
    app.config.update(TESTING=True)
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def session(app):
    s = get_session()
    yield s
    s.close()


def _make_user(email, token):
    s = get_session()
    try:
        user = User(email=email, api_token=token)
        s.add(user)
        s.commit()
        return user
    finally:
        s.close()


@pytest.fixture
def owner(app):
    return _make_user("owner@example.com", "owner-token")


@pytest.fixture
def other_owner(app):
    return _make_user("other@example.com", "other-token")


@pytest.fixture
def auth_headers(owner):
    return {"Authorization": f"Bearer {owner.api_token}"}


@pytest.fixture
def add_person(app):
    """Insert a Person directly, bypassing the importer."""
    def _add(owner_id, name, **fields):
        s = get_session()
        try:
            person = Person(user_id=owner_id, name=name, **fields)
            s.add(person)
            s.commit()
            return person
        finally:
            s.close()
    return _add


@pytest.fixture
def fake_store():
    return FakeStore()
