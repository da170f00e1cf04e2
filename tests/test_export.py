import io

from openpyxl import load_workbook

from db import get_session
from import_engine.field_map import COLUMNS
from services.people_service import PeopleService


def test_list_for_owner_filters(owner, other_owner, add_person):
    add_person(owner.id, "bob", role="Friend", tags=["Tech"], skills=["Go"])
    add_person(owner.id, "Ann", role="Client", tags=["tech", "Design"])
    add_person(other_owner.id, "Zed", role="Friend", tags=["Tech"])

    session = get_session()
    try:
        names = lambda **kw: [p.name for p in PeopleService.list_for_owner(session, owner.id, **kw)]
        assert names() == ["Ann", "bob"]
        assert names(role="friend") == ["bob"]
        assert names(tag="TECH") == ["Ann", "bob"]
        assert names(skill="go") == ["bob"]
        assert names(tag="design", skill="go") == []
    finally:
        session.close()


def test_export_requires_auth(client, owner):
    assert client.get("/people/export").status_code == 401


def test_export_rejects_unknown_format(client, auth_headers):
    resp = client.get("/people/export?format=pdf", headers=auth_headers)
    assert resp.status_code == 400


def test_csv_export_uses_import_layout(client, auth_headers, owner, add_person):
    add_person(owner.id, "Ann", skills=["Go", "Rust"], contacts={"email": "ann@example.com"})

    resp = client.get("/people/export?format=csv", headers=auth_headers)

    assert resp.status_code == 200
    assert resp.mimetype == "text/csv"
    assert ".csv" in resp.headers["Content-Disposition"]
    lines = resp.data.decode("utf-8-sig").splitlines()
    assert lines[0] == ",".join(COLUMNS)
    assert lines[1].startswith('Ann,,,"Go, Rust",')
    assert "ann@example.com" in lines[1]


def test_xlsx_export_reimports_cleanly(client, auth_headers, owner, other_owner, add_person):
    add_person(owner.id, "Ann", tags=["Tech"], contacts={"phone": "0812"})

    exported = client.get("/people/export?format=xlsx", headers=auth_headers).data
    ws = load_workbook(io.BytesIO(exported)).active
    assert [c.value for c in ws[1]] == list(COLUMNS)
    assert ws["A2"].value == "Ann"

    other_headers = {"Authorization": f"Bearer {other_owner.api_token}"}
    resp = client.post(
        "/people/import",
        data={"file": (io.BytesIO(exported), "export.xlsx")},
        headers=other_headers, content_type="multipart/form-data",
    )
    assert resp.get_json()["success"] == 1


def test_export_checks_auth_before_format(client, owner):
    assert client.get("/people/export?format=pdf").status_code == 401
