import io

from openpyxl import load_workbook
from sqlalchemy import select

from db import get_session, Person
from tests.helpers import csv_bytes, xlsx_bytes

HEADER = ["Name", "Email", "Phone", "Skills", "Tags", "WhatsApp", "Notes"]


def upload(client, headers, content, filename, skip=None):
    data = {"file": (io.BytesIO(content), filename)}
    if skip is not None:
        data["skipDuplicates"] = skip
    return client.post("/people/import", data=data, headers=headers,
                       content_type="multipart/form-data")


def people(owner_id):
    session = get_session()
    try:
        return list(session.scalars(
            select(Person).where(Person.user_id == owner_id).order_by(Person.name)
        ))
    finally:
        session.close()


def test_unauthorized_without_token(client, owner):
    resp = upload(client, {}, csv_bytes(["name"], ["Ann"]), "p.csv")
    assert resp.status_code == 401
    assert resp.get_json() == {"error": "Unauthorized"}


def test_unauthorized_with_unknown_token(client, owner):
    resp = upload(client, {"Authorization": "Bearer nope"}, csv_bytes(["name"], ["Ann"]), "p.csv")
    assert resp.status_code == 401


def test_missing_file(client, auth_headers):
    resp = client.post("/people/import", data={"skipDuplicates": "true"},
                       headers=auth_headers, content_type="multipart/form-data")
    assert resp.status_code == 400
    assert resp.get_json() == {"error": "No file provided"}


def test_unsupported_extension(client, auth_headers, owner):
    resp = upload(client, auth_headers, csv_bytes(["name"], ["Ann"]), "people.txt")
    assert resp.status_code == 400
    assert resp.get_json() == {"error": "Invalid file format. Only CSV, XLS, XLSX are supported."}
    assert people(owner.id) == []


def test_empty_file(client, auth_headers):
    resp = upload(client, auth_headers, b"name,email\n", "people.csv")
    assert resp.status_code == 400
    assert resp.get_json() == {"error": "File is empty or invalid format"}


def test_csv_import_persists_normalised_people(client, auth_headers, owner):
    content = csv_bytes(
        HEADER,
        ["Ann Lee", "ann@example.com", "0812", "Go, Rust,  Go", "", "", "  met at PyCon "],
        ["   ", "", "", "", "", "", ""],
        ["Ben", "", "", "", "Friend, ", "0899", ""],
    )

    resp = upload(client, auth_headers, content, "people.csv")

    assert resp.status_code == 200
    body = resp.get_json()
    assert body == {
        "success": 2, "failed": 1, "duplicates": 0,
        "errors": ["Row 3: Name is required"], "duplicateRecords": [],
    }

    ann, ben = people(owner.id)
    assert ann.skills == ["Go", "Rust", "Go"]
    assert ann.tags is None
    assert ann.contacts == {"email": "ann@example.com", "phone": "0812"}
    assert ann.notes == "met at PyCon"
    assert ann.profession is None
    assert ben.tags == ["Friend"]
    assert ben.contacts == {"whatsapp": "0899"}


def test_xlsx_import(client, auth_headers, owner):
    content = xlsx_bytes(HEADER, ["Ann", "bad-email", None, None, None, None, None],
                         ["Ben", None, 81234567890, None, None, None, None])

    resp = upload(client, auth_headers, content, "people.xlsx")

    body = resp.get_json()
    assert (body["success"], body["failed"]) == (1, 1)
    assert body["errors"] == ["Row 2 (Ann): Invalid email format"]
    (ben,) = people(owner.id)
    assert ben.contacts == {"phone": "81234567890"}


def test_duplicates_skipped_only_when_requested(client, auth_headers, owner, add_person):
    add_person(owner.id, "Jane Doe", contacts={"phone": "0812"})
    content = csv_bytes(HEADER, ["jane doe", "", "", "", "", "", ""],
                        ["Jane Doh", "", "", "", "", "", ""])

    resp = upload(client, auth_headers, content, "people.csv", skip="true")
    body = resp.get_json()
    assert (body["success"], body["duplicates"]) == (1, 1)
    assert body["duplicateRecords"] == [{"row": 2, "name": "jane doe"}]
    assert [p.name for p in people(owner.id)] == ["Jane Doe", "Jane Doh"]

    resp = upload(client, auth_headers, content, "people.csv", skip="false")
    body = resp.get_json()
    # Jane Doh now exists too
    assert (body["success"], body["duplicates"]) == (2, 2)
    assert len(people(owner.id)) == 4


def test_duplicate_snapshot_is_per_owner(client, auth_headers, owner, other_owner, add_person):
    add_person(other_owner.id, "Ann")
    resp = upload(client, auth_headers, csv_bytes(["name"], ["Ann"]), "people.csv", skip="true")
    assert resp.get_json()["duplicates"] == 0
    assert resp.get_json()["success"] == 1


def test_unexpected_failure_is_500(client, auth_headers, monkeypatch):
    import api.routes_import as routes

    def boom(*_a, **_kw):
        raise RuntimeError("connection refused")

    monkeypatch.setattr(routes, "run_import", boom)
    resp = upload(client, auth_headers, csv_bytes(["name"], ["Ann"]), "people.csv")
    assert resp.status_code == 500
    assert resp.get_json() == {"error": "connection refused"}


def test_template_download(client):
    resp = client.get("/people/import/template")
    assert resp.status_code == 200
    assert "nocbook-import-template.xlsx" in resp.headers["Content-Disposition"]

    wb = load_workbook(io.BytesIO(resp.data))
    assert wb.sheetnames == ["Import Template", "Instructions"]
    header = [c.value for c in wb["Import Template"][1]]
    assert header[0] == "name" and header[-1] == "notes"


def test_template_round_trips_through_import(client, auth_headers):
    template = client.get("/people/import/template").data
    resp = upload(client, auth_headers, template, "nocbook-import-template.xlsx")
    body = resp.get_json()
    assert (body["success"], body["failed"]) == (3, 0)


def test_oversized_upload_is_413(app, client, auth_headers):
    app.config["MAX_CONTENT_LENGTH"] = 64
    content = csv_bytes(["name", "notes"], ["Ann", "x" * 500])

    resp = upload(client, auth_headers, content, "people.csv")

    assert resp.status_code == 413
    assert resp.get_json() == {"error": "File too large"}


def test_import_summary_is_logged(client, auth_headers, caplog):
    upload(client, auth_headers, csv_bytes(["name"], ["Ann"]), "people.csv")

    messages = [r.getMessage() for r in caplog.records if r.name == "import_engine.importer"]
    assert any("1 imported" in m for m in messages)
