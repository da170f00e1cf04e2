import csv
import io

from openpyxl import Workbook

from import_engine.store import StoreError


class FakeStore:
    """In-memory PeopleStore.  Names in fail_on are rejected on insert."""

    def __init__(self, existing=None, fail_on=()):
        self.existing = list(existing or [])
        self.fail_on = set(fail_on)
        self.inserted = []
        self.snapshot_calls = 0

    def snapshot(self, owner_id):
        self.snapshot_calls += 1
        return list(self.existing)

    def insert(self, owner_id, candidate):
        if candidate.name in self.fail_on:
            raise StoreError("duplicate key value violates unique constraint")
        self.inserted.append((owner_id, candidate))
        return f"id-{len(self.inserted)}"

    @property
    def inserted_names(self):
        return [c.name for _, c in self.inserted]


def csv_bytes(header, *rows):
    buf = io.StringIO()
    writer = csv.writer(buf)
    writer.writerow(header)
    for row in rows:
        writer.writerow(row)
    return buf.getvalue().encode("utf-8")


def xlsx_bytes(header, *rows, extra_sheet=None):
    wb = Workbook()
    ws = wb.active
    ws.append(list(header))
    for row in rows:
        ws.append(list(row))
    if extra_sheet:
        other = wb.create_sheet("Other")
        for row in extra_sheet:
            other.append(list(row))
    buf = io.BytesIO()
    wb.save(buf)
    return buf.getvalue()
