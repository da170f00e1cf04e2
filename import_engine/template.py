"""
import_engine.template - Downloadable .xlsx import template.

Two sheets:
  Import Template - header row in import vocabulary + example rows
  Instructions    - how to fill the template, one field per line
"""

from __future__ import annotations

import io
from typing import Iterable, Sequence

from openpyxl import Workbook
from openpyxl.styles import Font
from openpyxl.utils import get_column_letter

from import_engine.field_map import COLUMNS, FIELD_DESCRIPTIONS

FONT_HEADER = Font(bold=True)
FONT_TITLE = Font(bold=True, size=14)

COLUMN_WIDTHS: dict[str, int] = {
    "name": 15, "profession": 20, "role": 12, "skills": 30, "tags": 25,
    "discord": 18, "email": 25, "website": 25, "notes": 30,
}
DEFAULT_WIDTH = 15

EXAMPLE_ROWS: list[dict[str, str]] = [
    {
        "name": "John Doe", "profession": "Software Engineer", "role": "Friend",
        "skills": "Python, JavaScript, IoT", "tags": "Tech, Developer",
        "instagram": "johndoe", "whatsapp": "081234567890", "linkedin": "johndoe",
        "github": "johndoe", "discord": "johndoe#1234", "email": "john@example.com",
        "phone": "081234567890", "twitter": "@johndoe", "telegram": "@johndoe",
        "website": "https://johndoe.com", "notes": "Great developer",
    },
    {
        "name": "Jane Smith", "profession": "Designer", "role": "Colleague",
        "skills": "UI/UX, Figma", "tags": "Design, Creative",
        "instagram": "janesmith", "whatsapp": "085678901234", "linkedin": "janesmith",
        "email": "jane@example.com", "phone": "085678901234",
        "website": "https://janesmith.com", "notes": "Talented designer",
    },
    {
        "name": "Ahmad Putra", "profession": "IoT Engineer", "role": "Client",
        "skills": "Arduino, Raspberry Pi, Python", "tags": "Tech, Hardware, IoT",
        "instagram": "ahmadputra", "whatsapp": "087654321098", "linkedin": "ahmadputra",
        "github": "ahmadputra", "email": "ahmad@example.com", "phone": "087654321098",
        "telegram": "ahmadputra", "website": "https://ahmadputra.com",
        "notes": "Expert in IoT systems",
    },
]

INSTRUCTIONS: list[str] = [
    "How to use this template:",
    '1. Fill in the data in the "Import Template" sheet',
    "2. Required field: name (other fields are optional)",
    '3. For skills and tags, separate multiple values with commas (e.g., "Python, JavaScript, IoT")',
    "4. Leave cells empty if you don't have that information",
    "5. Save this file and upload it to NocBook",
]


def write_table(ws, headers: Sequence[str], rows: Iterable[Sequence]) -> None:
    """Bold header row, then one sheet row per item; widths from COLUMN_WIDTHS."""
    ws.append(list(headers))
    for cell in ws[1]:
        cell.font = FONT_HEADER
    for row in rows:
        ws.append(list(row))
    for idx, header in enumerate(headers, start=1):
        ws.column_dimensions[get_column_letter(idx)].width = \
            COLUMN_WIDTHS.get(header, DEFAULT_WIDTH)


def build_template() -> bytes:
    wb = Workbook()

    ws = wb.active
    ws.title = "Import Template"
    write_table(
        ws, COLUMNS,
        ([example.get(col) for col in COLUMNS] for example in EXAMPLE_ROWS),
    )

    info = wb.create_sheet("Instructions")
    info.append(["NocBook Import Template - Instructions"])
    info["A1"].font = FONT_TITLE
    info.append([""])
    for line in INSTRUCTIONS:
        info.append([line])
    info.append([""])
    info.append(["Field Descriptions:"])
    for col in COLUMNS:
        info.append([f"- {col}: {FIELD_DESCRIPTIONS[col]}"])
    info.column_dimensions["A"].width = 80

    buf = io.BytesIO()
    wb.save(buf)
    return buf.getvalue()
