from datetime import datetime
from io import BytesIO

from openpyxl import load_workbook

from pizza_pension.api.v1.schemas.registration import Registration
from pizza_pension.api.v1.services.export import (
    EXPORT_HEADERS,
    EXPORT_SHEET_TITLE,
    build_workbook,
    export_to_bytes,
    registration_row,
)


def registration_stub(**kwargs):
    data = dict(
        id=1, first_name="Anna", last_name="Berg", email="a@b.se",
        pizza="Hawaii", drink="Cola", created_at=datetime(2025, 2, 14, 15, 50),
    )
    data.update(kwargs)
    return Registration(**data)


def test_registration_row_uses_fixed_column_order():
    assert registration_row(registration_stub()) == [
        "Anna", "Berg", "a@b.se", "Hawaii", "Cola", "2025-02-14",
    ]


def test_registration_row_custom_date_format():
    assert registration_row(registration_stub(), date_format="%d/%m/%Y")[-1] == "14/02/2025"


def test_build_workbook_one_row_per_registration():
    registrations = [registration_stub(id=1), registration_stub(id=2, first_name="Erik", drink="Fanta")]

    ws = build_workbook(registrations).active

    assert ws.title == EXPORT_SHEET_TITLE == "Anmälningar"
    rows = list(ws.iter_rows(values_only=True))
    assert list(rows[0]) == EXPORT_HEADERS
    assert len(rows) == 3
    assert rows[2][0] == "Erik"
    assert rows[2][4] == "Fanta"


def test_build_workbook_empty_has_headers_only():
    rows = list(build_workbook([]).active.iter_rows(values_only=True))
    assert rows == [tuple(EXPORT_HEADERS)]


def test_export_to_bytes_is_readable_xlsx():
    content = export_to_bytes([registration_stub()])

    ws = load_workbook(BytesIO(content)).active
    assert ws["A2"].value == "Anna"
    assert ws["F2"].value == "2025-02-14"
    assert ws["A1"].font.bold
