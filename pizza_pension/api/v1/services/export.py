from io import BytesIO
from typing import Iterable

from openpyxl import Workbook
from openpyxl.styles import Font

from pizza_pension.api.v1.schemas.registration import Registration
from pizza_pension.core.config import EXPORT_DATE_FORMAT

EXPORT_FILENAME = "pizza-och-pension-anmalningar.xlsx"
EXPORT_SHEET_TITLE = "Anmälningar"
EXPORT_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

# Column order is fixed
EXPORT_HEADERS = ["Förnamn", "Efternamn", "E-post", "Pizza", "Dryck", "Datum"]


def registration_row(registration: Registration, date_format: str = EXPORT_DATE_FORMAT) -> list:
    return [
        registration.first_name,
        registration.last_name,
        registration.email,
        registration.pizza,
        registration.drink,
        registration.created_at.strftime(date_format),
    ]


def build_workbook(registrations: Iterable[Registration], date_format: str = EXPORT_DATE_FORMAT) -> Workbook:
    wb = Workbook()
    ws = wb.active
    ws.title = EXPORT_SHEET_TITLE

    ws.append(EXPORT_HEADERS)
    for cell in ws[1]:
        cell.font = Font(bold=True)

    for registration in registrations:
        ws.append(registration_row(registration, date_format))

    return wb


def export_to_bytes(registrations: Iterable[Registration], date_format: str = EXPORT_DATE_FORMAT) -> bytes:
    # Written in memory, never touches the disk
    output = BytesIO()
    build_workbook(registrations, date_format).save(output)
    return output.getvalue()
