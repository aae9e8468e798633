import re
from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from typing import List
from sqlalchemy.ext.asyncio import AsyncSession

from pizza_pension.core import config
from pizza_pension.core.db.session import get_db
from pizza_pension.core.errors import EventFull, RegistrationValidationError
from pizza_pension.api.v1.schemas.dashboard import DashboardSummary, StatusResponse
from pizza_pension.api.v1.schemas.registration import Registration
from pizza_pension.api.v1.services.dashboard import build_summary
from pizza_pension.api.v1.services.export import EXPORT_FILENAME, EXPORT_MEDIA_TYPE, export_to_bytes
from pizza_pension.api.v1.services.registration import RegistrationService
from pizza_pension.api.v1.security.session import require_admin
from pizza_pension.api.v1.validators.registration import ensure_pizza_on_menu, validate_registration

router = APIRouter(prefix="", tags=["Registrations"])

REGISTRATION_ID_PATTERN = re.compile(r"-?[0-9]+")

# Range of the Integer id column
MIN_REGISTRATION_ID = -(2 ** 31)
MAX_REGISTRATION_ID = 2 ** 31 - 1


@router.post("/register", response_model=Registration, status_code=status.HTTP_201_CREATED)
async def register(
    request: Request,
    db: AsyncSession = Depends(get_db),
):
    try:
        payload = await request.json()
    except ValueError:
        raise RegistrationValidationError(
            [{"field": None, "message": "Request body must be valid JSON"}]
        )

    registration_in = validate_registration(payload)
    if config.ENFORCE_PIZZA_MENU:
        ensure_pizza_on_menu(registration_in.pizza)

    service = RegistrationService(db)
    if config.ENFORCE_CAPACITY and await service.count() >= config.EVENT_CAPACITY:
        raise EventFull(f"The event is full ({config.EVENT_CAPACITY} seats)")

    return await service.insert(registration_in)


@router.get("/registrations", response_model=List[Registration])
async def read_registrations(
    db: AsyncSession = Depends(get_db),
    current_user=Depends(require_admin)
):
    return await RegistrationService(db).list_all()


@router.get("/registrations/summary", response_model=DashboardSummary)
async def read_registration_summary(
    db: AsyncSession = Depends(get_db),
    current_user=Depends(require_admin)
):
    registrations = await RegistrationService(db).list_all()
    return build_summary(registrations, capacity=config.EVENT_CAPACITY)


@router.get("/registrations/export")
async def export_registrations(
    db: AsyncSession = Depends(get_db),
    current_user=Depends(require_admin)
):
    registrations = await RegistrationService(db).list_all()
    return Response(
        content=export_to_bytes(registrations, date_format=config.EXPORT_DATE_FORMAT),
        media_type=EXPORT_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{EXPORT_FILENAME}"'},
    )


@router.delete("/registrations/{registration_id}", response_model=StatusResponse)
async def delete_registration(
    registration_id: str,
    db: AsyncSession = Depends(get_db),
    current_user=Depends(require_admin)
):
    # Parsed by hand so a malformed id is a 400, not a 422
    if not REGISTRATION_ID_PATTERN.fullmatch(registration_id):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid ID")

    # Ids the column cannot hold never match a row
    if len(registration_id.lstrip("-").lstrip("0")) <= len(str(MAX_REGISTRATION_ID)):
        parsed_id = int(registration_id)
        if MIN_REGISTRATION_ID <= parsed_id <= MAX_REGISTRATION_ID:
            await RegistrationService(db).delete_by_id(parsed_id)
    return StatusResponse(status="ok")
