from fastapi import APIRouter, Depends, Response
from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession

from pizza_pension.api.v1.models.user import User
from pizza_pension.api.v1.schemas.dashboard import StatusResponse
from pizza_pension.api.v1.schemas.login import LoginRequest, UserResponse
from pizza_pension.api.v1.security.session import (
    clear_session_cookie,
    create_session_token,
    get_session_id,
    require_admin,
    set_session_cookie,
)
from pizza_pension.api.v1.services.auth import AuthService
from pizza_pension.core.db.session import get_db

router = APIRouter(prefix="", tags=["auth"])


@router.post("/login", response_model=UserResponse)
async def login(
    form_data: LoginRequest,
    response: Response,
    db: AsyncSession = Depends(get_db)
):
    auth_service = AuthService(db=db)
    admin_session = await auth_service.login(form_data.username, form_data.password)
    set_session_cookie(response, create_session_token(admin_session))
    return UserResponse.model_validate(admin_session.user)


@router.post("/logout", response_model=StatusResponse)
async def logout(
    response: Response,
    session_id: Optional[str] = Depends(get_session_id),
    db: AsyncSession = Depends(get_db)
):
    await AuthService(db=db).logout(session_id)
    clear_session_cookie(response)
    return StatusResponse(status="ok")


@router.get("/user", response_model=UserResponse)
async def read_current_user(current_user: User = Depends(require_admin)):
    return UserResponse.model_validate(current_user)
