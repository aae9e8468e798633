from datetime import timezone
from typing import Optional

from fastapi import Depends, Request, Response
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from pizza_pension.api.v1.models.session import AdminSession
from pizza_pension.api.v1.models.user import User
from pizza_pension.api.v1.services.auth import AuthService
from pizza_pension.core.config import (
    ALGORITHM,
    SECRET_KEY,
    SESSION_COOKIE_NAME,
    SESSION_COOKIE_SECURE,
    SESSION_EXPIRE_MINUTES,
)
from pizza_pension.core.db.session import get_db
from pizza_pension.core.errors import AuthError

bearer_scheme = HTTPBearer(auto_error=False)


def create_session_token(admin_session: AdminSession) -> str:
    """
    Sign the session id so the client cannot forge one.
    The token expires together with the server-side session.
    """
    expire = admin_session.expires_at.replace(tzinfo=timezone.utc)
    to_encode = {"sid": admin_session.id, "exp": int(expire.timestamp())}
    return jwt.encode(to_encode, str(SECRET_KEY), algorithm=ALGORITHM)


def decode_session_token(token: str) -> Optional[str]:
    """
    Return the session id from a signed token, or None when the token is
    tampered with or malformed.

    Expiry is not checked here: the session row is authoritative, and an
    expired row is only removed once its id reaches AuthService.
    """
    try:
        payload = jwt.decode(
            token, str(SECRET_KEY), algorithms=[ALGORITHM], options={"verify_exp": False}
        )
    except JWTError:
        logger.debug("Session token rejected")
        return None
    sid = payload.get("sid")
    return sid if isinstance(sid, str) else None


def set_session_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key=SESSION_COOKIE_NAME,
        value=token,
        max_age=SESSION_EXPIRE_MINUTES * 60,
        httponly=True,
        secure=SESSION_COOKIE_SECURE,
        samesite="lax",
    )


def clear_session_cookie(response: Response) -> None:
    response.delete_cookie(key=SESSION_COOKIE_NAME, httponly=True, samesite="lax")


def get_session_id(
    request: Request,
    bearer: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Optional[str]:
    """
    Read the session token from the cookie first, then from a Bearer header.
    """
    token = request.cookies.get(SESSION_COOKIE_NAME)
    if not token and bearer and bearer.scheme.lower() == "bearer":
        token = bearer.credentials
    if not token:
        return None
    return decode_session_token(token)


async def get_current_user(
    session_id: Optional[str] = Depends(get_session_id),
    db: AsyncSession = Depends(get_db),
) -> Optional[User]:
    if not session_id:
        return None
    return await AuthService(db).get_session_user(session_id)


async def require_admin(user: Optional[User] = Depends(get_current_user)) -> User:
    """
    Guard for admin-only routes.
    """
    if user is None:
        raise AuthError()
    return user
