import secrets
from datetime import datetime, timedelta, timezone
from typing import Optional

from loguru import logger
from sqlalchemy import delete
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from pizza_pension.api.v1.models.session import AdminSession
from pizza_pension.api.v1.models.user import User
from pizza_pension.core.config import SESSION_EXPIRE_MINUTES
from pizza_pension.core.errors import InvalidCredentials, StorageError, UserAlreadyExists


def _utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


class AuthService:
    def __init__(self, db: AsyncSession):
        if db is None:
            raise ValueError("Database session cannot be None")
        self.db = db

    async def get_user_by_username(self, username: str) -> Optional[User]:
        try:
            query = await self.db.execute(select(User).where(User.username == username))
        except SQLAlchemyError as e:
            logger.error(f"Failed to look up user: {e}")
            raise StorageError("Could not look up user") from e
        return query.scalars().first()

    async def login(self, username: str, password: str) -> AdminSession:
        """
        Check the credentials and open a new server-side session.
        Raises InvalidCredentials for an unknown user or a wrong password.
        """
        user = await self.get_user_by_username(username)
        if not user or not user.verify_password(password):
            logger.warning(f"Failed login attempt for username '{username}'")
            raise InvalidCredentials()

        now = _utcnow()
        admin_session = AdminSession(
            id=secrets.token_urlsafe(32),
            user_id=user.id,
            user=user,
            created_at=now,
            expires_at=now + timedelta(minutes=SESSION_EXPIRE_MINUTES),
        )
        try:
            self.db.add(admin_session)
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise StorageError("Could not create session") from e
        logger.info(f"User '{user.username}' logged in")
        return admin_session

    async def logout(self, session_id: Optional[str]) -> None:
        if not session_id:
            return
        try:
            await self.db.execute(delete(AdminSession).where(AdminSession.id == session_id))
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise StorageError("Could not end session") from e
        logger.info("Session closed")

    async def get_session_user(self, session_id: Optional[str]) -> Optional[User]:
        """
        Resolve a session id to its user. Expired sessions are removed on sight.
        """
        if not session_id:
            return None
        try:
            result = await self.db.execute(select(AdminSession).where(AdminSession.id == session_id))
        except SQLAlchemyError as e:
            logger.error(f"Failed to look up session: {e}")
            raise StorageError("Could not look up session") from e
        admin_session = result.scalars().first()
        if admin_session is None:
            return None
        if admin_session.expires_at <= _utcnow():
            logger.debug("Dropping expired session")
            await self.logout(session_id)
            return None
        return admin_session.user

    async def is_authenticated(self, session_id: Optional[str]) -> bool:
        return await self.get_session_user(session_id) is not None

    async def provision_user(self, username: str, password: str) -> User:
        """
        Create an admin account. Only used by the provisioning script.
        """
        if await self.get_user_by_username(username):
            raise UserAlreadyExists(f"User '{username}' already exists")
        user = User(username=username)
        user.set_password(password)
        try:
            self.db.add(user)
            await self.db.commit()
            await self.db.refresh(user)
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise StorageError("Could not create user") from e
        logger.info(f"Admin user '{username}' created")
        return user
