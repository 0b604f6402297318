"""Auth service — registration, login, logout.

Routes handle cookies; this service handles users and session rows.
Login failures are deliberately indistinguishable: unknown email and
wrong password both raise the same InvalidCredentials.
"""

from typing import Optional

import structlog
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from tasktrack.auth.password import hash_password, verify_password
from tasktrack.auth.sessions import create_session, destroy_session
from tasktrack.db.models import User
from tasktrack.errors import (
    DuplicateEmail,
    InvalidCredentials,
    NotFound,
    store_errors,
)

logger = structlog.get_logger()


class AuthService:
    """Business logic for the identity store and session lifecycle."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _find_by_email(self, email: str) -> Optional[User]:
        result = await self.db.execute(select(User).where(User.email == email))
        return result.scalars().first()

    # ─── Register ────────────────────────────────────────

    async def register(self, username: str, email: str, password: str) -> User:
        async with store_errors(self.db, "Failed to register"):
            if await self._find_by_email(email):
                raise DuplicateEmail()

            user = User(
                username=username,
                email=email,
                password_hash=hash_password(password),
            )
            self.db.add(user)
            try:
                await self.db.commit()
            except IntegrityError:
                # Lost a race with a concurrent registration for this email
                await self.db.rollback()
                raise DuplicateEmail()
            await self.db.refresh(user)

        logger.info("auth.registered", user_id=user.id)
        return user

    # ─── Login / logout ──────────────────────────────────

    async def login(
        self, email: str, password: str, previous_token: Optional[str] = None
    ) -> str:
        """Verify credentials and open a session. Returns the cookie token.

        A session token already held by the caller is destroyed first so
        a login always rotates the session.
        """
        async with store_errors(self.db, "Failed to login"):
            user = await self._find_by_email(email)
            if not user or not verify_password(password, user.password_hash):
                logger.info("auth.login_failed")
                raise InvalidCredentials()

            if previous_token:
                await destroy_session(self.db, previous_token)
            token = await create_session(self.db, user.id)
            await self.db.commit()

        logger.info("auth.logged_in", user_id=user.id)
        return token

    async def logout(self, token: Optional[str]) -> None:
        """Destroy the session for token. Safe to call without one."""
        if not token:
            return
        async with store_errors(self.db, "Failed to logout"):
            await destroy_session(self.db, token)
            await self.db.commit()
        logger.info("auth.logged_out")

    # ─── Current user ────────────────────────────────────

    async def get_user(self, user_id: int) -> User:
        async with store_errors(self.db, "Failed to fetch user"):
            user = await self.db.get(User, user_id)
        if not user:
            raise NotFound("User not found")
        return user
