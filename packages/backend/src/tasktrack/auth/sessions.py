"""Server-side session store.

A session is a row in the sessions table keyed by the SHA-256 of a random
token. The raw token only ever exists in the client's cookie. This module
is the only place that reads or writes session rows.
"""

import hashlib
import secrets
from datetime import timedelta
from typing import Optional

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from tasktrack.config import settings
from tasktrack.db.models import UserSession, utcnow


def hash_token(token: str) -> str:
    return hashlib.sha256(token.encode()).hexdigest()


async def create_session(db: AsyncSession, user_id: int) -> str:
    """Create a session for user_id and return the raw cookie token."""
    token = secrets.token_urlsafe(32)
    db.add(
        UserSession(
            token_hash=hash_token(token),
            user_id=user_id,
            expires_at=utcnow() + timedelta(hours=settings.session_ttl_hours),
        )
    )
    await db.flush()
    return token


async def resolve_session(db: AsyncSession, token: str) -> Optional[UserSession]:
    """Return the live session for token, or None if unknown or expired."""
    result = await db.execute(
        select(UserSession).where(
            UserSession.token_hash == hash_token(token),
            UserSession.expires_at > utcnow(),
        )
    )
    return result.scalars().first()


async def destroy_session(db: AsyncSession, token: str) -> None:
    """Delete the session for token. No-op if it doesn't exist."""
    await db.execute(
        delete(UserSession).where(UserSession.token_hash == hash_token(token))
    )


async def purge_expired_sessions(db: AsyncSession) -> int:
    """Delete every expired session. Returns how many were removed."""
    result = await db.execute(
        delete(UserSession).where(UserSession.expires_at <= utcnow())
    )
    return result.rowcount or 0
