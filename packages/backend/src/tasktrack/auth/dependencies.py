"""FastAPI auth dependencies.

Used as Depends() in route handlers to resolve the session cookie into
the acting user. The resulting CurrentUser is passed explicitly into
every service call; services never look at the request themselves.
"""

from dataclasses import dataclass
from typing import Optional

import structlog
from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from tasktrack.auth.sessions import resolve_session
from tasktrack.config import settings
from tasktrack.db.engine import get_db
from tasktrack.errors import Unauthenticated, store_errors


@dataclass(frozen=True)
class CurrentUser:
    """The authenticated identity making the request."""

    user_id: int
    session_id: int


async def get_current_user_optional(
    request: Request,
    db: AsyncSession = Depends(get_db),
) -> Optional[CurrentUser]:
    """Resolve the session cookie, or None if there isn't a live one."""
    token = request.cookies.get(settings.session_cookie_name)
    if not token:
        return None

    async with store_errors(db, "Failed to load session"):
        session = await resolve_session(db, token)

    if not session:
        return None
    # Every later log line for this request names the acting user.
    structlog.contextvars.bind_contextvars(user_id=session.user_id)
    return CurrentUser(user_id=session.user_id, session_id=session.id)


async def get_current_user(
    identity: Optional[CurrentUser] = Depends(get_current_user_optional),
) -> CurrentUser:
    """Require a session. Raises Unauthenticated (401) otherwise."""
    if not identity:
        raise Unauthenticated()
    return identity
