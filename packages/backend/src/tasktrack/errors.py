"""Error taxonomy shared by services and the HTTP layer.

Services raise these deliberately (ownership and validation checks) or
via store_errors() when the database fails. main.py renders every one
of them as {"error": message} with the matching status code.
"""

from contextlib import asynccontextmanager

import structlog
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

logger = structlog.get_logger()


class AppError(Exception):
    """Base class for errors that map to an HTTP response."""

    status_code = 500
    message = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.message
        super().__init__(self.message)


class Unauthenticated(AppError):
    """No session cookie, or it doesn't resolve to a live session."""

    status_code = 401
    message = "Not logged in"


class InvalidCredentials(AppError):
    """Login failed. Deliberately the same for unknown email and bad password."""

    status_code = 401
    message = "Invalid credentials"


class DuplicateEmail(AppError):
    status_code = 400
    message = "Email already in use"


class NotFound(AppError):
    """Resource is missing OR owned by someone else (never 403)."""

    status_code = 404
    message = "Not found"


class InvalidProject(AppError):
    """Task references a project the actor can't use."""

    status_code = 400
    message = "Invalid project"


class PersistenceError(AppError):
    status_code = 500
    message = "Database error"


@asynccontextmanager
async def store_errors(db: AsyncSession, message: str):
    """Translate SQLAlchemy failures inside the block into PersistenceError.

    The session is rolled back so it can't be reused in a broken state.
    AppErrors raised inside the block pass through untouched.
    """
    try:
        yield
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error("store.error", operation=message, error=str(e))
        raise PersistenceError(message) from e
