"""Auth API — registration, login, logout, current user.

- POST /register → create an account (no session is opened)
- POST /login → email/password → session cookie
- POST /logout → destroy the session, clear the cookie
- GET /me → public fields of the logged-in user
"""

from typing import Optional

import structlog
from fastapi import APIRouter, Depends, Request, Response
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from tasktrack.auth.dependencies import CurrentUser, get_current_user
from tasktrack.config import settings
from tasktrack.db.engine import get_db
from tasktrack.errors import PersistenceError
from tasktrack.services.auth_service import AuthService

router = APIRouter()
logger = structlog.get_logger()


def _svc(db: AsyncSession = Depends(get_db)) -> AuthService:
    return AuthService(db)


# ─── Schemas ─────────────────────────────────────────────


class RegisterRequest(BaseModel):
    username: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., min_length=3, max_length=255)
    password: str = Field(..., min_length=1)


class LoginRequest(BaseModel):
    email: str
    password: str


class UserRead(BaseModel):
    """Public user fields. The password hash never leaves the server."""
    id: int
    username: str
    email: str

    model_config = {"from_attributes": True}


class Ack(BaseModel):
    message: str


# ─── Routes ──────────────────────────────────────────────


@router.post("/register", response_model=UserRead)
async def register(body: RegisterRequest, svc: AuthService = Depends(_svc)):
    """Create a new user account."""
    return await svc.register(
        username=body.username, email=body.email, password=body.password
    )


@router.post("/login", response_model=Ack)
async def login(
    body: LoginRequest,
    request: Request,
    response: Response,
    svc: AuthService = Depends(_svc),
):
    """Login with email and password → session cookie."""
    token = await svc.login(
        email=body.email,
        password=body.password,
        previous_token=request.cookies.get(settings.session_cookie_name),
    )
    response.set_cookie(
        key=settings.session_cookie_name,
        value=token,
        max_age=settings.session_ttl_hours * 3600,
        httponly=True,
        samesite="lax",
        secure=settings.session_cookie_secure,
    )
    return Ack(message="Logged in")


@router.post("/logout", response_model=Ack)
async def logout(
    request: Request,
    response: Response,
    svc: AuthService = Depends(_svc),
):
    """Destroy the current session. Works with or without one.

    The cookie is cleared even if the session row could not be deleted;
    that row still expires on its own.
    """
    token: Optional[str] = request.cookies.get(settings.session_cookie_name)
    try:
        await svc.logout(token)
    except PersistenceError:
        logger.warning("auth.logout_session_kept")
    response.delete_cookie(
        key=settings.session_cookie_name,
        httponly=True,
        samesite="lax",
        secure=settings.session_cookie_secure,
    )
    return Ack(message="Logged out")


@router.get("/me", response_model=UserRead)
async def get_me(
    identity: CurrentUser = Depends(get_current_user),
    svc: AuthService = Depends(_svc),
):
    """Get the current authenticated user's info."""
    return await svc.get_user(identity.user_id)
