"""Authentication endpoints for local accounts.

Clerk users authenticate with a bearer token on every request and never
call these endpoints except ``/me``.

Paths:
  /api/v1/auth/login, /logout, /me
"""

from datetime import datetime, timezone as tz
from typing import Annotated, Any

from fastapi import APIRouter, Cookie, Depends, HTTPException, Response, status
from pydantic import BaseModel, EmailStr
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from sleeptrack.core.config import get_settings
from sleeptrack.core.database import get_db
from sleeptrack.core.hybrid_auth import get_current_user
from sleeptrack.core.security import verify_password
from sleeptrack.core.session import SESSION_COOKIE_NAME, create_session, delete_session
from sleeptrack.models.user import User

settings = get_settings()
router = APIRouter()


# -------------------------------------------------------------------------
# Request/Response Models
# -------------------------------------------------------------------------


class LoginRequest(BaseModel):
    """Request body for local login."""

    email: EmailStr
    password: str


class LoginResponse(BaseModel):
    """Response for successful login."""

    success: bool
    message: str
    user: dict[str, Any]


class UserResponse(BaseModel):
    """Current user response."""

    id: int
    email: str
    display_name: str | None
    timezone: str
    clerk_linked: bool
    last_login_at: str | None


# -------------------------------------------------------------------------
# Endpoints
# -------------------------------------------------------------------------


@router.post("/login", response_model=LoginResponse)
async def login(
    request: LoginRequest,
    response: Response,
    db: AsyncSession = Depends(get_db),
) -> LoginResponse:
    """Login with local account.

    Raises:
        HTTPException: If credentials are invalid.
    """
    result = await db.execute(select(User).where(User.email == request.email))
    user = result.scalar_one_or_none()

    if not user or not verify_password(request.password, user.password_hash):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
        )

    user.last_login_at = datetime.now(tz.utc)
    await db.commit()

    session_id = await create_session(
        user_id=user.id,
        user_data={
            "email": user.email,
            "display_name": user.display_name,
        },
    )

    response.set_cookie(
        key=SESSION_COOKIE_NAME,
        value=session_id,
        httponly=True,
        secure=settings.cookie_secure,
        samesite=settings.cookie_samesite,
        max_age=settings.session_ttl_seconds,
    )

    return LoginResponse(
        success=True,
        message="Login successful",
        user={
            "id": user.id,
            "email": user.email,
            "display_name": user.display_name,
            "timezone": user.timezone,
        },
    )


@router.post("/logout")
async def logout(
    response: Response,
    session_id: Annotated[str | None, Cookie(alias=SESSION_COOKIE_NAME)] = None,
) -> dict[str, str]:
    """Logout and invalidate session."""
    if session_id:
        await delete_session(session_id)

    response.delete_cookie(
        key=SESSION_COOKIE_NAME,
        httponly=True,
        secure=settings.cookie_secure,
        samesite=settings.cookie_samesite,
    )

    return {"message": "Logged out successfully"}


@router.get("/me", response_model=UserResponse)
async def get_me(
    current_user: Annotated[User, Depends(get_current_user)],
) -> UserResponse:
    """Get current authenticated user."""
    return UserResponse(
        id=current_user.id,
        email=current_user.email,
        display_name=current_user.display_name,
        timezone=current_user.timezone,
        clerk_linked=current_user.clerk_user_id is not None,
        last_login_at=current_user.last_login_at.isoformat() if current_user.last_login_at else None,
    )
