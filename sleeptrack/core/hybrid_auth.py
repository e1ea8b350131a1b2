"""Authentication dependency accepting either a Clerk JWT or a session cookie.

Order of attempts:
1. Bearer token (Clerk JWT) when Clerk is enabled
2. Session cookie (local account) otherwise or as fallback
"""

import logging
from typing import Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from redis.exceptions import RedisError
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from sleeptrack.core import session as session_store
from sleeptrack.core.clerk_auth import ClerkAuth, display_name_of, primary_email_of
from sleeptrack.core.config import get_settings
from sleeptrack.core.database import get_db
from sleeptrack.models.user import User

logger = logging.getLogger(__name__)
settings = get_settings()

# Bearer token security (for Clerk JWT)
bearer_security = HTTPBearer(auto_error=False)


async def _user_from_clerk(token: str, db: AsyncSession) -> User:
    """Resolve a Clerk token to a local user, creating or linking on first sight."""
    payload = await ClerkAuth.verify_token(token)
    clerk_user_id = payload.get("sub")
    if not clerk_user_id:
        logger.error("JWT payload missing 'sub' claim")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token payload - missing user ID",
        )

    result = await db.execute(select(User).where(User.clerk_user_id == clerk_user_id))
    user = result.scalar_one_or_none()
    if user:
        return user

    clerk_data = await ClerkAuth.get_clerk_user_data(clerk_user_id)
    primary_email = primary_email_of(clerk_data)
    if not primary_email:
        logger.error(f"No email found for Clerk user: {clerk_user_id}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="User email not available",
        )

    # Link to an existing local account with the same email
    result = await db.execute(select(User).where(User.email == primary_email))
    existing_user = result.scalar_one_or_none()
    if existing_user:
        existing_user.clerk_user_id = clerk_user_id
        await db.commit()
        logger.info(f"Linked Clerk ID to existing user: user_id={existing_user.id}")
        return existing_user

    user = User(
        clerk_user_id=clerk_user_id,
        email=primary_email,
        display_name=display_name_of(clerk_data, primary_email),
        password_hash=None,
    )
    db.add(user)
    await db.commit()
    await db.refresh(user)
    logger.info(f"Created user from Clerk JWT: user_id={user.id}")
    return user


async def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_security),
    db: AsyncSession = Depends(get_db),
) -> User:
    """Get current user from either Clerk JWT or session cookie.

    Raises:
        HTTPException: If no valid authentication found
    """
    if credentials and credentials.credentials and settings.clerk_enabled:
        try:
            return await _user_from_clerk(credentials.credentials, db)
        except HTTPException as e:
            logger.debug(f"Clerk JWT authentication failed ({e.detail}), trying session auth")

    try:
        session_user_id = await session_store.get_session_user_id(request)
    except RedisError as e:
        logger.warning(f"Session store unavailable: {e}")
        session_user_id = None

    if session_user_id:
        result = await db.execute(select(User).where(User.id == session_user_id))
        user = result.scalar_one_or_none()
        if user:
            return user

    raise HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Not authenticated",
        headers={"WWW-Authenticate": "Bearer"},
    )
