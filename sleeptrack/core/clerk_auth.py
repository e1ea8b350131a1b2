"""Clerk JWT verification.

Identity is delegated to Clerk: the API only verifies the session token Clerk
issues to the browser and, for users it has never seen, fetches their profile
from the Clerk Backend API.
"""

import logging
from typing import Optional

import httpx
import jwt
from fastapi import HTTPException, status
from jwt import PyJWKClient

from sleeptrack.core.config import get_settings

logger = logging.getLogger(__name__)

settings = get_settings()

# JWKS client for token verification (lazy initialization)
_jwks_client: Optional[PyJWKClient] = None


def get_jwks_client() -> Optional[PyJWKClient]:
    """Get or create JWKS client singleton."""
    global _jwks_client
    if _jwks_client is None and settings.clerk_jwks_url:
        _jwks_client = PyJWKClient(settings.clerk_jwks_url)
        logger.info(f"Initialized JWKS client with URL: {settings.clerk_jwks_url}")
    return _jwks_client


def primary_email_of(clerk_data: dict) -> Optional[str]:
    """Pick the primary email address out of a Clerk user payload."""
    email_addresses = clerk_data.get("email_addresses", [])
    for email_obj in email_addresses:
        if email_obj.get("id") == clerk_data.get("primary_email_address_id"):
            return email_obj.get("email_address")
    if email_addresses:
        return email_addresses[0].get("email_address")
    return None


def display_name_of(clerk_data: dict, email: str) -> str:
    """Build a display name from a Clerk user payload."""
    first_name = clerk_data.get("first_name", "") or ""
    last_name = clerk_data.get("last_name", "") or ""
    return f"{first_name} {last_name}".strip() or email.split("@")[0]


class ClerkAuth:
    """Clerk authentication handler."""

    @staticmethod
    async def verify_token(token: str) -> dict:
        """Verify Clerk JWT token.

        Args:
            token: JWT token from Authorization header

        Returns:
            Decoded JWT payload

        Raises:
            HTTPException: If token is invalid or Clerk not configured
        """
        jwks_client = get_jwks_client()
        if not jwks_client:
            logger.error("Clerk authentication not configured - JWKS client unavailable")
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Clerk authentication not configured",
            )

        try:
            signing_key = jwks_client.get_signing_key_from_jwt(token)
            payload = jwt.decode(
                token,
                signing_key.key,
                algorithms=["RS256"],
                options={"verify_aud": False},  # Clerk session tokens carry no audience
            )
        except jwt.ExpiredSignatureError:
            logger.warning("JWT token has expired")
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Token has expired",
            )
        except jwt.PyJWTError as e:
            logger.warning(f"Invalid JWT token: {e}")
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail=f"Invalid token: {str(e)}",
            )

        logger.debug(f"JWT verified for Clerk user: {payload.get('sub')}")
        return payload

    @staticmethod
    async def get_clerk_user_data(clerk_user_id: str) -> dict:
        """Fetch user data from the Clerk Backend API.

        Raises:
            HTTPException: If the API request fails
        """
        if not settings.clerk_secret_key:
            logger.error("Clerk secret key not configured")
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Clerk not properly configured",
            )

        async with httpx.AsyncClient() as client:
            try:
                response = await client.get(
                    f"{settings.clerk_api_url}/users/{clerk_user_id}",
                    headers={
                        "Authorization": f"Bearer {settings.clerk_secret_key}",
                        "Content-Type": "application/json",
                    },
                    timeout=10.0,
                )
            except httpx.TimeoutException:
                logger.error("Timeout connecting to Clerk API")
                raise HTTPException(
                    status_code=status.HTTP_504_GATEWAY_TIMEOUT,
                    detail="Clerk API timeout",
                )
            except httpx.RequestError as e:
                logger.error(f"Error connecting to Clerk API: {e}")
                raise HTTPException(
                    status_code=status.HTTP_502_BAD_GATEWAY,
                    detail="Failed to connect to Clerk API",
                )

        if response.status_code == 200:
            return response.json()
        if response.status_code == 404:
            logger.warning(f"Clerk user not found: {clerk_user_id}")
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="User not found in Clerk",
            )

        logger.error(f"Clerk API error: {response.status_code} - {response.text}")
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Failed to fetch user data from Clerk",
        )
