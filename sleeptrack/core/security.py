"""Password hashing for local (non-Clerk) accounts."""

import bcrypt


def verify_password(plain_password: str, hashed_password: str | None) -> bool:
    """Verify a plain password against a hashed password.

    Clerk-only accounts carry no hash and never match.
    """
    if not hashed_password:
        return False
    return bcrypt.checkpw(
        plain_password.encode("utf-8"),
        hashed_password.encode("utf-8"),
    )


def get_password_hash(password: str) -> str:
    """Hash a password with a fresh bcrypt salt."""
    salt = bcrypt.gensalt()
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")
