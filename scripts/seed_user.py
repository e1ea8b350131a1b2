#!/usr/bin/env python3
"""Seed script to create local user accounts.

Users normally sign in through Clerk. Local accounts (email + password,
session cookie) exist for development and are only created here; there is
no self sign-up.

Usage:
    # Interactive mode
    python scripts/seed_user.py

    # Command line mode
    python scripts/seed_user.py --email user@example.com --password secret123 --name "User Name"

    # From environment variables
    SEED_EMAIL=user@example.com SEED_PASSWORD=secret123 python scripts/seed_user.py
"""

import argparse
import asyncio
import getpass
import os
import sys

from sqlalchemy import select

from sleeptrack.core.database import SessionLocal, init_db
from sleeptrack.core.security import get_password_hash
from sleeptrack.models.user import User


async def create_user(
    email: str,
    password: str,
    display_name: str | None = None,
    timezone: str = "UTC",
) -> User:
    """Create a new local user.

    Raises:
        ValueError: If user with email already exists.
    """
    async with SessionLocal() as session:
        result = await session.execute(select(User).where(User.email == email))
        if result.scalar_one_or_none():
            raise ValueError(f"User with email '{email}' already exists")

        user = User(
            email=email,
            password_hash=get_password_hash(password),
            display_name=display_name,
            timezone=timezone,
        )
        session.add(user)
        await session.commit()
        await session.refresh(user)
        return user


async def list_users() -> list[User]:
    async with SessionLocal() as session:
        result = await session.execute(select(User).order_by(User.id))
        return list(result.scalars().all())


def get_password_interactive() -> str:
    """Get password interactively with confirmation.

    Raises:
        ValueError: If passwords don't match or are too short.
    """
    password = getpass.getpass("Password: ")
    confirm = getpass.getpass("Confirm password: ")

    if password != confirm:
        raise ValueError("Passwords do not match")

    if len(password) < 8:
        raise ValueError("Password must be at least 8 characters")

    return password


async def main() -> None:
    """Main entry point for the seed script."""
    parser = argparse.ArgumentParser(description="Create local user accounts for SleepTrack")
    parser.add_argument("--email", help="User email address", default=os.environ.get("SEED_EMAIL"))
    parser.add_argument(
        "--password",
        help="User password (or use SEED_PASSWORD env var)",
        default=os.environ.get("SEED_PASSWORD"),
    )
    parser.add_argument("--name", help="Display name", default=os.environ.get("SEED_NAME"))
    parser.add_argument(
        "--timezone",
        help="User timezone",
        default=os.environ.get("SEED_TIMEZONE", "UTC"),
    )
    parser.add_argument("--list", action="store_true", help="List existing users")

    args = parser.parse_args()

    await init_db()

    if args.list:
        users = await list_users()
        if not users:
            print("No users found")
        for user in users:
            source = "clerk" if user.clerk_user_id else "local"
            print(f"  {user.id:>4}  {user.email:<40} {user.display_name or '(not set)'}  [{source}]")
        return

    if not args.email:
        args.email = input("Email: ").strip()
        if not args.email:
            print("Error: Email is required")
            sys.exit(1)

    if not args.password:
        try:
            args.password = get_password_interactive()
        except ValueError as e:
            print(f"Error: {e}")
            sys.exit(1)

    if args.name is None:
        args.name = input("Display name (optional): ").strip() or None

    try:
        user = await create_user(
            email=args.email,
            password=args.password,
            display_name=args.name,
            timezone=args.timezone,
        )
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)

    print(f"User created: id={user.id} email={user.email}")


if __name__ == "__main__":
    asyncio.run(main())
