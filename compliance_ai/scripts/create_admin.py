#!/usr/bin/env python3
"""
Create an admin user, or promote an existing user to admin.

Usage:
  python -m compliance_ai.scripts.create_admin --email admin@example.com --password 'S3cret!'
"""

from __future__ import annotations

import argparse
import asyncio
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from compliance_ai.core.database.entities import User
from compliance_ai.core.database.repositories.users import UserRepository
from compliance_ai.core.logging_config import get_logger, setup_logging
from compliance_ai.core.models.domain import UserRole
from compliance_ai.core.security import hash_password

logger = get_logger(__name__)


async def create_admin(
    session: AsyncSession,
    email: str,
    password: Optional[str] = None,
    username: Optional[str] = None,
    display_name: Optional[str] = None,
) -> User:
    """Create the admin, or promote the user with ``email``.

    A promoted user keeps its password unless a new one is given.

    Raises:
        ValueError: When a new user would be created without a password.
    """
    repo = UserRepository(session)
    email = email.strip().lower()
    user = await repo.get_by_email(email)
    if user is not None:
        values = {"role": UserRole.admin.value}
        if password:
            values["password_hash"] = hash_password(password)
        logger.info(f"Promoting {email} from {user.role} to admin")
        return await repo.update_fields(user, values)

    if not password:
        raise ValueError("A password is required to create a new admin user")
    username = username or email.split("@")[0]
    user = await repo.create(
        User(
            uid=f"admin-{username}",
            username=username,
            email=email,
            password_hash=hash_password(password),
            display_name=display_name or "Administrator",
            role=UserRole.admin.value,
            department="Administration",
        )
    )
    logger.info(f"Created admin user {email}")
    return user


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Create or promote an admin user.")
    parser.add_argument("--email", required=True, help="Admin e-mail address")
    parser.add_argument("--password", help="Password (required for a new user)")
    parser.add_argument("--username", help="Username (defaults to the e-mail local part)")
    parser.add_argument("--display-name", help="Display name")
    args = parser.parse_args(argv)

    setup_logging(enable_file=False)
    from compliance_ai.core.database import async_session_maker, engine

    async def _run() -> int:
        try:
            async with async_session_maker() as session:
                user = await create_admin(session, args.email, args.password, args.username, args.display_name)
        except ValueError as e:
            logger.error(str(e))
            return 1
        finally:
            await engine.dispose()
        logger.info(f"Admin ready: uid={user.uid} email={user.email}")
        return 0

    return asyncio.run(_run())


if __name__ == "__main__":
    raise SystemExit(main())
