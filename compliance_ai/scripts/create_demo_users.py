#!/usr/bin/env python3
"""
Create or refresh the demo users, one per workflow role.

Usage:
  python -m compliance_ai.scripts.create_demo_users
"""

from __future__ import annotations

import argparse
import asyncio
from typing import Any, Dict, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from compliance_ai.core.database.entities import User
from compliance_ai.core.database.repositories.users import UserRepository
from compliance_ai.core.logging_config import get_logger, setup_logging
from compliance_ai.core.security import hash_password

logger = get_logger(__name__)

DEMO_USERS: List[Dict[str, Any]] = [
    {
        "email": "admin@demo.com",
        "password": "Admin123!",
        "display_name": "Admin User",
        "username": "admin",
        "role": "admin",
        "department": "Administration",
    },
    {
        "email": "technical@demo.com",
        "password": "Technical123!",
        "display_name": "Technical User",
        "username": "technical",
        "role": "technical",
        "department": "IT Department",
    },
    {
        "email": "legal@demo.com",
        "password": "Legal123!",
        "display_name": "Legal User",
        "username": "legal",
        "role": "legal",
        "department": "Legal Department",
    },
    {
        "email": "decision@demo.com",
        "password": "Decision123!",
        "display_name": "Decision Maker",
        "username": "decision",
        "role": "decision_maker",
        "department": "Executive Office",
    },
    {
        "email": "operator@demo.com",
        "password": "Operator123!",
        "display_name": "Operator User",
        "username": "operator",
        "role": "operator",
        "department": "Operations",
    },
]


async def upsert_user(session: AsyncSession, data: Dict[str, Any]) -> User:
    """Create the user or update the existing one with the same e-mail."""
    repo = UserRepository(session)
    values = {
        "username": data["username"],
        "display_name": data.get("display_name"),
        "role": data["role"],
        "department": data.get("department"),
        "password_hash": hash_password(data["password"]),
    }
    user = await repo.get_by_email(data["email"])
    if user is None:
        user = await repo.create(User(uid=data.get("uid") or f"demo-{data['username']}", email=data["email"], **values))
        logger.info(f"Created {user.role} user {user.email}")
    else:
        user = await repo.update_fields(user, values)
        logger.info(f"Updated {user.role} user {user.email}")
    return user


async def create_demo_users(session: AsyncSession) -> List[User]:
    return [await upsert_user(session, data) for data in DEMO_USERS]


def main(argv: Optional[List[str]] = None) -> int:
    argparse.ArgumentParser(description="Create demo users for every role.").parse_args(argv)

    setup_logging(enable_file=False)
    from compliance_ai.core.database import async_session_maker, engine

    async def _run() -> None:
        try:
            async with async_session_maker() as session:
                users = await create_demo_users(session)
        finally:
            await engine.dispose()
        for data in DEMO_USERS:
            logger.info(f"  {data['role']:<15} {data['email']} / {data['password']}")
        logger.info(f"{len(users)} demo users ready")

    asyncio.run(_run())
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
