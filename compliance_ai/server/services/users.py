"""
User registration and login.

Passwords are stored as salted PBKDF2 hashes; nothing here issues tokens.
The acting user of later requests is identified by the ``X-User-Id`` header.
"""

from __future__ import annotations

import time
from typing import Optional

from compliance_ai.core.database.entities import User
from compliance_ai.core.database.repositories import SqlRepoBundle
from compliance_ai.core.errors import AuthenticationError, BusinessLogicError
from compliance_ai.core.logging_config import get_logger
from compliance_ai.core.models.io.users import UserRegister
from compliance_ai.core.security import hash_password, verify_password

logger = get_logger(__name__)


class EmailAlreadyRegisteredError(BusinessLogicError):
    def __init__(self, email: str) -> None:
        super().__init__(f"User with email {email} already exists")
        self.status_code = 409


def generate_uid() -> str:
    return f"user_{int(time.time() * 1000)}"


class UserService:
    def __init__(self, repos: SqlRepoBundle):
        self.repos = repos

    async def register(self, data: UserRegister) -> User:
        email = data.email.strip().lower()
        if await self.repos.users.get_by_email(email) is not None:
            raise EmailAlreadyRegisteredError(email)

        user = await self.repos.users.create(
            User(
                uid=data.uid or generate_uid(),
                username=data.username or email.split("@")[0],
                email=email,
                password_hash=hash_password(data.password),
                display_name=data.display_name,
                role=data.role,
                department=data.department,
            )
        )
        logger.info(f"Registered user {user.uid} ({user.role})")
        return user

    async def authenticate(self, email: str, password: str) -> User:
        user = await self.repos.users.get_by_email(email.strip().lower())
        if user is None or not user.password_hash or not verify_password(password, user.password_hash):
            raise AuthenticationError("Invalid email or password")
        return user

    async def resolve(self, uid: Optional[str]) -> User:
        """Resolve the acting user from a ``uid``; missing or unknown ids are rejected."""
        if not uid:
            raise AuthenticationError("Authentication required")
        user = await self.repos.users.get_by_uid(uid)
        if user is None:
            raise AuthenticationError(f"Unknown user {uid}")
        return user
