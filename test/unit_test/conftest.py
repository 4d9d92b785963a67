"""Shared database fixtures for the unit tests.

Every test gets its own in-memory SQLite database with the full schema,
so repositories, services and scripts run against real SQL without a
PostgreSQL server.
"""

from __future__ import annotations

from typing import AsyncGenerator

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlmodel.pool import StaticPool

from compliance_ai.core.database import create_all, create_sessionmaker
from compliance_ai.core.database.entities import User
from compliance_ai.core.database.repositories import SqlRepoBundle, build_sql_repos_from_session

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture
async def test_engine() -> AsyncGenerator[AsyncEngine, None]:
    """In-memory SQLite engine with every table created."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await create_all(engine)
    try:
        yield engine
    finally:
        await engine.dispose()


@pytest_asyncio.fixture(name="session")
async def session_fixture(test_engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    async with create_sessionmaker(test_engine)() as session:
        yield session


@pytest.fixture
def repos(session: AsyncSession) -> SqlRepoBundle:
    return build_sql_repos_from_session(session=session)


@pytest.fixture
def make_user(repos: SqlRepoBundle):
    """Factory inserting a user with sensible defaults."""

    async def _make(uid: str, role: str = "user", **kwargs) -> User:
        values = {"username": uid, "email": f"{uid}@example.com", "display_name": uid.title()}
        values.update(kwargs)
        return await repos.users.create(User(uid=uid, role=role, **values))

    return _make


@pytest_asyncio.fixture
async def admin(make_user) -> User:
    return await make_user("admin-1", role="admin", display_name="Ada Admin")


@pytest_asyncio.fixture
async def officer(make_user) -> User:
    return await make_user("officer-1", role="compliance_officer", display_name="Olivia Officer")


@pytest_asyncio.fixture
async def submitter(make_user) -> User:
    return await make_user("tech-1", role="technical", display_name="Tom Tech", department="Engineering")
