from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from compliance_ai.core.database.entities import User
from compliance_ai.server.core import constant


@pytest_asyncio.fixture(name="client")
async def client_fixture(session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client bound to the app, with the database session overridden."""
    from compliance_ai.core.database import get_session
    from compliance_ai.server.main import app

    async def get_session_override() -> AsyncGenerator[AsyncSession, None]:
        yield session

    app.dependency_overrides[get_session] = get_session_override

    # ASGITransport does not run the lifespan, so startup never touches the real database
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://localhost") as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
def as_user():
    """Build request headers identifying a user as the acting user."""

    def _headers(user: User) -> dict:
        return {constant.USER_ID_HEADER: user.uid}

    return _headers
