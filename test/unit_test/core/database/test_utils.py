"""Unit tests for the database utility functions."""

from __future__ import annotations

import pytest
from sqlalchemy import inspect
from sqlalchemy.ext.asyncio import create_async_engine
from sqlmodel.pool import StaticPool

from compliance_ai.core.database import create_all, create_sessionmaker, drop_all
from compliance_ai.core.database.utils import normalize_database_url


@pytest.mark.parametrize(
    "url,expected",
    [
        ("postgres://u:p@h:5432/db", "postgresql+asyncpg://u:p@h:5432/db"),
        ("postgresql://u:p@h/db", "postgresql+asyncpg://u:p@h/db"),
        ("postgresql+psycopg://u:p@h/db", "postgresql+asyncpg://u:p@h/db"),
        ("postgresql+asyncpg://u:p@h/db", "postgresql+asyncpg://u:p@h/db"),
        ("sqlite+aiosqlite:///:memory:", "sqlite+aiosqlite:///:memory:"),
    ],
)
def test_normalize_database_url(url, expected):
    assert normalize_database_url(url) == expected


async def test_create_and_drop_all():
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", poolclass=StaticPool)
    try:
        await create_all(engine)
        async with engine.connect() as conn:
            tables = await conn.run_sync(lambda sync_conn: inspect(sync_conn).get_table_names())
        assert "approval_items" in tables
        assert "regulatory_terms" in tables

        await drop_all(engine)
        async with engine.connect() as conn:
            tables = await conn.run_sync(lambda sync_conn: inspect(sync_conn).get_table_names())
        assert tables == []
    finally:
        await engine.dispose()


def test_sessionmaker_keeps_objects_after_commit(test_engine):
    maker = create_sessionmaker(test_engine)

    assert maker.kw["expire_on_commit"] is False
