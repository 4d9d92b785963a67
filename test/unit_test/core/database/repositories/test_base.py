"""Unit tests for the shared repository base.

The CRUD tests use a mocked async session to check the session calls made;
the query helpers are exercised against the in-memory database.
"""

from __future__ import annotations

from datetime import datetime
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlmodel import select

from compliance_ai.core.database.entities import AISystem, Department
from compliance_ai.core.database.repositories.ai_systems import AISystemRepository
from compliance_ai.core.database.repositories.base import QueryBuilder, total_pages
from compliance_ai.core.database.repositories.departments import DepartmentRepository


class TestSQLModelRepositoryWithMockedSession:
    """CRUD operations against a mocked session."""

    @pytest.fixture
    def mock_session(self):
        session = AsyncMock()
        session.add = MagicMock()
        session.commit = AsyncMock()
        session.refresh = AsyncMock()
        session.delete = AsyncMock()
        session.get = AsyncMock()
        return session

    @pytest.fixture
    def repository(self, mock_session):
        return AISystemRepository(mock_session)

    async def test_create_adds_commits_and_refreshes(self, repository, mock_session):
        system = AISystem(system_id="AI-SYS-1", name="Credit scoring")

        result = await repository.create(system)

        mock_session.add.assert_called_once_with(system)
        mock_session.commit.assert_awaited_once()
        mock_session.refresh.assert_awaited_once_with(system)
        assert result is system

    async def test_update_refreshes_updated_at(self, repository, mock_session):
        system = AISystem(system_id="AI-SYS-1", name="Credit scoring", updated_at=datetime(2020, 1, 1))

        await repository.update(system)

        assert system.updated_at > datetime(2020, 1, 1)
        mock_session.commit.assert_awaited_once()

    async def test_update_without_updated_at_column(self, mock_session):
        repository = DepartmentRepository(mock_session)
        department = Department(name="Legal")

        await repository.update(department)

        assert not hasattr(department, "updated_at")
        mock_session.add.assert_called_once_with(department)

    async def test_delete_missing_returns_false(self, repository, mock_session):
        mock_session.get.return_value = None

        assert await repository.delete(404) is False
        mock_session.delete.assert_not_awaited()

    async def test_delete_existing(self, repository, mock_session):
        system = AISystem(id=1, system_id="AI-SYS-1", name="Chatbot")
        mock_session.get.return_value = system

        assert await repository.delete(1) is True
        mock_session.delete.assert_awaited_once_with(system)
        mock_session.commit.assert_awaited_once()

    async def test_update_fields_sets_values(self, repository):
        system = AISystem(system_id="AI-SYS-1", name="Chatbot")

        await repository.update_fields(system, {"name": "Support bot", "risk_level": "limited"})

        assert system.name == "Support bot"
        assert system.risk_level == "limited"


class TestSQLModelRepositoryQueries:
    """List, count and grouping against SQLite."""

    @pytest.fixture
    async def seeded(self, repos):
        for index, (level, department) in enumerate(
            [("high", "Finance"), ("high", "HR"), ("minimal", "Finance"), (None, "IT")], start=1
        ):
            await repos.systems.create(
                AISystem(system_id=f"AI-SYS-{index}", name=f"System {index}", risk_level=level, department=department)
            )
        return repos

    async def test_list_with_filters_and_pagination(self, seeded):
        finance = await seeded.systems.list(filters={"department": "Finance"})
        assert [s.system_id for s in finance] == ["AI-SYS-1", "AI-SYS-3"]

        page = await seeded.systems.list(limit=2, offset=1)
        assert [s.system_id for s in page] == ["AI-SYS-2", "AI-SYS-3"]

    async def test_none_filters_are_ignored(self, seeded):
        assert len(await seeded.systems.list(filters={"department": None})) == 4

    async def test_count(self, seeded):
        assert await seeded.systems.count() == 4
        assert await seeded.systems.count(filters={"risk_level": "high"}) == 2

    async def test_count_by_skips_null_values(self, seeded):
        assert await seeded.systems.count_by("risk_level") == {"high": 2, "minimal": 1}


class TestQueryBuilder:
    def test_apply_filters_skips_unknown_columns(self):
        stmt = QueryBuilder.apply_filters(select(AISystem), AISystem, {"not_a_column": 1, "status": "active"})

        compiled = str(stmt)
        assert "ai_systems.status" in compiled
        assert "not_a_column" not in compiled

    @pytest.mark.parametrize("page,limit,expected", [(1, 10, 0), (3, 10, 20), (0, 5, 0), (-2, 5, 0)])
    def test_page_to_offset(self, page, limit, expected):
        assert QueryBuilder.page_to_offset(page, limit) == expected

    @pytest.mark.parametrize("total,limit,expected", [(0, 10, 0), (10, 10, 1), (11, 10, 2), (5, 0, 0)])
    def test_total_pages(self, total, limit, expected):
        assert total_pages(total, limit) == expected
