"""
Database repository layer using SQLModel.

This package contains all repository classes organized by business domain
and table relationships. Each module provides type-safe data access operations
for its corresponding SQLModel entity models.

All repositories are built on SQLModel for:
- Type-safe ORM operations with Pydantic validation
- Async-first database access patterns
- Consistent CRUD interface via SQLModelRepository
- Query building utilities for filtering and pagination

Modules:
- base: Repository interface, shared CRUD implementation and QueryBuilder
- users, ai_systems, departments, documents, risk_assessments: inventory tables
- tracking: activity log, alerts, deadlines
- training: training modules and progress
- approvals: approval workflow tables
- api_keys: stored provider keys
- regulatory_terms: regulatory glossary
- bundle: SqlRepoBundle for services spanning several tables
"""

from .bundle import SqlRepoBundle, build_sql_repos_from_session

__all__ = ["SqlRepoBundle", "build_sql_repos_from_session"]
