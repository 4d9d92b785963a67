"""Unit tests for the database layer in compliance_ai/core/database.

Entities, repositories and helpers run against in-memory SQLite, so no
PostgreSQL server is required.
"""
