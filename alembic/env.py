"""
Alembic environment for Compliance-AI.

Migrations run on the async engine built from ``DATABASE_URL`` (loaded from
the environment or ``.env``), the same URL the application uses.
"""

import asyncio
import logging
from logging.config import fileConfig

from sqlalchemy.engine import Connection

from alembic import context
from compliance_ai.core.database import Base, create_engine
from compliance_ai.core.database import entities  # noqa: F401  registers every table
from compliance_ai.core.database.utils import normalize_database_url
from compliance_ai.server.core.config import settings

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata

logger = logging.getLogger("alembic.env")


def run_migrations_offline() -> None:
    """Run migrations in 'offline' mode, emitting SQL instead of executing it."""
    context.configure(
        url=normalize_database_url(settings.database_url),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def do_run_migrations(connection: Connection) -> None:
    context.configure(connection=connection, target_metadata=target_metadata)

    with context.begin_transaction():
        context.run_migrations()


async def run_migrations_online() -> None:
    """Run migrations in 'online' mode on the async engine."""
    connectable = create_engine(settings.database_url)
    logger.info(f"Running migrations against {connectable.url.render_as_string(hide_password=True)}")

    async with connectable.connect() as connection:
        await connection.run_sync(do_run_migrations)

    await connectable.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    asyncio.run(run_migrations_online())
