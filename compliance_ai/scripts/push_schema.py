#!/usr/bin/env python3
"""
Create every table from the ORM metadata.

Intended for local development and first deployments; production schema
changes go through Alembic.

Usage:
  python -m compliance_ai.scripts.push_schema
  python -m compliance_ai.scripts.push_schema --drop
"""

from __future__ import annotations

import argparse
import asyncio
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncEngine

from compliance_ai.core.database import Base, create_all, drop_all
from compliance_ai.core.logging_config import get_logger, setup_logging

logger = get_logger(__name__)


async def push_schema(engine: AsyncEngine, *, drop: bool = False) -> List[str]:
    """Create all tables, dropping them first when ``drop`` is set.

    Returns:
        Names of the tables known to the metadata
    """
    if drop:
        logger.warning("Dropping all tables")
        await drop_all(engine)
    await create_all(engine)
    tables = [table.name for table in Base.metadata.sorted_tables]
    logger.info(f"Schema pushed: {len(tables)} tables")
    return tables


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Create database tables from the ORM metadata.")
    parser.add_argument("--drop", action="store_true", help="Drop existing tables first (destroys data)")
    args = parser.parse_args(argv)

    setup_logging(enable_file=False)
    from compliance_ai.core.database import engine

    async def _run() -> None:
        try:
            for name in await push_schema(engine, drop=args.drop):
                logger.info(f"  {name}")
        finally:
            await engine.dispose()

    asyncio.run(_run())
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
