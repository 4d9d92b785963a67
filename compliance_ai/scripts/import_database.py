#!/usr/bin/env python3
"""
Load a JSON export produced by ``export_database``.

When the database already holds data the tables are dropped and recreated
before the import, after confirmation (or ``--yes``).

Usage:
  python -m compliance_ai.scripts.import_database
  python -m compliance_ai.scripts.import_database --file db-exports/export-20250101-120000.json --yes
"""

from __future__ import annotations

import argparse
import asyncio
import json
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

from sqlalchemy import DateTime, Table, func, inspect, select, text
from sqlalchemy.ext.asyncio import AsyncEngine

from compliance_ai.core.database import Base, create_all, drop_all
from compliance_ai.core.logging_config import get_logger, setup_logging

from .export_database import DEFAULT_OUTPUT_DIR, LATEST_FILE

logger = get_logger(__name__)


def load_export(path: Path) -> Dict[str, List[Dict[str, Any]]]:
    """Read the ``tables`` mapping of an export file."""
    payload = json.loads(path.read_text(encoding="utf-8"))
    if "tables" not in payload:
        raise ValueError(f"{path} is not a database export: missing 'tables'")
    return payload["tables"]


def _restore_row(table: Table, row: Dict[str, Any]) -> Dict[str, Any]:
    """Keep known columns and turn ISO strings back into datetimes."""
    restored: Dict[str, Any] = {}
    for column in table.columns:
        if column.name not in row:
            continue
        value = row[column.name]
        if isinstance(column.type, DateTime) and isinstance(value, str):
            value = datetime.fromisoformat(value)
        restored[column.name] = value
    return restored


async def existing_row_counts(engine: AsyncEngine) -> Dict[str, int]:
    """Row counts of the tables that exist and hold data."""
    from compliance_ai.core.database import entities  # noqa: F401

    async with engine.connect() as conn:
        existing = set(await conn.run_sync(lambda sync_conn: inspect(sync_conn).get_table_names()))
        counts: Dict[str, int] = {}
        for table in Base.metadata.sorted_tables:
            if table.name not in existing:
                continue
            count = (await conn.execute(select(func.count()).select_from(table))).scalar_one()
            if count:
                counts[table.name] = count
    return counts


async def _reset_sequences(conn, tables: List[Table]) -> None:
    for table in tables:
        if "id" not in table.columns:
            continue
        await conn.execute(
            text(
                f"SELECT setval(pg_get_serial_sequence('{table.name}', 'id'), "
                f"COALESCE((SELECT MAX(id) FROM {table.name}), 1))"
            )
        )


async def import_database(engine: AsyncEngine, tables: Dict[str, List[Dict[str, Any]]]) -> Dict[str, int]:
    """Recreate the schema and insert the exported rows.

    Tables missing from the export stay empty; unknown tables are skipped.

    Returns:
        Inserted row count per table
    """
    await drop_all(engine)
    await create_all(engine)

    inserted: Dict[str, int] = {}
    async with engine.begin() as conn:
        for table in Base.metadata.sorted_tables:
            rows = [_restore_row(table, row) for row in tables.get(table.name, [])]
            if rows:
                await conn.execute(table.insert(), rows)
            inserted[table.name] = len(rows)
        if conn.dialect.name == "postgresql":
            await _reset_sequences(conn, list(Base.metadata.sorted_tables))

    for name in sorted(set(tables) - set(inserted)):
        logger.warning(f"Skipped unknown table {name}")
    for name, count in inserted.items():
        logger.info(f"  {name}: {count} rows")
    return inserted


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Import a JSON database export.")
    parser.add_argument(
        "--file", default=str(Path(DEFAULT_OUTPUT_DIR) / LATEST_FILE), help="Export file to load"
    )
    parser.add_argument("--yes", action="store_true", help="Replace existing data without asking")
    args = parser.parse_args(argv)

    setup_logging(enable_file=False)
    path = Path(args.file)
    if not path.exists():
        logger.error(f"Export file not found: {path}")
        return 1
    tables = load_export(path)

    from compliance_ai.core.database import engine

    async def _run() -> int:
        try:
            counts = await existing_row_counts(engine)
            if counts and not args.yes:
                summary = ", ".join(f"{name}={count}" for name, count in counts.items())
                answer = input(f"Database already contains data ({summary}). Drop and replace it? [y/N] ")
                if answer.strip().lower() not in ("y", "yes"):
                    logger.info("Import cancelled")
                    return 1
            await import_database(engine, tables)
            logger.info(f"Imported {path}")
            return 0
        finally:
            await engine.dispose()

    return asyncio.run(_run())


if __name__ == "__main__":
    raise SystemExit(main())
