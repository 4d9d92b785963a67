#!/usr/bin/env python3
"""
Export every table to a JSON file.

The export is written as ``export-<timestamp>.json`` under the output
directory and copied to ``latest.json`` there, which is what
``import_database`` loads by default.

Usage:
  python -m compliance_ai.scripts.export_database
  python -m compliance_ai.scripts.export_database --output-dir backups
"""

from __future__ import annotations

import argparse
import asyncio
import json
import shutil
from datetime import date, datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncEngine

from compliance_ai.core.database import Base, utc_now
from compliance_ai.core.logging_config import get_logger, setup_logging

logger = get_logger(__name__)

DEFAULT_OUTPUT_DIR = "db-exports"
LATEST_FILE = "latest.json"
EXPORT_VERSION = 1


def _json_default(value: Any) -> Any:
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


async def dump_tables(engine: AsyncEngine) -> Dict[str, List[Dict[str, Any]]]:
    """Read every table known to the metadata, in dependency order."""
    from compliance_ai.core.database import entities  # noqa: F401

    tables: Dict[str, List[Dict[str, Any]]] = {}
    async with engine.connect() as conn:
        for table in Base.metadata.sorted_tables:
            result = await conn.execute(select(table))
            tables[table.name] = [dict(row) for row in result.mappings()]
    return tables


async def export_database(engine: AsyncEngine, output_dir: Path) -> Path:
    """Write a timestamped export and refresh ``latest.json``.

    Returns:
        Path of the timestamped export file
    """
    tables = await dump_tables(engine)
    exported_at = utc_now()
    payload = {"version": EXPORT_VERSION, "exported_at": exported_at.isoformat(), "tables": tables}

    output_dir.mkdir(parents=True, exist_ok=True)
    target = output_dir / f"export-{exported_at.strftime('%Y%m%d-%H%M%S')}.json"
    target.write_text(json.dumps(payload, indent=2, default=_json_default), encoding="utf-8")
    shutil.copyfile(target, output_dir / LATEST_FILE)

    for name, rows in tables.items():
        logger.info(f"  {name}: {len(rows)} rows")
    logger.info(f"Exported {sum(len(rows) for rows in tables.values())} rows to {target}")
    return target


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Export all tables to JSON.")
    parser.add_argument("--output-dir", default=DEFAULT_OUTPUT_DIR, help="Directory for export files")
    args = parser.parse_args(argv)

    setup_logging(enable_file=False)
    from compliance_ai.core.database import engine

    async def _run() -> None:
        try:
            await export_database(engine, Path(args.output_dir))
        finally:
            await engine.dispose()

    asyncio.run(_run())
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
