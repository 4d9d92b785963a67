#!/usr/bin/env python3
"""
Seed the built-in EU AI Act training modules.

Existing modules with the same ``module_id`` are updated in place.

Usage:
  python -m compliance_ai.scripts.seed_training_modules
"""

from __future__ import annotations

import argparse
import asyncio
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from compliance_ai.core.database.entities import TrainingModule
from compliance_ai.core.database.repositories.training import TrainingModuleRepository
from compliance_ai.core.logging_config import get_logger, setup_logging
from compliance_ai.server.services.training_catalog import BUILTIN_MODULES

logger = get_logger(__name__)


async def seed_training_modules(session: AsyncSession) -> List[TrainingModule]:
    repo = TrainingModuleRepository(session)
    seeded: List[TrainingModule] = []
    for data in BUILTIN_MODULES:
        module = await repo.get_by_module_id(data["module_id"])
        if module is None:
            module = await repo.create(TrainingModule(**data))
            logger.info(f"Added training module {module.module_id}")
        else:
            module = await repo.update_fields(module, {k: v for k, v in data.items() if k != "module_id"})
            logger.info(f"Updated training module {module.module_id}")
        seeded.append(module)
    return seeded


def main(argv: Optional[List[str]] = None) -> int:
    argparse.ArgumentParser(description="Seed the built-in training modules.").parse_args(argv)

    setup_logging(enable_file=False)
    from compliance_ai.core.database import async_session_maker, engine

    async def _run() -> None:
        try:
            async with async_session_maker() as session:
                modules = await seed_training_modules(session)
        finally:
            await engine.dispose()
        logger.info(f"{len(modules)} training modules seeded")

    asyncio.run(_run())
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
