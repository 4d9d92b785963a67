#!/usr/bin/env python3
"""
Check that every active stored API key still works.

Each key gets a minimal request. Keys rejected as invalid are deactivated;
keys that fail for temporary reasons only have their usage counted.

Usage:
  python -m compliance_ai.scripts.check_ai_keys
"""

from __future__ import annotations

import argparse
import asyncio
from typing import Dict, List, Optional

import httpx
from sqlalchemy.ext.asyncio import AsyncSession

from compliance_ai.ai_services.api_key_manager import is_permanent_failure
from compliance_ai.ai_services.google_search import search_with_key
from compliance_ai.ai_services.providers import test_provider_key
from compliance_ai.core.database.base import utc_now
from compliance_ai.core.database.repositories.api_keys import ApiKeyRepository
from compliance_ai.core.errors import AppError, ConfigurationError
from compliance_ai.core.logging_config import get_logger, setup_logging
from compliance_ai.core.security import mask_secret

logger = get_logger(__name__)


async def check_key(provider: str, api_key: str, *, client: Optional[httpx.AsyncClient] = None) -> None:
    """Send a minimal request with ``api_key``; raises ``AppError`` when it is rejected."""
    if provider == "google_search":
        from compliance_ai.server.core.config import settings

        engine_id = settings.google_search.engine_id
        if not engine_id:
            raise ConfigurationError("GOOGLE_SEARCH_ENGINE_ID is not configured")
        await search_with_key("EU AI Act", api_key, engine_id=engine_id, num=1, client=client)
        return
    await test_provider_key(provider, api_key, client=client)


async def check_ai_keys(session: AsyncSession, *, client: Optional[httpx.AsyncClient] = None) -> Dict[str, int]:
    """Test every active key.

    Returns:
        Counts of ``working``, ``deactivated`` and ``failed`` keys
    """
    repo = ApiKeyRepository(session)
    summary = {"working": 0, "deactivated": 0, "failed": 0}
    keys = await repo.list_active()
    if not keys:
        logger.info("No active API keys found in the database")
        return summary

    logger.info(f"Checking {len(keys)} active API keys")
    for api_key in keys:
        label = f"{api_key.provider} key {mask_secret(api_key.key)} (ID: {api_key.id})"
        try:
            await check_key(api_key.provider, api_key.key, client=client)
        except AppError as e:
            if is_permanent_failure(e):
                await repo.deactivate(api_key)
                summary["deactivated"] += 1
                logger.warning(f"{label} rejected, marked inactive: {e.message}")
            else:
                await repo.update_fields(api_key, {"usage_count": api_key.usage_count + 1, "last_used": utc_now()})
                summary["failed"] += 1
                logger.warning(f"{label} failed temporarily: {e.message}")
            continue
        await repo.record_usage(api_key)
        summary["working"] += 1
        logger.info(f"{label} is working")
    return summary


def main(argv: Optional[List[str]] = None) -> int:
    argparse.ArgumentParser(description="Test all active AI provider keys.").parse_args(argv)

    setup_logging(enable_file=False)
    from compliance_ai.core.database import async_session_maker, engine

    async def _run() -> Dict[str, int]:
        try:
            async with async_session_maker() as session, httpx.AsyncClient() as client:
                return await check_ai_keys(session, client=client)
        finally:
            await engine.dispose()

    summary = asyncio.run(_run())
    logger.info(
        f"API key check finished: {summary['working']} working, "
        f"{summary['deactivated']} deactivated, {summary['failed']} temporary failures"
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
