"""Google Custom Search integration.

``google_search`` runs through the API key manager like the text providers,
but never raises: a search that fails on every key is logged and yields an
empty result list.
"""

from __future__ import annotations

import time
from typing import Any, Dict, List, Optional

import httpx

from compliance_ai.core.errors import AppError, ConfigurationError, ErrorType
from compliance_ai.core.logging_config import get_logger
from compliance_ai.core.monitoring import log_ai_call

from .api_key_manager import APIKeyManager, api_key_manager

logger = get_logger(__name__)

GOOGLE_SEARCH_URL = "https://www.googleapis.com/customsearch/v1"
PROVIDER = "google_search"
DEFAULT_TIMEOUT = 10.0


def _thumbnail(item: Dict[str, Any]) -> Optional[str]:
    pagemap = item.get("pagemap") or {}
    for section in ("cse_image", "cse_thumbnail"):
        entries = pagemap.get(section) or []
        if entries and isinstance(entries[0], dict) and entries[0].get("src"):
            return entries[0]["src"]
    return None


def parse_search_items(payload: Dict[str, Any]) -> List[Dict[str, Any]]:
    """Normalise Custom Search ``items`` to ``{title, url, description, thumbnail_url}``."""
    return [
        {
            "title": item.get("title", ""),
            "url": item.get("link", ""),
            "description": item.get("snippet", ""),
            "thumbnail_url": _thumbnail(item),
        }
        for item in payload.get("items") or []
    ]


async def search_with_key(
    query: str,
    api_key: str,
    *,
    engine_id: str,
    num: int = 10,
    site_search: Optional[str] = None,
    exact_terms: Optional[str] = None,
    timeout: float = DEFAULT_TIMEOUT,
    client: Optional[httpx.AsyncClient] = None,
) -> List[Dict[str, Any]]:
    """Run one Custom Search request with ``api_key``.

    Raises:
        AppError: ``external_service_error`` with the response status for
            non-2xx answers, or 503 when Google could not be reached.
    """
    params: Dict[str, Any] = {"q": query, "cx": engine_id, "num": num, "key": api_key}
    if site_search:
        params["siteSearch"] = site_search
    if exact_terms:
        params["exactTerms"] = exact_terms

    started = time.perf_counter()
    success = False
    try:
        try:
            if client is not None:
                response = await client.get(GOOGLE_SEARCH_URL, params=params, timeout=timeout)
            else:
                async with httpx.AsyncClient(timeout=timeout) as http:
                    response = await http.get(GOOGLE_SEARCH_URL, params=params)
        except httpx.HTTPError as e:
            raise AppError(
                f"Error connecting to Google Search API: {e}",
                type=ErrorType.EXTERNAL_SERVICE,
                status_code=503,
            ) from e

        if not response.is_success:
            raise AppError(
                f"Google Search API error: {response.text[:300]}",
                type=ErrorType.EXTERNAL_SERVICE,
                status_code=response.status_code,
            )
        results = parse_search_items(response.json())
        success = True
        return results
    finally:
        log_ai_call(PROVIDER, success, (time.perf_counter() - started) * 1000)


async def google_search(
    query: str,
    *,
    num: int = 10,
    site_search: Optional[str] = None,
    exact_terms: Optional[str] = None,
    engine_id: Optional[str] = None,
    manager: Optional[APIKeyManager] = None,
    client: Optional[httpx.AsyncClient] = None,
) -> List[Dict[str, Any]]:
    """Search the web, rotating Google Search keys; returns ``[]`` on total failure."""
    keys = manager or api_key_manager
    if engine_id is None:
        from compliance_ai.server.core.config import settings

        engine_id = settings.google_search.engine_id
        timeout = settings.google_search.timeout
    else:
        timeout = DEFAULT_TIMEOUT

    try:
        if not engine_id:
            raise ConfigurationError("GOOGLE_SEARCH_ENGINE_ID is not configured")

        async def _call(api_key: str) -> List[Dict[str, Any]]:
            return await search_with_key(
                query,
                api_key,
                engine_id=engine_id,
                num=num,
                site_search=site_search,
                exact_terms=exact_terms,
                timeout=timeout,
                client=client,
            )

        return await keys.execute_with_retry(PROVIDER, _call)
    except AppError as e:
        logger.error(f"Google search failed for query '{query}': {e.message}")
        return []


def is_google_search_available(manager: Optional[APIKeyManager] = None) -> bool:
    return (manager or api_key_manager).available_key_count(PROVIDER) > 0


def get_google_search_api_key_stats(manager: Optional[APIKeyManager] = None) -> List[Dict[str, Any]]:
    return (manager or api_key_manager).get_key_stats(PROVIDER)
