"""Text generation with provider fallback.

``call_ai`` walks the fallback chain DeepSeek -> Gemini -> Google Search.
A provider is skipped when it has no usable keys and abandoned when its
retries are exhausted; Google Search, the last link, answers with search
results rendered as text. OpenAI is only used when requested explicitly.
"""

from __future__ import annotations

from typing import Any, Awaitable, Callable, Dict, List, Optional, Tuple

import httpx

from compliance_ai.core.errors import AIModelError, AppError, ValidationError
from compliance_ai.core.logging_config import get_logger

from . import providers
from .api_key_manager import APIKeyManager, api_key_manager
from .google_search import google_search
from .providers import AIResponse

logger = get_logger(__name__)

FALLBACK_CHAIN: Tuple[str, ...] = ("deepseek", "gemini", "google_search")
SELECTABLE_MODELS: Tuple[str, ...] = ("deepseek", "gemini", "openai")


def render_search_results(prompt: str, results: List[Dict[str, Any]]) -> str:
    """Render search results as a plain text answer."""
    lines = [f'Search results for "{prompt}":', ""]
    for index, result in enumerate(results, start=1):
        lines.append(f"{index}. {result.get('title', '')}")
        if result.get("description"):
            lines.append(f"   {result['description']}")
        if result.get("url"):
            lines.append(f"   {result['url']}")
    return "\n".join(lines)


def _model_name(provider: str) -> str:
    from compliance_ai.server.core.config import settings

    models = settings.ai_models
    return {
        "deepseek": models.deepseek_model,
        "gemini": models.gemini_model,
        "openai": models.openai_model,
    }[provider]


async def _call_provider(
    provider: str,
    prompt: str,
    *,
    system_prompt: Optional[str],
    temperature: float,
    max_tokens: int,
    manager: APIKeyManager,
    client: Optional[httpx.AsyncClient],
) -> AIResponse:
    if provider == "google_search":
        results = await google_search(prompt, num=5, manager=manager, client=client)
        if not results:
            raise AIModelError("Google search returned no results", details={"provider": provider})
        return AIResponse(text=render_search_results(prompt, results), provider=provider)

    call: Callable[..., Awaitable[AIResponse]] = providers.PROVIDER_CALLS[provider]

    async def _attempt(api_key: str) -> AIResponse:
        return await call(
            prompt,
            api_key,
            system_prompt=system_prompt,
            model=_model_name(provider),
            temperature=temperature,
            max_tokens=max_tokens,
            client=client,
        )

    return await manager.execute_with_retry(provider, _attempt)


async def call_ai(
    prompt: str,
    *,
    system_prompt: Optional[str] = None,
    model: Optional[str] = None,
    temperature: float = 0.7,
    max_tokens: int = 1000,
    manager: Optional[APIKeyManager] = None,
    client: Optional[httpx.AsyncClient] = None,
) -> AIResponse:
    """Generate a response for ``prompt``.

    Args:
        prompt: User prompt.
        system_prompt: Replaces the default compliance expert prompt.
        model: ``deepseek``, ``gemini`` or ``openai`` to use one provider
            only; the fallback chain is used when omitted.
        temperature: Sampling temperature.
        max_tokens: Upper bound of generated tokens.
        manager: Key manager to draw keys from (module singleton by default).
        client: Shared HTTP client.

    Raises:
        ValidationError: For an unknown ``model``.
        AIModelError: When every provider tried has failed.
    """
    keys = manager or api_key_manager
    if model is not None and model not in SELECTABLE_MODELS:
        raise ValidationError(f"Unknown model '{model}'", details={"supported": list(SELECTABLE_MODELS)})
    chain = (model,) if model else FALLBACK_CHAIN

    failures: Dict[str, str] = {}
    for provider in chain:
        if keys.available_key_count(provider) == 0:
            failures[provider] = "no available API keys"
            logger.debug(f"Skipping {provider}: no available API keys")
            continue
        try:
            response = await _call_provider(
                provider,
                prompt,
                system_prompt=system_prompt,
                temperature=temperature,
                max_tokens=max_tokens,
                manager=keys,
                client=client,
            )
        except AppError as e:
            failures[provider] = e.message
            logger.warning(f"AI provider {provider} failed, trying next: {e.message}")
            continue
        logger.info(f"AI response generated by {provider}")
        return response

    raise AIModelError("All AI providers failed", details=failures)
