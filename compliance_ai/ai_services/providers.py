"""HTTP clients for the AI text generation providers.

One coroutine per provider, each taking the API key to use so that the
caller (normally ``APIKeyManager.execute_with_retry``) controls rotation.
All of them return an ``AIResponse`` and map HTTP failures onto the
application error taxonomy:

- 429 -> ``RateLimitError``
- 401/403 -> ``AuthenticationError`` (treated as a permanent key failure)
- other non-2xx -> ``ExternalServiceError``
- transport errors and timeouts -> ``ServiceUnavailableError``

Pass ``client`` to reuse a configured ``httpx.AsyncClient``; otherwise a
short-lived one is opened per call.
"""

from __future__ import annotations

import time
from typing import Any, Dict, Optional

import httpx
from pydantic import BaseModel

from compliance_ai.core.errors import (
    AIModelError,
    AuthenticationError,
    ConfigurationError,
    ExternalServiceError,
    RateLimitError,
    ServiceUnavailableError,
)
from compliance_ai.core.logging_config import get_logger
from compliance_ai.core.monitoring import log_ai_call

logger = get_logger(__name__)

DEEPSEEK_URL = "https://api.deepseek.com/v1/chat/completions"
OPENAI_URL = "https://api.openai.com/v1/chat/completions"
GEMINI_URL = "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"

DEFAULT_SYSTEM_PROMPT = (
    "You are an EU AI Act compliance expert that provides accurate, regulatory-focused guidance."
)
DEFAULT_TIMEOUT = 60.0

KEY_TEST_PROMPT = "Say hello for API key test"


class AIResponse(BaseModel):
    """Text produced by a provider."""

    text: str
    provider: str
    tokens: Optional[int] = None


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text[:500]
    if isinstance(body, dict):
        error = body.get("error")
        if isinstance(error, dict):
            return str(error.get("message") or error)
        if error:
            return str(error)
        if body.get("message"):
            return str(body["message"])
    return str(body)[:500]


def raise_for_provider_status(provider: str, response: httpx.Response) -> None:
    """Translate a non-2xx provider response into an ``AppError``."""
    if response.is_success:
        return
    message = _error_message(response)
    details = {"provider": provider, "status_code": response.status_code, "message": message}
    if response.status_code == 429:
        raise RateLimitError(f"{provider} rate limit exceeded", details=details)
    if response.status_code in (401, 403):
        raise AuthenticationError(f"{provider} rejected the API key: {message}", details=details)
    raise ExternalServiceError(provider, details=details)


async def send_request(
    provider: str,
    method: str,
    url: str,
    *,
    client: Optional[httpx.AsyncClient] = None,
    timeout: float = DEFAULT_TIMEOUT,
    **kwargs: Any,
) -> httpx.Response:
    """Send one request, converting transport failures to ``ServiceUnavailableError``."""
    try:
        if client is not None:
            return await client.request(method, url, timeout=timeout, **kwargs)
        async with httpx.AsyncClient(timeout=timeout) as http:
            return await http.request(method, url, **kwargs)
    except httpx.TimeoutException as e:
        raise ServiceUnavailableError(f"{provider} request timed out", details={"provider": provider}) from e
    except httpx.RequestError as e:
        raise ServiceUnavailableError(f"Could not reach {provider}: {e}", details={"provider": provider}) from e


def _chat_body(prompt: str, system_prompt: Optional[str], model: str, temperature: float, max_tokens: int) -> Dict[str, Any]:
    return {
        "model": model,
        "messages": [
            {"role": "system", "content": system_prompt or DEFAULT_SYSTEM_PROMPT},
            {"role": "user", "content": prompt},
        ],
        "temperature": temperature,
        "max_tokens": max_tokens,
    }


def _parse_chat_completion(provider: str, payload: Dict[str, Any]) -> AIResponse:
    try:
        text = payload["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError) as e:
        raise AIModelError(f"Unexpected response format from {provider}", details={"provider": provider}) from e
    usage = payload.get("usage") or {}
    return AIResponse(text=text or "", provider=provider, tokens=usage.get("total_tokens"))


async def _chat_completion(
    provider: str,
    url: str,
    prompt: str,
    api_key: str,
    *,
    model: str,
    system_prompt: Optional[str],
    temperature: float,
    max_tokens: int,
    client: Optional[httpx.AsyncClient],
    timeout: float,
) -> AIResponse:
    started = time.perf_counter()
    success = False
    tokens = None
    try:
        response = await send_request(
            provider,
            "POST",
            url,
            client=client,
            timeout=timeout,
            headers={"Authorization": f"Bearer {api_key}", "Content-Type": "application/json"},
            json=_chat_body(prompt, system_prompt, model, temperature, max_tokens),
        )
        raise_for_provider_status(provider, response)
        result = _parse_chat_completion(provider, response.json())
        success = True
        tokens = result.tokens
        return result
    finally:
        log_ai_call(provider, success, (time.perf_counter() - started) * 1000, tokens)


async def call_deepseek(
    prompt: str,
    api_key: str,
    *,
    system_prompt: Optional[str] = None,
    model: str = "deepseek-chat",
    temperature: float = 0.7,
    max_tokens: int = 1000,
    client: Optional[httpx.AsyncClient] = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> AIResponse:
    """Generate text with DeepSeek's OpenAI-compatible chat completions endpoint."""
    return await _chat_completion(
        "deepseek",
        DEEPSEEK_URL,
        prompt,
        api_key,
        model=model,
        system_prompt=system_prompt,
        temperature=temperature,
        max_tokens=max_tokens,
        client=client,
        timeout=timeout,
    )


async def call_openai(
    prompt: str,
    api_key: str,
    *,
    system_prompt: Optional[str] = None,
    model: str = "gpt-3.5-turbo",
    temperature: float = 0.7,
    max_tokens: int = 1000,
    client: Optional[httpx.AsyncClient] = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> AIResponse:
    """Generate text with the OpenAI chat completions endpoint."""
    return await _chat_completion(
        "openai",
        OPENAI_URL,
        prompt,
        api_key,
        model=model,
        system_prompt=system_prompt,
        temperature=temperature,
        max_tokens=max_tokens,
        client=client,
        timeout=timeout,
    )


async def call_gemini(
    prompt: str,
    api_key: str,
    *,
    system_prompt: Optional[str] = None,
    model: str = "gemini-pro",
    temperature: float = 0.7,
    max_tokens: int = 1000,
    client: Optional[httpx.AsyncClient] = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> AIResponse:
    """Generate text with Gemini ``generateContent``.

    Gemini has no system role on this endpoint, so the system prompt is
    prepended to the user prompt.
    """
    text = f"{system_prompt or DEFAULT_SYSTEM_PROMPT}\n\n{prompt}"
    body = {
        "contents": [{"parts": [{"text": text}]}],
        "generationConfig": {"temperature": temperature, "maxOutputTokens": max_tokens},
    }

    started = time.perf_counter()
    success = False
    tokens = None
    try:
        response = await send_request(
            "gemini",
            "POST",
            GEMINI_URL.format(model=model),
            client=client,
            timeout=timeout,
            params={"key": api_key},
            headers={"Content-Type": "application/json"},
            json=body,
        )
        raise_for_provider_status("gemini", response)
        payload = response.json()
        try:
            parts = payload["candidates"][0]["content"]["parts"]
            output = "".join(part.get("text", "") for part in parts)
        except (KeyError, IndexError, TypeError) as e:
            raise AIModelError("Unexpected response format from gemini", details={"provider": "gemini"}) from e
        tokens = (payload.get("usageMetadata") or {}).get("totalTokenCount")
        success = True
        return AIResponse(text=output, provider="gemini", tokens=tokens)
    finally:
        log_ai_call("gemini", success, (time.perf_counter() - started) * 1000, tokens)


PROVIDER_CALLS = {
    "deepseek": call_deepseek,
    "openai": call_openai,
    "gemini": call_gemini,
}


async def test_provider_key(
    provider: str,
    api_key: str,
    *,
    client: Optional[httpx.AsyncClient] = None,
) -> AIResponse:
    """Send a minimal prompt to check that ``api_key`` is accepted.

    Raises:
        ConfigurationError: For providers without a key test.
        AppError: Whatever the provider call raises for a rejected key.
    """
    call = PROVIDER_CALLS.get(provider)
    if call is None:
        raise ConfigurationError(f"API key test is not supported for provider '{provider}'")
    return await call(KEY_TEST_PROMPT, api_key, temperature=0.1, max_tokens=10, client=client, timeout=30.0)


# Not a pytest test despite the name.
test_provider_key.__test__ = False
