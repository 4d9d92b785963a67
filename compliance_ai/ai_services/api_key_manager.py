"""API key rotation and retry for third-party AI providers.

The manager keeps an in-process pool of keys per provider and hands them out
according to a rotation strategy. Failures are reported back per key: a key
rejected by the provider (401/403, "invalid api key", ...) is disabled at
once, while transient failures disable it only after ``MAX_TRANSIENT_ERRORS``.

Typical usage:
    from compliance_ai.ai_services.api_key_manager import api_key_manager

    api_key_manager.register_keys("deepseek", ["sk-1", "sk-2"])
    result = await api_key_manager.execute_with_retry("deepseek", lambda key: call_deepseek(prompt, key))

The manager is only touched from the event loop thread, so it holds no locks.
"""

from __future__ import annotations

import asyncio
import random
import time
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, List, Optional, TypeVar

from compliance_ai.core.errors import ConfigurationError, ServiceUnavailableError
from compliance_ai.core.logging_config import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

ROTATION_STRATEGIES = ("round-robin", "random", "least-used")
MAX_TRANSIENT_ERRORS = 5

PERMANENT_FAILURE_STATUS_CODES = (401, 403)
PERMANENT_FAILURE_MARKERS = (
    "invalid api key",
    "invalid key",
    "unauthorized",
    "forbidden",
    "authentication",
    "no longer valid",
)


@dataclass
class KeyUsage:
    """Usage bookkeeping for one API key."""

    key: str
    usage_count: int = 0
    last_used: Optional[float] = None
    error_count: int = 0
    last_error: Optional[str] = None
    disabled: bool = False


@dataclass
class ProviderKeyPool:
    keys: List[KeyUsage]
    max_retries: int = 3
    retry_delay: float = 1.0
    rotation_strategy: str = "round-robin"
    current_index: int = 0
    _by_key: Dict[str, KeyUsage] = field(default_factory=dict, repr=False)

    def __post_init__(self) -> None:
        self._by_key = {usage.key: usage for usage in self.keys}

    def find(self, key: str) -> Optional[KeyUsage]:
        return self._by_key.get(key)

    def available(self) -> List[KeyUsage]:
        return [usage for usage in self.keys if not usage.disabled]


def _status_code_of(error: BaseException) -> Optional[int]:
    status = getattr(error, "status_code", None)
    if isinstance(status, int):
        return status
    response = getattr(error, "response", None)
    status = getattr(response, "status_code", None)
    return status if isinstance(status, int) else None


def is_permanent_failure(error: BaseException) -> bool:
    """Return True when ``error`` means the key itself is unusable."""
    if _status_code_of(error) in PERMANENT_FAILURE_STATUS_CODES:
        return True
    message = str(error).lower()
    return any(marker in message for marker in PERMANENT_FAILURE_MARKERS)


class APIKeyManager:
    """Pool of API keys per provider with rotation, retry and inactive marking."""

    def __init__(self) -> None:
        self._pools: Dict[str, ProviderKeyPool] = {}

    def register_keys(
        self,
        provider: str,
        keys: List[str],
        max_retries: int = 3,
        retry_delay: float = 1.0,
        rotation_strategy: str = "round-robin",
    ) -> None:
        """Register (or replace) the keys of a provider.

        Args:
            provider: Provider name, e.g. ``deepseek`` or ``google_search``.
            keys: Raw API keys; blank entries are ignored.
            max_retries: Retries ``execute_with_retry`` makes after the first attempt.
            retry_delay: Seconds to wait between attempts.
            rotation_strategy: ``round-robin``, ``random`` or ``least-used``.

        Raises:
            ConfigurationError: If no usable key is given or the strategy is unknown.
        """
        cleaned = [key.strip() for key in keys if key and key.strip()]
        if not cleaned:
            raise ConfigurationError(f"No API keys provided for {provider}")
        if rotation_strategy not in ROTATION_STRATEGIES:
            raise ConfigurationError(
                f"Unknown rotation strategy '{rotation_strategy}'. Use one of: {', '.join(ROTATION_STRATEGIES)}"
            )
        self._pools[provider] = ProviderKeyPool(
            keys=[KeyUsage(key=key) for key in cleaned],
            max_retries=max(0, max_retries),
            retry_delay=max(0.0, retry_delay),
            rotation_strategy=rotation_strategy,
        )
        logger.info(f"Registered {len(cleaned)} API key(s) for {provider} (strategy={rotation_strategy})")

    def is_registered(self, provider: str) -> bool:
        return provider in self._pools

    def providers(self) -> List[str]:
        return list(self._pools)

    def clear(self) -> None:
        self._pools.clear()

    def _pool(self, provider: str) -> ProviderKeyPool:
        pool = self._pools.get(provider)
        if pool is None:
            raise ConfigurationError(f"No API keys registered for {provider}")
        return pool

    def get_key(self, provider: str) -> str:
        """Return the next usable key for ``provider``.

        Raises:
            ConfigurationError: If the provider was never registered.
            ServiceUnavailableError: If every key of the provider is disabled.
        """
        pool = self._pool(provider)
        available = pool.available()
        if not available:
            raise ServiceUnavailableError(
                f"No available API keys for {provider}",
                details={"provider": provider, "total_keys": len(pool.keys)},
            )

        if pool.rotation_strategy == "random":
            usage = random.choice(available)
        elif pool.rotation_strategy == "least-used":
            usage = min(available, key=lambda u: u.usage_count)
        else:
            index = pool.current_index % len(available)
            usage = available[index]
            pool.current_index = index + 1

        usage.usage_count += 1
        usage.last_used = time.time()
        return usage.key

    def report_error(self, provider: str, key: str, error: BaseException) -> None:
        """Record a failure of ``key`` and disable it when it is unusable."""
        usage = self._pool(provider).find(key)
        if usage is None:
            logger.warning(f"Error reported for an unknown {provider} key")
            return

        usage.error_count += 1
        usage.last_error = str(error)

        if is_permanent_failure(error):
            usage.disabled = True
            logger.warning(f"Disabled {provider} key {usage.key[:5]}... after a permanent failure: {error}")
        elif usage.error_count >= MAX_TRANSIENT_ERRORS:
            usage.disabled = True
            logger.warning(f"Disabled {provider} key {usage.key[:5]}... after {usage.error_count} errors")

    async def execute_with_retry(self, provider: str, call: Callable[[str], Awaitable[T]]) -> T:
        """Run ``call(key)`` until it succeeds or the retry budget is spent.

        One attempt plus ``max_retries`` retries are made at most.

        Every attempt draws a key from the pool; a failure is reported against
        the key used by that attempt before the next one starts.

        Raises:
            ServiceUnavailableError: When all attempts failed or no key is left.
            ConfigurationError: If the provider was never registered.
        """
        pool = self._pool(provider)
        last_error: Optional[BaseException] = None

        attempts = pool.max_retries + 1
        for attempt in range(1, attempts + 1):
            key = self.get_key(provider)
            try:
                return await call(key)
            except Exception as e:
                last_error = e
                self.report_error(provider, key, e)
                logger.warning(f"{provider} attempt {attempt}/{attempts} failed: {e}")
                if attempt < attempts:
                    await asyncio.sleep(pool.retry_delay)

        raise ServiceUnavailableError(
            f"Failed after {pool.max_retries} retries for {provider}: {last_error}",
            details={"provider": provider, "last_error": str(last_error)},
        )

    def reset_key(self, provider: str, key: str) -> bool:
        """Re-enable a key and clear its error count. Returns False for unknown keys."""
        usage = self._pool(provider).find(key)
        if usage is None:
            return False
        usage.disabled = False
        usage.error_count = 0
        usage.last_error = None
        return True

    def available_key_count(self, provider: str) -> int:
        pool = self._pools.get(provider)
        return len(pool.available()) if pool else 0

    def get_key_stats(self, provider: str) -> List[Dict[str, Any]]:
        """Per-key statistics; keys are shown by their first five characters only."""
        pool = self._pools.get(provider)
        if pool is None:
            return []
        return [
            {
                "key_prefix": f"{usage.key[:5]}...",
                "usage_count": usage.usage_count,
                "error_count": usage.error_count,
                "disabled": usage.disabled,
                "last_used": usage.last_used,
                "last_error": usage.last_error,
            }
            for usage in pool.keys
        ]


def split_keys(value: Optional[str]) -> List[str]:
    """Split a comma separated key setting into individual keys."""
    if not value:
        return []
    return [part.strip() for part in value.split(",") if part.strip()]


def register_api_keys_from_env(settings=None, manager: Optional[APIKeyManager] = None) -> List[str]:
    """Register every provider that has keys configured.

    Args:
        settings: Application settings; the module singleton is used when omitted.
        manager: Target manager; the module singleton is used when omitted.

    Returns:
        The names of the providers that were registered.
    """
    if settings is None:
        from compliance_ai.server.core.config import settings
    target = manager or api_key_manager
    models = settings.ai_models

    registered: List[str] = []
    for provider, value in settings.ai_keys.as_mapping().items():
        keys = split_keys(value)
        if not keys:
            logger.debug(f"No API key configured for {provider}")
            continue
        target.register_keys(provider, keys, max_retries=models.max_retries, retry_delay=models.retry_delay)
        registered.append(provider)

    if registered:
        logger.info(f"AI providers with keys: {', '.join(registered)}")
    else:
        logger.warning("No AI provider API keys configured; AI features are unavailable")
    return registered


api_key_manager = APIKeyManager()
