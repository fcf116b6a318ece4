"""
OpenAI async client manager with connection pooling and circuit breaker.

Provides a shared client with:
- Connection pooling via httpx
- Circuit breaker pattern for fault tolerance
- Automatic client refresh on TTL expiry
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from datetime import UTC, datetime

import httpx
from openai import AsyncOpenAI

from stockdesk.core.logging import get_logger
from stockdesk.services.openai.config import OpenAISettings, get_settings


logger = get_logger("openai.client")


@dataclass
class CircuitBreakerState:
    """State for circuit breaker pattern."""
    failures: int = 0
    last_failure: datetime | None = None
    is_open: bool = False
    opened_at: datetime | None = None
    half_open: bool = False

    def record_failure(self) -> None:
        """Record a failure and potentially open the circuit."""
        self.failures += 1
        self.last_failure = datetime.now(UTC)

    def record_success(self) -> None:
        """Record a success and reset failure count."""
        self.failures = 0
        self.is_open = False
        self.opened_at = None
        self.half_open = False

    def open_circuit(self) -> None:
        """Open the circuit breaker."""
        self.is_open = True
        self.half_open = False
        self.opened_at = datetime.now(UTC)
        logger.warning(f"Circuit breaker opened after {self.failures} failures")

    def _cooling_down(self, timeout_seconds: int) -> bool:
        if not self.opened_at:
            return False
        elapsed = (datetime.now(UTC) - self.opened_at).total_seconds()
        return elapsed < timeout_seconds

    def is_blocking(self, timeout_seconds: int) -> bool:
        """Open and still inside the timeout window."""
        return self.is_open and self._cooling_down(timeout_seconds)

    def should_allow_request(self, timeout_seconds: int) -> bool:
        """Check if a request should be allowed through."""
        if not self.is_open:
            return True
        if self._cooling_down(timeout_seconds):
            return False

        # Half-open: one trial request per timeout window
        self.half_open = True
        self.opened_at = datetime.now(UTC)
        logger.info("Circuit breaker half-open, allowing test request")
        return True


class OpenAIClientManager:
    """
    Manages OpenAI client lifecycle with connection pooling and circuit breaker.

    Usage:
        manager = OpenAIClientManager()
        client = await manager.get_client()
        response = await client.responses.create(...)
    """

    def __init__(self, settings: OpenAISettings | None = None):
        self._settings = settings or get_settings()
        self._client: AsyncOpenAI | None = None
        self._created_at: datetime | None = None
        self._lock = asyncio.Lock()
        self._circuit_breaker = CircuitBreakerState()
        self._http_client: httpx.AsyncClient | None = None

    @property
    def settings(self) -> OpenAISettings:
        return self._settings

    def _is_client_expired(self) -> bool:
        if not self._created_at:
            return True
        return datetime.now(UTC) - self._created_at > self._settings.client_ttl

    async def get_client(self) -> AsyncOpenAI | None:
        """
        Get or create an OpenAI client.

        Returns None if the API key is not configured or the circuit
        breaker is open.
        """
        if not self._circuit_breaker.should_allow_request(
            self._settings.circuit_breaker_timeout
        ):
            logger.warning("Circuit breaker open, rejecting request")
            return None

        async with self._lock:
            if self._client is not None and not self._is_client_expired():
                return self._client

            if not self._settings.api_key:
                logger.warning("OpenAI API key not configured")
                return None

            await self._close_client()

            self._http_client = httpx.AsyncClient(
                limits=httpx.Limits(
                    max_connections=self._settings.max_connections,
                    max_keepalive_connections=max(1, self._settings.max_connections // 2),
                ),
                timeout=httpx.Timeout(self._settings.request_timeout, connect=10.0),
            )

            self._client = AsyncOpenAI(
                api_key=self._settings.api_key,
                base_url=self._settings.base_url,
                http_client=self._http_client,
                max_retries=0,
            )
            self._created_at = datetime.now(UTC)

            logger.debug("Created new OpenAI client")
            return self._client

    async def _close_client(self) -> None:
        if self._http_client:
            try:
                await self._http_client.aclose()
            except httpx.HTTPError as e:
                logger.debug(f"Error closing HTTP client: {e}")
            self._http_client = None

        self._client = None
        self._created_at = None

    def record_success(self) -> None:
        """Record a successful API call."""
        self._circuit_breaker.record_success()

    def record_failure(self) -> None:
        """Record a failed API call and potentially open circuit breaker."""
        breaker = self._circuit_breaker
        breaker.record_failure()

        # A failed half-open trial reopens immediately
        if breaker.half_open or breaker.failures >= self._settings.circuit_breaker_threshold:
            breaker.open_circuit()

    def is_circuit_open(self) -> bool:
        """True while requests are being rejected."""
        return self._circuit_breaker.is_blocking(self._settings.circuit_breaker_timeout)

    async def close(self) -> None:
        """Close the client manager and release resources."""
        async with self._lock:
            await self._close_client()


_manager: OpenAIClientManager | None = None


def get_client_manager() -> OpenAIClientManager:
    """Get or create the process-wide client manager."""
    global _manager

    if _manager is None:
        _manager = OpenAIClientManager()

    return _manager


async def close_client_manager() -> None:
    """Release the shared client, if one was created."""
    global _manager

    if _manager is not None:
        await _manager.close()
        _manager = None
