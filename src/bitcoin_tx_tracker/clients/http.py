# -*- coding: utf-8 -*-
"""Async HTTP client with retries and rate-limit handling."""

from __future__ import annotations

import asyncio
import random
import uuid
import aiohttp
import structlog
from typing import Any, Callable, Dict, Optional
from structlog.contextvars import bound_contextvars

from bitcoin_tx_tracker.config import Settings
from bitcoin_tx_tracker.exceptions import RateLimitError, UpstreamAPIError


class AsyncHttpClient:
    """Async JSON HTTP client shared by the mempool.space and UniSat clients.

    Injects Settings and optionally an aiohttp.ClientSession. If no session
    is provided, one is created (with settings.api.timeout_seconds as total
    timeout) and must be closed via aclose() or used as an async context manager.
    """

    def __init__(
        self,
        settings: Settings,
        *,
        session: Optional[aiohttp.ClientSession] = None,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        """Initialize the client.

        Args:
            settings: Configuration (timeout, max_retries).
            session: Optional shared aiohttp session. If None, the client
                creates and owns a session (call aclose() when done).
            get_logger: Logger factory (injected) with default of structlog.get_logger.
            logger_name: Optional logger name (defaults to class name).
        """
        self._settings = settings
        self._session = session
        self._owns_session = session is None
        self._logger = get_logger(logger_name or self.__class__.__name__)

    async def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            timeout = aiohttp.ClientTimeout(total=self._settings.api.timeout_seconds)
            self._session = aiohttp.ClientSession(timeout=timeout)
        return self._session

    async def aclose(self) -> None:
        """Close the session if this client owns it."""
        if self._owns_session and self._session is not None and not self._session.closed:
            await self._session.close()
            self._session = None

    async def __aenter__(self) -> AsyncHttpClient:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()

    def _backoff_delay(self, attempt: int) -> float:
        """Exponential backoff with jitter, capped at 4 seconds."""
        base = min(4.0, 0.25 * (2**attempt))
        return base + random.uniform(0.0, 0.15)

    async def get(
        self,
        url: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> Any:
        """Perform a GET request and return JSON. Retries on failure and on 429.

        Args:
            url: Full URL to request.
            params: Optional query parameters.
            headers: Optional request headers (e.g. Authorization).

        Returns:
            Parsed JSON response (dict, list or scalar).

        Raises:
            RateLimitError: If 429 is returned on every attempt.
            UpstreamAPIError: If the request fails after all retries.
        """
        params = params or {}
        request_id = uuid.uuid4().hex[:12]
        max_retries = self._settings.api.max_retries
        last_error: Optional[Exception] = None
        retry_after: Optional[float] = None
        rate_limited = False

        with bound_contextvars(
            http_url=url,
            http_request_id=request_id,
            http_max_retries=max_retries,
        ):
            for attempt in range(max_retries):
                with bound_contextvars(http_attempt=attempt + 1):
                    try:
                        session = await self._get_session()
                        async with session.get(url, params=params, headers=headers) as response:
                            if response.status == 429:
                                rate_limited = True
                                retry_after = None
                                header = response.headers.get("Retry-After")
                                if header:
                                    try:
                                        retry_after = float(header)
                                    except ValueError:
                                        retry_after = None
                                self._logger.warning(
                                    "http_get_rate_limited",
                                    http_status_code=429,
                                    http_retry_after_seconds=retry_after,
                                )
                                if retry_after is not None and retry_after > 0:
                                    await asyncio.sleep(retry_after)
                                else:
                                    await asyncio.sleep(self._backoff_delay(attempt))
                                continue

                            rate_limited = False
                            response.raise_for_status()
                            # mempool.space serves some JSON bodies as text/plain
                            return await response.json(content_type=None)
                    except aiohttp.ClientResponseError as e:
                        last_error = e
                        self._logger.debug(
                            "http_get_retry",
                            error_type=type(e).__name__,
                            error_message=str(e),
                            http_status_code=getattr(e, "status", None),
                        )
                        await asyncio.sleep(self._backoff_delay(attempt))
                    except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
                        last_error = e
                        self._logger.debug(
                            "http_get_retry",
                            error_type=type(e).__name__,
                            error_message=str(e),
                        )
                        await asyncio.sleep(self._backoff_delay(attempt))

            if rate_limited:
                self._logger.error("http_get_rate_limit_exhausted", http_attempts=max_retries)
                raise RateLimitError(url=url, retry_after=retry_after)

            status_code = (
                getattr(last_error, "status", None)
                if isinstance(last_error, aiohttp.ClientResponseError)
                else None
            )
            self._logger.error(
                "http_get_failed",
                http_status_code=status_code,
                http_attempts=max_retries,
                error_type=type(last_error).__name__ if last_error else None,
                error_message=str(last_error) if last_error else None,
            )
            raise UpstreamAPIError(
                f"GET failed after {max_retries} retries: {url}",
                url=url,
                status_code=status_code,
                cause=last_error,
            ) from last_error
