"""HTTP fetcher for model catalog endpoints.

Issues one bounded-time GET per source, normalizes the response into
resources and retries failed attempts with a fixed delay. Failures never
escape ``fetch``; they come back as ``FetchFailure`` values.
"""

from __future__ import annotations

import asyncio
import json
from typing import Awaitable, Callable

import httpx
from loguru import logger

from ..core.config import MonitorConfig
from ..core.exceptions import ParseError, ProtocolError, SourceFetchError, TransportError
from ..core.types import (
    FetchFailure,
    FetchResult,
    FetchSuccess,
    Resource,
    SourceDescriptor,
    utc_now_iso,
)
from .credentials import CredentialResolver
from .shapes import DEFAULT_MATCHERS, ShapeMatcher, parse_resources

Sleep = Callable[[float], Awaitable[None]]

ERROR_BODY_LIMIT = 200


class ModelFetcher:
    """Fetches and normalizes source catalogs.

    Example:
        async with ModelFetcher(resolver, config.monitor) as fetcher:
            result = await fetcher.fetch(source)
            if result.success:
                print(f"{source.name}: {result.count} models")
    """

    def __init__(
        self,
        resolver: CredentialResolver,
        config: MonitorConfig | None = None,
        *,
        client: httpx.AsyncClient | None = None,
        sleep: Sleep = asyncio.sleep,
        matchers: tuple[ShapeMatcher, ...] = DEFAULT_MATCHERS,
    ) -> None:
        """Initialize fetcher.

        Args:
            resolver: Resolves secret placeholders in source headers.
            config: Timeout and retry settings.
            client: HTTP client to use; created lazily when omitted.
            sleep: Awaitable used for the retry delay.
            matchers: Response layout matchers, in priority order.
        """
        self._resolver = resolver
        self._config = config or MonitorConfig()
        self._client = client
        self._owns_client = client is None
        self._sleep = sleep
        self._matchers = matchers

    async def __aenter__(self) -> "ModelFetcher":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self._config.request_timeout,
                follow_redirects=True,
            )
        return self._client

    async def aclose(self) -> None:
        """Close HTTP client if this fetcher created it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    def build_headers(self, source: SourceDescriptor) -> dict[str, str]:
        """Base headers overlaid with the source's resolved headers."""
        headers = {
            "User-Agent": self._config.user_agent,
            "Accept": "application/json",
            "Content-Type": "application/json",
        }
        headers.update(self._resolver.resolve_headers(source))
        return headers

    async def fetch(
        self,
        source: SourceDescriptor,
        max_retries: int | None = None,
    ) -> FetchResult:
        """Fetch a source's catalog, retrying on failure.

        Args:
            source: Source to fetch.
            max_retries: Extra attempts after the first failure. Defaults
                to the configured budget.

        Returns:
            FetchSuccess with normalized resources, or FetchFailure with
            the last error message.
        """
        retries = self._config.max_retries if max_retries is None else max_retries

        while True:
            try:
                resources = await self._fetch_once(source)
                return FetchSuccess(
                    source_id=source.id,
                    resources=tuple(resources),
                    timestamp=utc_now_iso(),
                )
            except SourceFetchError as e:
                if retries > 0:
                    retries -= 1
                    logger.info(f"Retrying {source.name} ({retries} retries left): {e}")
                    await self._sleep(self._config.retry_delay)
                    continue
                logger.warning(f"Failed to fetch {source.name}: {e}")
                return FetchFailure(
                    source_id=source.id,
                    error=str(e),
                    timestamp=utc_now_iso(),
                )

    async def _fetch_once(self, source: SourceDescriptor) -> list[Resource]:
        """One GET attempt.

        Raises:
            TransportError: On timeout, connection failure, or a request
                that cannot be built (bad URL, non-ASCII header value).
            ProtocolError: On a non-2xx response.
            ParseError: If the body is not JSON.
        """
        client = self._get_client()
        try:
            response = await client.get(
                source.endpoint,
                headers=self.build_headers(source),
                timeout=self._config.request_timeout,
            )
        except httpx.TimeoutException as e:
            raise TransportError(source.id, f"Request timed out: {e}") from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise TransportError(source.id, str(e) or type(e).__name__) from e
        except UnicodeEncodeError as e:
            raise TransportError(source.id, f"Invalid request header: {e}") from e

        if not response.is_success:
            raise ProtocolError(
                source.id,
                response.status_code,
                self._format_error(response),
            )

        try:
            body = response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise ParseError(source.id, f"Invalid JSON response: {e}") from e

        resources = parse_resources(body, source, self._matchers)
        logger.debug(f"Fetched {len(resources)} models from {source.name}")
        return resources

    def _format_error(self, response: httpx.Response) -> str:
        """Describe a non-2xx response, with a snippet of the body if readable."""
        message = f"HTTP {response.status_code}: {response.reason_phrase}"
        try:
            body = response.text
        except (httpx.ResponseNotRead, UnicodeDecodeError, LookupError):
            body = ""
        if body:
            message += f" - {body[:ERROR_BODY_LIMIT]}"
        return message
