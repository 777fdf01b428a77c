"""Telegram bot notifier."""

from __future__ import annotations

import httpx
from loguru import logger

from ..core.config import TelegramConfig
from ..core.exceptions import NotificationError
from ..core.types import ChangeSet, FetchFailure, FetchSuccess, SourceDescriptor
from ..sources.credentials import required_secret_names
from .messages import format_time, render_change, render_failure


class TelegramNotifier:
    """Sends notifications through the Telegram Bot API.

    Without a bot token and chat id every send is skipped. Delivery
    errors are logged and never raised.

    Example:
        notifier = TelegramNotifier(config.telegram)
        await notifier.notify_failure(source, failure)
        await notifier.aclose()
    """

    def __init__(
        self,
        config: TelegramConfig,
        *,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize notifier.

        Args:
            config: Bot credentials, chat and display timezone.
            client: HTTP client to use; created lazily when omitted.
        """
        self._config = config
        self._client = client
        self._owns_client = client is None

    @property
    def is_configured(self) -> bool:
        return self._config.enabled

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._config.timeout)
        return self._client

    async def aclose(self) -> None:
        """Close HTTP client if this notifier created it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def notify_change(
        self,
        source: SourceDescriptor,
        changes: ChangeSet,
        current: FetchSuccess,
    ) -> None:
        message = render_change(source, changes, current, format_time(self._config.timezone))
        await self.send(message)

    async def notify_failure(self, source: SourceDescriptor, failure: FetchFailure) -> None:
        message = render_failure(
            source,
            failure,
            required_secret_names(source),
            format_time(self._config.timezone),
        )
        await self.send(message)

    async def send(self, text: str) -> bool:
        """Post one message to the configured chat.

        Returns:
            True if the Bot API accepted the message.
        """
        if not self.is_configured:
            logger.info("Telegram not configured, skipping notification")
            return False

        try:
            await self._post(text)
        except NotificationError as e:
            logger.error(f"Failed to send Telegram notification: {e}")
            return False
        except Exception:
            logger.exception("Unexpected error sending Telegram notification")
            return False
        return True

    async def _post(self, text: str) -> None:
        url = f"{self._config.api_base}/bot{self._config.bot_token}/sendMessage"
        payload = {
            "chat_id": self._config.chat_id,
            "text": text,
            "parse_mode": "HTML",
            "disable_web_page_preview": True,
        }
        try:
            response = await self._get_client().post(url, json=payload)
        except httpx.HTTPError as e:
            raise NotificationError(str(e) or type(e).__name__) from e
        if not response.is_success:
            raise NotificationError(f"Telegram API error: {response.status_code}")
