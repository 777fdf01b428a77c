"""Configuration management for modelwatch."""

import os
from dataclasses import dataclass, field
from pathlib import Path

from .exceptions import ConfigurationError


@dataclass
class MonitorConfig:
    """Polling cycle configuration."""

    # Hard wall-clock limit per request, in seconds
    request_timeout: float = 10.0
    # Sources fetched concurrently per batch
    batch_size: int = 5
    # Pause between batches, in seconds
    batch_delay: float = 1.0
    # Extra attempts after a failed fetch
    max_retries: int = 0
    # Pause before each retry, in seconds
    retry_delay: float = 2.0
    user_agent: str = "Mozilla/5.0 (compatible; LLMModelMonitor/1.0)"


@dataclass
class TelegramConfig:
    """Telegram bot notification configuration."""

    bot_token: str = ""
    chat_id: str = ""
    api_base: str = "https://api.telegram.org"
    timezone: str = "UTC"
    timeout: float = 10.0

    @property
    def enabled(self) -> bool:
        return bool(self.bot_token and self.chat_id)


@dataclass
class ServerConfig:
    """HTTP front door and scheduler configuration."""

    host: str = "127.0.0.1"
    port: int = 8000
    # Seconds between scheduled cycles; 0 disables the scheduler
    interval_seconds: float = 3600.0


def _default_db_path() -> Path:
    """Get default snapshot database path."""
    cache_dir = Path(os.environ.get("XDG_CACHE_HOME", Path.home() / ".cache"))
    return cache_dir / "modelwatch" / "snapshots.db"


def _env_bool(value: str) -> bool:
    return value.strip().lower() in {"1", "true", "yes", "on"}


@dataclass
class Config:
    """Main application configuration."""

    db_path: Path = field(default_factory=_default_db_path)
    sources_file: Path | None = None
    log_level: str = "INFO"
    log_json: bool = False
    monitor: MonitorConfig = field(default_factory=MonitorConfig)
    telegram: TelegramConfig = field(default_factory=TelegramConfig)
    server: ServerConfig = field(default_factory=ServerConfig)

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables.

        Raises:
            ConfigurationError: If MODELWATCH_BATCH_SIZE is not positive.
            ValueError: If a numeric variable does not parse.
        """
        config = cls()

        if path := os.environ.get("MODELWATCH_DB_PATH"):
            config.db_path = Path(path)
        if path := os.environ.get("MODELWATCH_SOURCES_FILE"):
            config.sources_file = Path(path)

        if level := os.environ.get("MODELWATCH_LOG_LEVEL"):
            config.log_level = level.upper()
        if value := os.environ.get("MODELWATCH_LOG_JSON"):
            config.log_json = _env_bool(value)

        # Polling cycle
        if value := os.environ.get("MODELWATCH_REQUEST_TIMEOUT"):
            config.monitor.request_timeout = float(value)
        if value := os.environ.get("MODELWATCH_BATCH_SIZE"):
            config.monitor.batch_size = int(value)
            if config.monitor.batch_size < 1:
                raise ConfigurationError(f"MODELWATCH_BATCH_SIZE must be positive, got {value}")
        if value := os.environ.get("MODELWATCH_BATCH_DELAY"):
            config.monitor.batch_delay = float(value)
        if value := os.environ.get("MODELWATCH_MAX_RETRIES"):
            config.monitor.max_retries = int(value)
        if value := os.environ.get("MODELWATCH_RETRY_DELAY"):
            config.monitor.retry_delay = float(value)

        # Telegram notifications
        if token := os.environ.get("TELEGRAM_BOT_TOKEN"):
            config.telegram.bot_token = token
        if chat_id := os.environ.get("TELEGRAM_CHAT_ID"):
            config.telegram.chat_id = chat_id
        if tz := os.environ.get("MODELWATCH_TIMEZONE"):
            config.telegram.timezone = tz

        # Front door
        if host := os.environ.get("MODELWATCH_HOST"):
            config.server.host = host
        if port := os.environ.get("MODELWATCH_PORT"):
            config.server.port = int(port)
        if value := os.environ.get("MODELWATCH_INTERVAL_SECONDS"):
            config.server.interval_seconds = float(value)

        return config
