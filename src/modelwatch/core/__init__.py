"""Core types, configuration and errors for modelwatch."""

from .config import Config, MonitorConfig, ServerConfig, TelegramConfig
from .exceptions import (
    ConfigurationError,
    DatabaseError,
    ModelWatchError,
    NotificationError,
    ParseError,
    ProtocolError,
    SourceFetchError,
    StoreError,
    TransportError,
)
from .types import (
    ChangeSet,
    CyclePhase,
    CycleResult,
    FetchFailure,
    FetchResult,
    FetchSuccess,
    Resource,
    Snapshot,
    SourceDescriptor,
    SourceOutcome,
    utc_now_iso,
)

__all__ = [
    "Config",
    "MonitorConfig",
    "TelegramConfig",
    "ServerConfig",
    "ModelWatchError",
    "ConfigurationError",
    "SourceFetchError",
    "TransportError",
    "ProtocolError",
    "ParseError",
    "DatabaseError",
    "StoreError",
    "NotificationError",
    "SourceDescriptor",
    "Resource",
    "FetchSuccess",
    "FetchFailure",
    "FetchResult",
    "Snapshot",
    "ChangeSet",
    "SourceOutcome",
    "CyclePhase",
    "CycleResult",
    "utc_now_iso",
]
