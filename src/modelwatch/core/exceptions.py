"""Custom exceptions for modelwatch."""


class ModelWatchError(Exception):
    """Base exception for all modelwatch errors."""

    pass


class ConfigurationError(ModelWatchError):
    """Configuration is invalid or could not be loaded."""

    pass


class SourceFetchError(ModelWatchError):
    """Fetching a source's catalog failed.

    Attributes:
        source_id: Identifier of the source that failed.
    """

    def __init__(self, source_id: str, message: str):
        """Initialize exception with source and message.

        Args:
            source_id: Identifier of the source that failed.
            message: Human-readable failure description.
        """
        self.source_id = source_id
        super().__init__(message)


class TransportError(SourceFetchError):
    """Request timed out or the connection failed."""

    pass


class ProtocolError(SourceFetchError):
    """Source answered with a non-2xx HTTP status."""

    def __init__(self, source_id: str, status_code: int, message: str):
        self.status_code = status_code
        super().__init__(source_id, message)


class ParseError(SourceFetchError):
    """Response body is not valid JSON."""

    pass


class DatabaseError(ModelWatchError):
    """Database operation failed."""

    pass


class StoreError(DatabaseError):
    """Snapshot could not be read or written."""

    pass


class NotificationError(ModelWatchError):
    """Notification delivery failed."""

    pass
