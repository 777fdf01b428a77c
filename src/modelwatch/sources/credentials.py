"""Credential lookup and header template substitution.

Source header templates reference secrets by name with ``{{NAME}}``
placeholders, e.g. ``"Authorization": "Bearer {{OPENAI_API_KEY}}"``. The
resolver substitutes secrets from a credential provider and decides whether
a source has everything it needs to be polled.
"""

from __future__ import annotations

import os
import re
from typing import Mapping, Protocol, runtime_checkable

from loguru import logger

from ..core.types import SourceDescriptor

PLACEHOLDER_PATTERN = re.compile(r"\{\{([^}]+)\}\}")


# =============================================================================
# Credential Provider Protocol
# =============================================================================


@runtime_checkable
class CredentialProvider(Protocol):
    """Protocol for credential providers."""

    def get_credential(self, key: str) -> str | None:
        """Retrieve a credential by name.

        Args:
            key: Secret name as written in the placeholder.

        Returns:
            Credential value if found, None otherwise.
        """
        ...

    @property
    def name(self) -> str:
        """Provider name for logging."""
        ...


# =============================================================================
# Built-in Providers
# =============================================================================


class EnvironmentCredentials:
    """Read credentials from environment variables.

    Example:
        provider = EnvironmentCredentials()
        token = provider.get_credential("OPENAI_API_KEY")
    """

    @property
    def name(self) -> str:
        return "environment"

    def get_credential(self, key: str) -> str | None:
        return os.environ.get(key)


class StaticCredentials:
    """Provide credentials from a fixed mapping.

    Useful for testing or when secrets are passed in programmatically.

    Example:
        provider = StaticCredentials({"OPENAI_API_KEY": "sk-test"})
    """

    def __init__(self, credentials: Mapping[str, str] | None = None):
        self._credentials = dict(credentials or {})

    @property
    def name(self) -> str:
        return "static"

    def get_credential(self, key: str) -> str | None:
        return self._credentials.get(key)

    def set_credential(self, key: str, value: str) -> None:
        """Set a credential (for testing)."""
        self._credentials[key] = value


# =============================================================================
# Credential Resolver
# =============================================================================


def extract_placeholders(template: str) -> list[str]:
    """Return placeholder names in a template, in order of appearance."""
    return PLACEHOLDER_PATTERN.findall(template)


def required_secret_names(source: SourceDescriptor) -> set[str]:
    """Names of every secret referenced by the source's headers."""
    names: set[str] = set()
    for value in source.headers.values():
        names.update(extract_placeholders(value))
    return names


class CredentialResolver:
    """Resolves source header templates against a credential provider.

    Example:
        resolver = CredentialResolver(EnvironmentCredentials())
        if resolver.is_configured(source):
            headers = resolver.resolve_headers(source)
    """

    def __init__(self, provider: CredentialProvider | None = None):
        """Initialize resolver.

        Args:
            provider: Where secrets come from. Defaults to the environment.
        """
        self._provider = provider or EnvironmentCredentials()

    @property
    def provider(self) -> CredentialProvider:
        return self._provider

    def resolve(self, template: str) -> str:
        """Substitute every placeholder in one template string.

        A placeholder whose secret is missing or empty is left verbatim.
        """

        def _substitute(match: re.Match) -> str:
            key = match.group(1)
            value = self._provider.get_credential(key)
            if not value:
                logger.debug(f"Credential {key} not found in {self._provider.name}")
                return match.group(0)
            return value

        return PLACEHOLDER_PATTERN.sub(_substitute, template)

    def resolve_headers(self, source: SourceDescriptor) -> dict[str, str]:
        """Resolve all header templates of a source.

        Args:
            source: Source whose header templates to resolve.

        Returns:
            Header name to resolved value.
        """
        return {key: self.resolve(value) for key, value in source.headers.items()}

    def required_secret_names(self, source: SourceDescriptor) -> set[str]:
        """Names of every secret referenced by the source's headers."""
        return required_secret_names(source)

    def missing_secret_names(self, source: SourceDescriptor) -> set[str]:
        """Required secret names that have no non-empty value."""
        return {
            name
            for name in self.required_secret_names(source)
            if not self._provider.get_credential(name)
        }

    def is_configured(self, source: SourceDescriptor) -> bool:
        """True iff every referenced secret has a non-empty value.

        A source without placeholders is always configured.
        """
        return not self.missing_secret_names(source)
