"""Pytest configuration and fixtures for service layer tests."""

import pytest

from modelwatch.core.config import Config
from modelwatch.services import ServiceContainer
from modelwatch.sources import SourceRegistry, StaticCredentials
from tests.fakes import RecordingNotifier, ScriptedFetcher, make_source


@pytest.fixture
def registry() -> SourceRegistry:
    """Two sources, only the first has its secret configured."""
    return SourceRegistry(
        [
            make_source("openai", "OPENAI_API_KEY", name="OpenAI"),
            make_source("xai", "XAI_API_KEY", name="xAI"),
        ]
    )


@pytest.fixture
def fetcher() -> ScriptedFetcher:
    return ScriptedFetcher()


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def container(config: Config, registry, fetcher, notifier) -> ServiceContainer:
    """Provide a ServiceContainer wired to fakes (not connected)."""
    return ServiceContainer(
        config,
        registry=registry,
        credentials=StaticCredentials({"OPENAI_API_KEY": "sk"}),
        notifier=notifier,
        fetcher=fetcher,
    )


@pytest.fixture
def connected_container(container: ServiceContainer) -> ServiceContainer:
    """Provide a connected ServiceContainer."""
    container.connect()
    yield container
    # Close synchronously (no async cleanup in unit tests)
    if container._connected:
        container.db.close()
