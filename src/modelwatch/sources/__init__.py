"""Catalog sources for modelwatch.

Quick Start
-----------

    from modelwatch.sources import CredentialResolver, ModelFetcher, SourceRegistry

    registry = SourceRegistry.default()
    resolver = CredentialResolver()

    async with ModelFetcher(resolver) as fetcher:
        for source in registry:
            if resolver.is_configured(source):
                result = await fetcher.fetch(source)

Header Templates
----------------
Source headers reference secrets with ``{{NAME}}`` placeholders:

    SourceDescriptor(
        id="openai",
        name="OpenAI",
        endpoint="https://api.openai.com/v1/models",
        headers={"Authorization": "Bearer {{OPENAI_API_KEY}}"},
    )

A source is polled only when every referenced secret is set.
"""

from .credentials import (
    CredentialProvider,
    CredentialResolver,
    EnvironmentCredentials,
    StaticCredentials,
    extract_placeholders,
    required_secret_names,
)
from .http import ModelFetcher
from .registry import (
    DEFAULT_SOURCES,
    DuplicateSourceError,
    RegistryError,
    SourceRegistry,
    load_registry,
)
from .shapes import (
    DEFAULT_MATCHERS,
    match_bare_list,
    match_data_list,
    match_models_list,
    parse_resources,
)

__all__ = [
    "CredentialProvider",
    "CredentialResolver",
    "EnvironmentCredentials",
    "StaticCredentials",
    "extract_placeholders",
    "required_secret_names",
    "ModelFetcher",
    "DEFAULT_SOURCES",
    "SourceRegistry",
    "RegistryError",
    "DuplicateSourceError",
    "load_registry",
    "DEFAULT_MATCHERS",
    "match_data_list",
    "match_models_list",
    "match_bare_list",
    "parse_resources",
]
