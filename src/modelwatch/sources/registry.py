"""Registry of the catalog sources to poll.

The registry is an immutable, ordered table of source descriptors built
once at startup and injected wherever sources are needed. Registry order
is the order sources are batched and reported in.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Iterable, Iterator

import yaml
from loguru import logger

from ..core.exceptions import ConfigurationError
from ..core.types import SourceDescriptor


# =============================================================================
# Exceptions
# =============================================================================


class RegistryError(ConfigurationError):
    """Source registry could not be built."""

    pass


class DuplicateSourceError(RegistryError):
    """Two sources share the same id."""

    def __init__(self, source_id: str):
        self.source_id = source_id
        super().__init__(f"Duplicate source id '{source_id}'")


# =============================================================================
# Built-in Sources
# =============================================================================


def _bearer(secret: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {{{{{secret}}}}}"}


DEFAULT_SOURCES: tuple[SourceDescriptor, ...] = (
    SourceDescriptor("openai", "OpenAI", "https://api.openai.com/v1/models", _bearer("OPENAI_API_KEY")),
    SourceDescriptor(
        "anthropic",
        "Anthropic",
        "https://api.anthropic.com/v1/models?limit=100",
        {"x-api-key": "{{ANTHROPIC_API_KEY}}", "anthropic-version": "2023-06-01"},
    ),
    SourceDescriptor("deepseek", "DeepSeek", "https://api.deepseek.com/v1/models", _bearer("DEEPSEEK_API_KEY")),
    SourceDescriptor("nebius", "Nebius", "https://api.studio.nebius.com/v1/models", _bearer("NEBIUS_API_KEY")),
    SourceDescriptor("cerebras", "Cerebras", "https://api.cerebras.ai/v1/models", _bearer("CEREBRAS_API_KEY")),
    SourceDescriptor("novita", "Novita", "https://api.novita.ai/openai/v1/models", _bearer("NOVITA_API_KEY")),
    SourceDescriptor("mistral", "Mistral", "https://api.mistral.ai/v1/models", _bearer("MISTRAL_API_KEY")),
    SourceDescriptor("xai", "xAI", "https://api.x.ai/v1/models", _bearer("XAI_API_KEY")),
    SourceDescriptor("groq", "Groq", "https://api.groq.com/openai/v1/models", _bearer("GROQ_API_KEY")),
    SourceDescriptor(
        "siliconflow", "SiliconFlow", "https://api.siliconflow.cn/v1/models", _bearer("SILICONFLOW_API_KEY")
    ),
    SourceDescriptor(
        "openrouter", "OpenRouter", "https://openrouter.ai/api/v1/models", _bearer("OPENROUTER_API_KEY")
    ),
    SourceDescriptor(
        "vercel", "Vercel AI Gateway", "https://ai-gateway.vercel.sh/v1/models", _bearer("VERCEL_API_KEY")
    ),
    SourceDescriptor("akash", "Akash", "https://chatapi.akash.network/api/v1/models", _bearer("AKASH_API_KEY")),
    SourceDescriptor("v0", "v0", "https://api.v0.dev/v1/models", _bearer("V0_API_KEY")),
    SourceDescriptor(
        "bigmodel", "Zhipu BigModel", "https://open.bigmodel.cn/api/paas/v4/models", _bearer("BIGMODEL_API_KEY")
    ),
    SourceDescriptor(
        "gemini",
        "Gemini",
        "https://generativelanguage.googleapis.com/v1beta/openai/models",
        _bearer("GEMINI_API_KEY"),
    ),
)


# =============================================================================
# Registry Implementation
# =============================================================================


class SourceRegistry:
    """Ordered, read-only collection of source descriptors.

    Example:
        registry = SourceRegistry.from_file(Path("sources.yaml"))
        for source in registry:
            print(source.id, source.endpoint)

        openai = registry.get("openai")
    """

    def __init__(self, sources: Iterable[SourceDescriptor]) -> None:
        """Build a registry.

        Args:
            sources: Descriptors in polling order.

        Raises:
            DuplicateSourceError: If two descriptors share an id.
        """
        self._sources = tuple(sources)
        self._by_id: dict[str, SourceDescriptor] = {}
        for source in self._sources:
            if source.id in self._by_id:
                raise DuplicateSourceError(source.id)
            self._by_id[source.id] = source

    def __iter__(self) -> Iterator[SourceDescriptor]:
        return iter(self._sources)

    def __len__(self) -> int:
        return len(self._sources)

    def __contains__(self, source_id: object) -> bool:
        return source_id in self._by_id

    @property
    def sources(self) -> tuple[SourceDescriptor, ...]:
        return self._sources

    def get(self, source_id: str) -> SourceDescriptor | None:
        """Look up a source by id."""
        return self._by_id.get(source_id)

    def ids(self) -> list[str]:
        """Source ids in registry order."""
        return [source.id for source in self._sources]

    @classmethod
    def default(cls) -> "SourceRegistry":
        """Registry of the built-in LLM providers."""
        return cls(DEFAULT_SOURCES)

    @classmethod
    def from_data(cls, data: Any) -> "SourceRegistry":
        """Build a registry from decoded YAML/JSON.

        Accepts either a list of source mappings or a mapping with a
        ``sources`` list.

        Raises:
            RegistryError: If the data is not a list of valid sources.
        """
        if isinstance(data, dict):
            data = data.get("sources")
        if not isinstance(data, list):
            raise RegistryError("Source registry must be a list of sources")

        sources = []
        for index, entry in enumerate(data):
            if not isinstance(entry, dict):
                raise RegistryError(f"Source #{index} is not a mapping")
            try:
                sources.append(SourceDescriptor.from_dict(entry))
            except KeyError as e:
                raise RegistryError(f"Source #{index} is missing field {e}") from e
        return cls(sources)

    @classmethod
    def from_file(cls, path: Path) -> "SourceRegistry":
        """Load a registry from a YAML or JSON file.

        Raises:
            RegistryError: If the file cannot be read or parsed.
        """
        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise RegistryError(f"Failed to load sources from {path}: {e}") from e

        registry = cls.from_data(data)
        logger.debug(f"Loaded {len(registry)} sources from {path}")
        return registry


def load_registry(path: Path | None = None) -> SourceRegistry:
    """Registry from ``path`` if given, else the built-in one."""
    if path is None:
        return SourceRegistry.default()
    return SourceRegistry.from_file(path)
