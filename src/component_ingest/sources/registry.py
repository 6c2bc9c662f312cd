"""Registry of host-specific normalizers."""

from component_ingest.config import SourceConfig
from component_ingest.sources.base import SourceNormalizer
from component_ingest.sources.docs_site import DocsSiteNormalizer
from component_ingest.sources.github import GitHubNormalizer
from component_ingest.sources.markdown import MarkdownNormalizer


class NormalizerRegistry:
    """Registry of source normalizers, applied in registration order."""

    _normalizers: dict[str, type[SourceNormalizer]] = {
        "github": GitHubNormalizer,
        "claude-docs": DocsSiteNormalizer,
        # Runs last: it reads the file extension set by the host normalizers.
        "markdown": MarkdownNormalizer,
    }

    @classmethod
    def register(cls, normalizer: type[SourceNormalizer]) -> None:
        """Register a new normalizer."""
        cls._normalizers[normalizer.name] = normalizer

    @classmethod
    def get(cls, name: str) -> type[SourceNormalizer] | None:
        """Get a normalizer class by name."""
        return cls._normalizers.get(name)

    @classmethod
    def list_normalizers(cls) -> list[type[SourceNormalizer]]:
        """List all registered normalizers."""
        return list(cls._normalizers.values())

    @classmethod
    def build(cls, config: SourceConfig) -> list[SourceNormalizer]:
        """Instantiate every registered normalizer with ``config``."""
        return [normalizer(config) for normalizer in cls._normalizers.values()]
