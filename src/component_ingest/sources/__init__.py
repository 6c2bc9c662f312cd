"""Host-specific enrichment of extracted content."""

from component_ingest.sources.base import NormalizationContext, SourceNormalizer
from component_ingest.sources.github import GitHubNormalizer
from component_ingest.sources.registry import NormalizerRegistry

__all__ = [
    "GitHubNormalizer",
    "NormalizationContext",
    "NormalizerRegistry",
    "SourceNormalizer",
]
