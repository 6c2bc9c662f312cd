"""Base class for host-specific content normalizers."""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from bs4 import BeautifulSoup

from component_ingest.config import SourceConfig
from component_ingest.extractor import ContentExtractor
from component_ingest.fetcher import BaseFetcher, FetchResult
from component_ingest.models import ScrapedContent


@dataclass
class NormalizationContext:
    """Everything a normalizer may consult besides the content model itself."""

    url: str
    fetch_result: FetchResult
    soup: BeautifulSoup | None  # None for plain-text bodies
    fetcher: BaseFetcher
    extractor: ContentExtractor


class SourceNormalizer(ABC):
    """Augments or overrides the generic extraction for a family of hosts."""

    name: str = ""
    description: str = ""

    def __init__(self, config: SourceConfig):
        self.config = config

    @abstractmethod
    def applies_to(self, content: ScrapedContent, ctx: NormalizationContext) -> bool:
        """Whether this normalizer should run for the page."""

    @abstractmethod
    async def normalize(self, content: ScrapedContent, ctx: NormalizationContext) -> None:
        """Mutate ``content`` in place."""
