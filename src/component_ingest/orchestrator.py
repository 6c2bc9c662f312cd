"""Scrape pipeline: fetch, extract, normalize and optionally classify one URL."""

import logging
import time
from dataclasses import dataclass

import httpx

from component_ingest.ai.classifier import Classifier, CompletionClientFactory
from component_ingest.ai.client import create_completion_client
from component_ingest.config import AppConfig
from component_ingest.errors import UpstreamHTTPError
from component_ingest.extractor import ContentExtractor
from component_ingest.fetcher import BaseFetcher, FetchResult, HttpFetcher
from component_ingest.models import PageMetadata, ScrapedContent
from component_ingest.sources import NormalizationContext, NormalizerRegistry, SourceNormalizer
from component_ingest.utils.url_utils import get_host, validate_url

logger = logging.getLogger(__name__)


@dataclass
class StageTiming:
    """Wall-clock duration of each pipeline stage for one URL."""

    url: str
    fetch_start: float = 0.0
    fetch_end: float = 0.0
    extract_end: float = 0.0
    normalize_end: float = 0.0
    classify_end: float = 0.0

    @property
    def fetch_duration(self) -> float:
        return self.fetch_end - self.fetch_start if self.fetch_end else 0.0

    @property
    def total_duration(self) -> float:
        end = self.classify_end or self.normalize_end or self.extract_end or self.fetch_end
        return end - self.fetch_start if end else 0.0


class ScrapePipeline:
    """Turns a URL into a normalized ``ScrapedContent``.

    Fetch failures raise ``IngestError`` subclasses; classification never
    does, it degrades to a low-confidence analysis instead.
    """

    def __init__(
        self,
        config: AppConfig,
        transport: httpx.AsyncBaseTransport | None = None,
        client_factory: CompletionClientFactory = create_completion_client,
    ):
        self.config = config
        self.transport = transport
        self.extractor = ContentExtractor(config.extractor)
        self.normalizers: list[SourceNormalizer] = NormalizerRegistry.build(config.sources)
        self.classifier = Classifier(
            config.ai,
            config.catalog.resolve(config.catalog.docs_dir),
            client_factory=client_factory,
        )

    async def scrape(self, url: str, *, classify: bool = False) -> ScrapedContent:
        url = validate_url(url)
        logger.info("Scraping %s", url)
        timing = StageTiming(url=url)

        async with self._create_fetcher() as fetcher:
            timing.fetch_start = time.monotonic()
            result = await fetcher.fetch(url)
            timing.fetch_end = time.monotonic()

            if not result.success:
                logger.info("Fetch of %s returned HTTP %d", url, result.status_code)
                raise UpstreamHTTPError(result.status_code)

            content, ctx = self._extract(url, result, fetcher)
            timing.extract_end = time.monotonic()

            for normalizer in self.normalizers:
                if normalizer.applies_to(content, ctx):
                    logger.debug("Applying %s normalizer to %s", normalizer.name, url)
                    await normalizer.normalize(content, ctx)
            timing.normalize_end = time.monotonic()

        if classify:
            content.ai_analysis = await self.classifier.analyze(content)
            timing.classify_end = time.monotonic()

        logger.info(
            "Scraped %s (%d chars, %d code blocks) in %.2fs (fetch %.2fs)",
            url,
            len(content.content),
            len(content.code_blocks),
            timing.total_duration,
            timing.fetch_duration,
        )
        return content

    def _extract(
        self, url: str, result: FetchResult, fetcher: BaseFetcher
    ) -> tuple[ScrapedContent, NormalizationContext]:
        metadata = PageMetadata(
            url=url,
            domain=get_host(url),
            content_type=result.content_type,
        )

        if result.is_html:
            soup = self.extractor.parse(result.body)
            content = self.extractor.extract(soup, metadata)
        else:
            content = self.extractor.extract_raw(result.body, metadata)
            soup = None

        ctx = NormalizationContext(
            url=url,
            fetch_result=result,
            soup=soup,
            fetcher=fetcher,
            extractor=self.extractor,
        )
        return content, ctx

    def _create_fetcher(self) -> BaseFetcher:
        return HttpFetcher(self.config.fetcher, transport=self.transport)
