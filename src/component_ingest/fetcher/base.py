"""Base class for page fetchers."""

import re
from abc import ABC, abstractmethod

from pydantic import BaseModel

from component_ingest.config import FetcherConfig

_HTML_MARKER = "<!doctype"
_HTML_ROOT_RE = re.compile(r"<(?:!doctype|html|head|body)[\s>]", re.IGNORECASE)


class FetchResult(BaseModel):
    """Result of fetching a page."""

    url: str
    final_url: str  # After redirects
    body: str
    status_code: int
    content_type: str | None = None

    @property
    def success(self) -> bool:
        return 200 <= self.status_code < 400

    @property
    def is_raw(self) -> bool:
        """Whether the body is plain text rather than an HTML document."""
        return _HTML_MARKER not in self.body.lower()

    @property
    def is_html(self) -> bool:
        """Whether the body should be parsed as a DOM.

        Unlike ``is_raw`` this also accepts markup without a doctype, as long as
        the server labels it HTML or it opens with a document root element.
        """
        if "html" in (self.content_type or "").lower():
            return True
        return _HTML_ROOT_RE.search(self.body[:2048]) is not None


class BaseFetcher(ABC):
    """Abstract base class for page fetchers."""

    def __init__(self, config: FetcherConfig):
        self.config = config

    @abstractmethod
    async def fetch(self, url: str) -> FetchResult:
        """Fetch a page.

        Responses with a status below 500 are returned for the caller to
        interpret; transport failures raise an ``IngestError`` subclass.
        """

    @abstractmethod
    async def fetch_raw(self, url: str) -> FetchResult | None:
        """Fetch a raw file once, returning None on any failure."""

    @abstractmethod
    async def __aenter__(self):
        """Async context manager entry."""

    @abstractmethod
    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
