"""Main content extraction from HTML pages."""

import copy
import logging
import re

from bs4 import BeautifulSoup, Tag

from component_ingest.config import ExtractorConfig
from component_ingest.extractor.code_blocks import extract_code_blocks, extract_fenced_blocks
from component_ingest.models import Heading, Link, PageMetadata, ScrapedContent

logger = logging.getLogger(__name__)

_BLANK_LINES_RE = re.compile(r"\n\s*\n+")
_MARKDOWN_TITLE_RE = re.compile(r"^#{1,6}[ \t]+(.+?)[ \t#]*$", re.MULTILINE)


def clean_text(elem: Tag) -> str:
    """Text content of ``elem`` with runs of blank lines collapsed."""
    return _BLANK_LINES_RE.sub("\n\n", elem.get_text()).strip()


def meta_content(soup: BeautifulSoup, selector: str) -> str | None:
    tag = soup.select_one(selector)
    if tag is None:
        return None
    value = tag.get("content")
    return str(value) if value is not None else None


class ContentExtractor:
    """Extract a content model from HTML pages or raw text files."""

    def __init__(self, config: ExtractorConfig):
        self.config = config

    def parse(self, html: str) -> BeautifulSoup:
        return BeautifulSoup(html, "lxml")

    def extract(self, soup: BeautifulSoup, metadata: PageMetadata) -> ScrapedContent:
        """Extract title, description, body text, code blocks and outline."""
        content = ScrapedContent(
            title=self._extract_title(soup),
            description=meta_content(soup, 'meta[name="description"]') or "",
            metadata=metadata,
        )

        root = self.find_content_root(soup)
        if root is not None:
            clone = self.strip_chrome(root)
            content.content = clean_text(clone)
            content.code_blocks = extract_code_blocks(clone)

            headings = clone.select("h1, h2, h3, h4, h5, h6")
            if headings:
                metadata.headings = [
                    Heading(level=int(h.name[1]), text=h.get_text(strip=True))
                    for h in headings
                ]

            links = clone.select("a[href]")
            if links:
                metadata.links = [
                    Link(text=a.get_text(strip=True), href=str(a.get("href", "")))
                    for a in links[: self.config.max_links]
                ]
        else:
            logger.debug("No content root found for %s", metadata.url)

        metadata.og_title = meta_content(soup, 'meta[property="og:title"]')
        metadata.og_description = meta_content(soup, 'meta[property="og:description"]')
        return content

    def extract_raw(self, text: str, metadata: PageMetadata) -> ScrapedContent:
        """Build a content model from a plain-text body, kept verbatim."""
        title_match = _MARKDOWN_TITLE_RE.search(text)
        return ScrapedContent(
            title=title_match.group(1).strip() if title_match else "",
            content=text,
            code_blocks=extract_fenced_blocks(text),
            metadata=metadata,
        )

    def find_content_root(self, soup: BeautifulSoup) -> Tag | None:
        """Return the first element matching the prioritized content selectors."""
        for selector in self.config.content_selectors:
            main = soup.select_one(selector)
            if main is not None:
                return main
        return None

    def strip_chrome(self, root: Tag, selectors: list[str] | None = None) -> Tag:
        """Copy ``root`` and drop navigation, scripts and other page chrome."""
        clone = copy.copy(root)
        for selector in selectors or self.config.remove_selectors:
            for elem in clone.select(selector):
                if not elem.decomposed:
                    elem.decompose()
        return clone

    @staticmethod
    def _extract_title(soup: BeautifulSoup) -> str:
        for name in ("title", "h1", "h2"):
            tag = soup.find(name)
            if tag is not None:
                return tag.get_text(strip=True)
        return ""
