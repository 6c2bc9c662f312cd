"""GitHub-specific normalization.

GitHub's rendered pages repeat the same information several times and change
markup often, so the normalizer prefers, in order: the raw file body, the
rendered Markdown container, and only then the generic extraction.
"""

import logging
import re
from urllib.parse import urlparse

from bs4 import BeautifulSoup

from component_ingest.extractor import extract_code_blocks
from component_ingest.extractor.main_content import clean_text
from component_ingest.models import Repository, RepoEntry, ScrapedContent
from component_ingest.sources.base import NormalizationContext, SourceNormalizer
from component_ingest.utils.url_utils import (
    file_extension,
    get_host,
    make_absolute,
    path_segments,
)

logger = logging.getLogger(__name__)

_REF_PATH_RE = re.compile(r"/(blob|tree)/[^/]+/(.+)")

_MARKDOWN_BODY_SELECTORS = [
    ".markdown-body",
    '[data-target="readme-toc.content"]',
    ".Box-body",
]
_MARKDOWN_CHROME_SELECTORS = ["script", "style", ".markdown-toc", ".toc", "nav"]


class GitHubNormalizer(SourceNormalizer):
    """Repository roots, rendered blobs and raw files on GitHub."""

    name = "github"
    description = "github.com pages and raw.githubusercontent.com files"

    def applies_to(self, content: ScrapedContent, ctx: NormalizationContext) -> bool:
        return get_host(ctx.url) in self.config.github_hosts

    async def normalize(self, content: ScrapedContent, ctx: NormalizationContext) -> None:
        content.metadata.source = "github"

        if get_host(ctx.url) == self.config.raw_github_host:
            self._normalize_raw_file(content, ctx)
            return

        segments = path_segments(ctx.url)
        path = urlparse(ctx.url).path
        if len(segments) >= 2:
            content.metadata.repository = Repository(owner=segments[0], name=segments[1])

        if len(segments) >= 5 and segments[2] == "blob":
            self._normalize_blob(content, segments)
        elif content.metadata.repository and "/blob/" not in path and "/tree/" not in path:
            content.metadata.is_repo_root = True
            if ctx.soup is not None:
                content.metadata.repo_structure = self._scan_repo_structure(ctx.soup)

        if ctx.soup is not None:
            self._apply_markdown_body(content, ctx)

        await self._fetch_raw_fallback(content, ctx)

    def _normalize_raw_file(self, content: ScrapedContent, ctx: NormalizationContext) -> None:
        """``/{owner}/{repo}/{branch}/{path...}`` on the raw host."""
        segments = path_segments(ctx.url)
        if len(segments) < 4:
            return

        meta = content.metadata
        meta.repository = Repository(owner=segments[0], name=segments[1])
        meta.branch = segments[2]
        meta.file_path = "/".join(segments[3:])
        meta.file_extension = file_extension(meta.file_path)
        meta.is_raw = True

        if ctx.fetch_result.is_raw:
            content.content = ctx.fetch_result.body
            meta.raw_content = True

    def _normalize_blob(self, content: ScrapedContent, segments: list[str]) -> None:
        """``/{owner}/{repo}/blob/{branch}/{path...}`` rendered file pages."""
        meta = content.metadata
        meta.branch = segments[3]
        meta.file_path = "/".join(segments[4:])
        meta.file_extension = file_extension(meta.file_path)
        meta.raw_url = (
            f"https://{self.config.raw_github_host}/{segments[0]}/{segments[1]}"
            f"/{meta.branch}/{meta.file_path}"
        )
        if "readme" in meta.file_path.lower():
            meta.is_readme = True

    def _scan_repo_structure(self, soup: BeautifulSoup) -> list[RepoEntry]:
        """Build the file/directory listing from the links on a repository page."""
        entries: list[RepoEntry] = []
        seen: set[tuple[str, str]] = set()

        for link in soup.select('a[href*="/blob/"], a[href*="/tree/"]'):
            href = str(link.get("href", ""))
            match = _REF_PATH_RE.search(href)
            if not match:
                continue

            kind = "file" if "/blob/" in href else "directory"
            path = match.group(2)
            if (kind, path) in seen:
                continue
            seen.add((kind, path))

            entries.append(
                RepoEntry(
                    name=link.get_text(strip=True),
                    path=path,
                    type=kind,
                    url=href if href.startswith("http") else make_absolute("https://github.com", href),
                )
            )
            if len(entries) >= self.config.max_repo_entries:
                break

        return entries

    def _apply_markdown_body(self, content: ScrapedContent, ctx: NormalizationContext) -> None:
        """Prefer the rendered Markdown container over the whole-page text."""
        body = None
        for selector in _MARKDOWN_BODY_SELECTORS:
            body = ctx.soup.select_one(selector)
            if body is not None:
                break
        if body is None:
            return

        clone = ctx.extractor.strip_chrome(body, _MARKDOWN_CHROME_SELECTORS)
        text = clean_text(clone)
        if text:
            content.content = text

        blocks = extract_code_blocks(clone, "pre code")
        if blocks:
            content.code_blocks = blocks

    async def _fetch_raw_fallback(
        self, content: ScrapedContent, ctx: NormalizationContext
    ) -> None:
        """One extra fetch of the raw file when the rendered page was too thin."""
        raw_url = content.metadata.raw_url
        if not raw_url or len(content.content) >= self.config.raw_fallback_threshold:
            return

        logger.info("Attempting to fetch raw content from: %s", raw_url)
        result = await ctx.fetcher.fetch_raw(raw_url)
        if result is not None and result.is_raw:
            content.content = result.body
            content.metadata.raw_content_fetched = True
