"""Markdown file detection."""

from urllib.parse import urlparse

from component_ingest.models import ScrapedContent
from component_ingest.sources.base import NormalizationContext, SourceNormalizer

_RAW_MARKDOWN_SELECTOR = 'pre, .markdown-body pre, code[class*="language-markdown"]'


class MarkdownNormalizer(SourceNormalizer):
    name = "markdown"
    description = "Markdown files on any host"

    def applies_to(self, content: ScrapedContent, ctx: NormalizationContext) -> bool:
        content_type = (content.metadata.content_type or "").lower()
        return (
            "markdown" in content_type
            or urlparse(ctx.url).path.lower().endswith(".md")
            or content.metadata.file_extension == "md"
        )

    async def normalize(self, content: ScrapedContent, ctx: NormalizationContext) -> None:
        content.metadata.is_markdown = True
        if ctx.soup is None:
            return
        block = ctx.soup.select_one(_RAW_MARKDOWN_SELECTOR)
        if block is not None:
            content.metadata.raw_markdown = block.get_text().strip()
