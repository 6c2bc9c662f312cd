"""Section outline capture for documentation sites."""

from component_ingest.models import ScrapedContent, Section
from component_ingest.sources.base import NormalizationContext, SourceNormalizer
from component_ingest.utils.url_utils import host_matches


class DocsSiteNormalizer(SourceNormalizer):
    name = "claude-docs"
    description = "Documentation sites whose h2/h3 outline is kept as sections"

    def applies_to(self, content: ScrapedContent, ctx: NormalizationContext) -> bool:
        return ctx.soup is not None and host_matches(ctx.url, self.config.docs_hosts)

    async def normalize(self, content: ScrapedContent, ctx: NormalizationContext) -> None:
        content.metadata.source = self.name
        root = ctx.extractor.find_content_root(ctx.soup)
        if root is None:
            return
        content.metadata.sections = [
            Section(level=h.name, title=h.get_text(strip=True), id=str(h.get("id") or ""))
            for h in root.select("h2, h3")
        ]
