"""Best-effort classification of scraped content into a component suggestion."""

import logging
from collections.abc import Callable
from pathlib import Path

from component_ingest.ai.client import CompletionClient, create_completion_client
from component_ingest.ai.prompts import build_classification_prompt
from component_ingest.ai.references import load_reference_docs
from component_ingest.config import AIConfig
from component_ingest.models import (
    AIAnalysis,
    AnalysisMetadata,
    ExtractedMetadata,
    ScrapedContent,
    Validation,
)
from component_ingest.utils.text_utils import unwrap_json

logger = logging.getLogger(__name__)

CompletionClientFactory = Callable[[AIConfig], CompletionClient]


def fallback_analysis(content: ScrapedContent, reason: str) -> AIAnalysis:
    """Low-confidence analysis returned whenever the model call cannot be used."""
    return AIAnalysis(
        suggested_component_type="agents",
        confidence=0.0,
        suggested_category="general",
        suggested_name="component",
        extracted_metadata=ExtractedMetadata(
            description=content.description or "Component extracted from scraped content",
            purpose="Purpose not determined",
        ),
        validation=Validation(
            data_quality="low",
            missing_fields=["AI analysis failed"],
            recommendations=["Review content manually"],
            warnings=[f"AI analysis failed: {reason}"],
        ),
        reasoning="AI analysis encountered an error, using fallback values",
        degraded=True,
        error=reason,
    )


class Classifier:
    """Ask the model once for a JSON analysis; never raise."""

    def __init__(
        self,
        config: AIConfig,
        docs_dir: Path,
        client_factory: CompletionClientFactory = create_completion_client,
    ):
        self.config = config
        self.docs_dir = Path(docs_dir)
        self.client_factory = client_factory

    async def analyze(self, content: ScrapedContent) -> AIAnalysis:
        try:
            client = self.client_factory(self.config)
            docs = load_reference_docs(self.docs_dir)
            prompt = build_classification_prompt(content, docs)
            completion = await client.complete(
                prompt, max_tokens=self.config.classifier_max_tokens
            )
            analysis = AIAnalysis.model_validate_json(unwrap_json(completion.text))
        except Exception as e:
            logger.warning("AI analysis failed for %s: %s", content.metadata.url, e, exc_info=True)
            return fallback_analysis(content, str(e) or type(e).__name__)

        analysis.metadata = AnalysisMetadata(
            model=completion.model, tokens_used=completion.output_tokens
        )
        logger.info(
            "Classified %s as %s (confidence %.2f)",
            content.metadata.url,
            analysis.suggested_component_type,
            analysis.confidence,
        )
        return analysis
