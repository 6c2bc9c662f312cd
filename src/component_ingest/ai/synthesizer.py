"""Component generation from a description and optional scraped content."""

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from pydantic import BaseModel, field_validator

from component_ingest.ai.classifier import CompletionClientFactory
from component_ingest.ai.client import create_completion_client
from component_ingest.ai.prompts import build_generation_prompt
from component_ingest.ai.references import load_best_practices, load_examples
from component_ingest.catalog.kinds import KINDS
from component_ingest.config import AIConfig
from component_ingest.errors import GenerationUnavailable, InvalidComponentType, MissingFields
from component_ingest.models import ComponentType
from component_ingest.utils.text_utils import strip_code_fence

logger = logging.getLogger(__name__)

_REQUIRED = ["componentType", "description"]


class GenerateComponentRequest(BaseModel):
    """Body of a generation request. Fields are checked by the synthesizer."""

    componentType: str | None = None
    description: str | None = None
    category: str | None = None
    name: str | None = None
    scrapedContent: str | None = None
    documentationUrl: str | None = None

    @field_validator("scrapedContent", mode="before")
    @classmethod
    def _stringify_scraped(cls, value: Any) -> Any:
        # Callers may forward a whole scrape result instead of its text.
        if isinstance(value, dict):
            text = value.get("content")
            return text if isinstance(text, str) else json.dumps(value, ensure_ascii=False)
        if isinstance(value, list):
            return json.dumps(value, ensure_ascii=False)
        return value


class Synthesizer:
    """Produce the body of one component with a single model call."""

    def __init__(
        self,
        config: AIConfig,
        components_dir: Path,
        best_practices_file: Path,
        client_factory: CompletionClientFactory = create_completion_client,
    ):
        self.config = config
        self.components_dir = Path(components_dir)
        self.best_practices_file = Path(best_practices_file)
        self.client_factory = client_factory

    async def generate(self, request: GenerateComponentRequest) -> dict[str, Any]:
        """Generate a component and return it with call metadata.

        Raises:
            MissingFields: componentType or description is blank.
            InvalidComponentType: the type is not a file-backed kind.
            GenerationUnavailable: no API key is configured.
            GenerationFailed: the provider call failed.
        """
        if not (request.componentType or "").strip() or not (request.description or "").strip():
            raise MissingFields(_REQUIRED)

        try:
            component_type = ComponentType(request.componentType)
        except ValueError as e:
            raise InvalidComponentType(str(request.componentType), ComponentType.values()) from e
        if not self.config.api_key:
            raise GenerationUnavailable()

        kind = KINDS[component_type]
        category = request.category or "general"
        name = request.name or "auto-generated"

        prompt = build_generation_prompt(
            kind,
            name=name,
            category=category,
            description=request.description or "",
            examples=load_examples(self.components_dir, component_type),
            best_practices=load_best_practices(self.best_practices_file),
            scraped_content=request.scrapedContent,
            documentation_url=request.documentationUrl,
        )

        client = self.client_factory(self.config)
        logger.info("Generating %s component %s/%s", component_type.value, category, name)
        completion = await client.complete(
            prompt, max_tokens=self.config.synthesizer_max_tokens
        )

        return {
            "componentType": component_type.value,
            "category": category,
            "name": name,
            "content": strip_code_fence(completion.text),
            "metadata": {
                "generatedAt": datetime.now(timezone.utc).isoformat(),
                "model": completion.model,
                "tokensUsed": completion.output_tokens,
            },
        }
