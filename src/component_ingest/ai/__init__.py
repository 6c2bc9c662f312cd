"""Model-backed classification and generation."""

from component_ingest.ai.classifier import Classifier, CompletionClientFactory, fallback_analysis
from component_ingest.ai.client import (
    AnthropicCompletionClient,
    Completion,
    CompletionClient,
    create_completion_client,
)
from component_ingest.ai.synthesizer import GenerateComponentRequest, Synthesizer

__all__ = [
    "AnthropicCompletionClient",
    "Classifier",
    "Completion",
    "CompletionClient",
    "CompletionClientFactory",
    "GenerateComponentRequest",
    "Synthesizer",
    "create_completion_client",
    "fallback_analysis",
]
