"""Text completion port and its Anthropic implementation."""

import logging
from typing import Protocol

import anthropic
from anthropic import AsyncAnthropic
from pydantic import BaseModel

from component_ingest.config import AIConfig
from component_ingest.errors import AuthenticationFailed, GenerationFailed, GenerationUnavailable

logger = logging.getLogger(__name__)


class Completion(BaseModel):
    """Text returned by a single model call."""

    text: str
    model: str
    output_tokens: int = 0


class CompletionClient(Protocol):
    """Anything that can turn one prompt into one completion."""

    async def complete(self, prompt: str, *, max_tokens: int) -> Completion: ...


class AnthropicCompletionClient:
    """Single-attempt completions against the Anthropic Messages API."""

    def __init__(self, config: AIConfig, client: AsyncAnthropic | None = None):
        if not config.api_key:
            raise GenerationUnavailable()
        self.config = config
        # Model calls are attempted exactly once.
        self._client = client or AsyncAnthropic(
            api_key=config.api_key,
            max_retries=0,
            timeout=config.timeout_seconds,
        )

    async def complete(self, prompt: str, *, max_tokens: int) -> Completion:
        try:
            message = await self._client.messages.create(
                model=self.config.model,
                max_tokens=max_tokens,
                messages=[{"role": "user", "content": prompt}],
            )
        except (anthropic.AuthenticationError, anthropic.PermissionDeniedError) as e:
            raise AuthenticationFailed() from e
        except anthropic.APIError as e:
            raise GenerationFailed(e.message) from e

        text = "".join(block.text for block in message.content if block.type == "text")
        usage = message.usage
        return Completion(
            text=text,
            model=self.config.model,
            output_tokens=usage.output_tokens if usage else 0,
        )


def create_completion_client(config: AIConfig) -> CompletionClient:
    """Build the default completion client, failing if no credential is set."""
    return AnthropicCompletionClient(config)
