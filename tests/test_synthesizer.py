"""Tests for component generation."""

from __future__ import annotations

from pathlib import Path

import pytest

from component_ingest.ai import GenerateComponentRequest, Synthesizer
from component_ingest.config import AIConfig
from component_ingest.errors import (
    GenerationUnavailable,
    InvalidComponentType,
    MissingFields,
)
from conftest import FakeCompletionClient


def _synthesizer(
    catalog_root: Path, client: FakeCompletionClient, api_key: str | None = "k"
) -> Synthesizer:
    return Synthesizer(
        AIConfig(api_key=api_key),
        catalog_root / "cli-tool" / "components",
        catalog_root / "docs" / "CLAUDE.md",
        client_factory=lambda _config: client,
    )


async def test_generates_and_strips_fence(catalog_root: Path) -> None:
    client = FakeCompletionClient(["```markdown\n---\nname: reviewer\n---\nReview code.\n```"])

    data = await _synthesizer(catalog_root, client).generate(
        GenerateComponentRequest(componentType="agents", description="Reviews pull requests")
    )

    assert data["content"] == "---\nname: reviewer\n---\nReview code."
    assert data["category"] == "general"
    assert data["name"] == "auto-generated"
    assert data["metadata"]["model"] == "fake-model"
    assert data["metadata"]["tokensUsed"] == 42
    assert client.calls[0]["max_tokens"] == 4000


async def test_prompt_uses_examples_and_best_practices(catalog_root: Path) -> None:
    client = FakeCompletionClient(["body"])

    await _synthesizer(catalog_root, client).generate(
        GenerateComponentRequest(
            componentType="skills",
            description="Fill PDF forms",
            category="productivity",
            name="pdf-forms",
            scrapedContent={"title": "PDF", "content": "z" * 6000},
            documentationUrl="https://example.com/pdf",
        )
    )
    prompt = str(client.calls[0]["prompt"])

    assert "### productivity/pdf-tools" in prompt
    assert "Keep components focused." in prompt
    assert "## Scraped Content from https://example.com/pdf:" in prompt
    assert "z" * 5000 in prompt and "z" * 5001 not in prompt
    assert "SKILL.md" in prompt


async def test_missing_credential(catalog_root: Path) -> None:
    client = FakeCompletionClient(["never used"])

    with pytest.raises(GenerationUnavailable) as excinfo:
        await _synthesizer(catalog_root, client, api_key=None).generate(
            GenerateComponentRequest(componentType="mcps", description="x")
        )

    assert excinfo.value.status_code == 500
    assert "ANTHROPIC_API_KEY" in excinfo.value.to_payload()["error"]
    assert client.calls == []


@pytest.mark.parametrize(
    "request_data",
    [{"description": "x"}, {"componentType": "agents"}, {"componentType": " ", "description": "x"}],
)
async def test_missing_fields(catalog_root: Path, request_data: dict[str, str]) -> None:
    with pytest.raises(MissingFields):
        await _synthesizer(catalog_root, FakeCompletionClient()).generate(
            GenerateComponentRequest(**request_data)
        )


@pytest.mark.parametrize("component_type", ["widgets", "plugins", "Agents"])
async def test_invalid_type(catalog_root: Path, component_type: str) -> None:
    with pytest.raises(InvalidComponentType) as excinfo:
        await _synthesizer(catalog_root, FakeCompletionClient()).generate(
            GenerateComponentRequest(componentType=component_type, description="x")
        )
    assert "agents" in excinfo.value.to_payload()["validTypes"]
