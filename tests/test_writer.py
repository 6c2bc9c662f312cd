"""Tests for component kinds and the create-if-absent writer."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from component_ingest.catalog import ArtifactWriter, CreateComponentRequest, get_kind
from component_ingest.errors import (
    AlreadyExists,
    InvalidComponentType,
    InvalidField,
    MissingFields,
    PluginsNotSupported,
)
from component_ingest.models import ComponentType


@pytest.fixture
def writer(tmp_path: Path) -> ArtifactWriter:
    return ArtifactWriter(tmp_path / "components")


async def test_slugified_agent_path(writer: ArtifactWriter) -> None:
    artifact = await writer.create(
        CreateComponentRequest(type="agents", category="Dev Team!", name="My Agent", description="x")
    )

    assert artifact.path == "agents/dev-team/my-agent.md"
    assert (artifact.category, artifact.name) == ("dev-team", "my-agent")
    written = (writer.components_dir / artifact.path).read_text(encoding="utf-8")
    assert written.startswith("---\nname: my-agent\ndescription: x\n")
    assert "# My Agent" in written


async def test_second_create_conflicts(writer: ArtifactWriter) -> None:
    request = CreateComponentRequest(type="commands", category="git", name="commit", description="x")
    await writer.create(request)

    with pytest.raises(AlreadyExists) as excinfo:
        await writer.create(request)
    assert excinfo.value.status_code == 409
    assert excinfo.value.path == "commands/git/commit.md"


async def test_existing_file_is_never_overwritten(writer: ArtifactWriter) -> None:
    target = writer.components_dir / "agents" / "dev" / "keep.md"
    target.parent.mkdir(parents=True)
    target.write_text("original", encoding="utf-8")

    with pytest.raises(AlreadyExists):
        await writer.create(
            CreateComponentRequest(type="agents", category="dev", name="keep", description="x", content="new")
        )
    assert target.read_text(encoding="utf-8") == "original"


async def test_skill_uses_nested_layout(writer: ArtifactWriter) -> None:
    artifact = await writer.create(
        CreateComponentRequest(type="skills", category="docs", name="PDF Tools", description="x")
    )
    assert artifact.path == "skills/docs/pdf-tools/SKILL.md"


async def test_text_content_is_verbatim(writer: ArtifactWriter) -> None:
    body = "---\nname: custom\n---\n\nCustom body\n"
    artifact = await writer.create(
        CreateComponentRequest(type="agents", category="c", name="custom", description="x", content=body)
    )
    assert artifact.content == body


async def test_json_content_is_reformatted(writer: ArtifactWriter) -> None:
    artifact = await writer.create(
        CreateComponentRequest(
            type="settings", category="perf", name="fast", description="x", content='{"env":{"A":"1"}}'
        )
    )
    assert artifact.path == "settings/perf/fast.json"
    assert artifact.content == '{\n  "env": {\n    "A": "1"\n  }\n}'


async def test_invalid_json_falls_back_to_default(writer: ArtifactWriter) -> None:
    artifact = await writer.create(
        CreateComponentRequest(
            type="mcps", category="db", name="my-db", description="Database access", content="{not json"
        )
    )
    document = json.loads(artifact.content)
    server = document["mcpServers"]["my_db"]
    assert server["description"] == "Database access"
    assert server["command"] == "npx"


async def test_hook_default_document(writer: ArtifactWriter) -> None:
    artifact = await writer.create(
        CreateComponentRequest(type="hooks", category="automation", name="fmt", description="Format")
    )
    document = json.loads(artifact.content)
    assert document["description"] == "Format"
    assert document["hooks"]["PostToolUse"][0]["matcher"] == "Edit|MultiEdit|Write"


@pytest.mark.parametrize("missing", ["type", "category", "name", "description"])
async def test_missing_fields(writer: ArtifactWriter, missing: str) -> None:
    values = {"type": "agents", "category": "c", "name": "n", "description": "d"}
    values[missing] = ""
    with pytest.raises(MissingFields) as excinfo:
        await writer.create(CreateComponentRequest(**values))
    assert excinfo.value.to_payload()["required"] == ["type", "category", "name", "description"]


async def test_plugins_are_rejected(writer: ArtifactWriter) -> None:
    with pytest.raises(PluginsNotSupported) as excinfo:
        await writer.create(
            CreateComponentRequest(type="plugins", category="c", name="n", description="d")
        )
    assert excinfo.value.status_code == 400
    assert not writer.components_dir.exists()


async def test_unknown_type(writer: ArtifactWriter) -> None:
    with pytest.raises(InvalidComponentType):
        await writer.create(CreateComponentRequest(type="widgets", category="c", name="n", description="d"))


async def test_name_without_slug_characters(writer: ArtifactWriter) -> None:
    with pytest.raises(InvalidField):
        await writer.create(CreateComponentRequest(type="agents", category="c", name="!!!", description="d"))


@pytest.mark.parametrize(
    ("component_type", "expected"),
    [
        (ComponentType.AGENTS, "agents/cat/n.md"),
        (ComponentType.COMMANDS, "commands/cat/n.md"),
        (ComponentType.MCPS, "mcps/cat/n.json"),
        (ComponentType.SETTINGS, "settings/cat/n.json"),
        (ComponentType.HOOKS, "hooks/cat/n.json"),
        (ComponentType.SKILLS, "skills/cat/n/SKILL.md"),
    ],
)
def test_paths_are_deterministic(component_type: ComponentType, expected: str) -> None:
    assert str(get_kind(component_type.value).relative_path("cat", "n")) == expected
