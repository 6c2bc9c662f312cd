"""Per-kind layout, body format and default documents for catalog components."""

import json
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import PurePosixPath
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from component_ingest.errors import InvalidComponentType, PluginsNotSupported
from component_ingest.models import PLUGINS, ComponentType
from component_ingest.utils.text_utils import title_from_slug

# JSON document schemas


class McpServer(BaseModel):
    model_config = ConfigDict(extra="allow")

    description: str
    command: str = "npx"
    args: list[str] = Field(default_factory=lambda: ["-y", "@your-org/mcp-server"])
    env: dict[str, str] = Field(
        default_factory=lambda: {
            "API_KEY": "<YOUR_API_KEY>",
            "BASE_URL": "https://api.service.com",
        }
    )


class McpConfig(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    mcp_servers: dict[str, McpServer] = Field(alias="mcpServers")


class SettingConfig(BaseModel):
    model_config = ConfigDict(extra="allow")

    description: str
    env: dict[str, str] = Field(default_factory=lambda: {"SETTING_KEY": "default_value"})


class HookCommand(BaseModel):
    type: str = "command"
    command: str = "echo 'Hook executed'"


class HookMatcher(BaseModel):
    matcher: str = "Edit|MultiEdit|Write"
    hooks: list[HookCommand] = Field(default_factory=lambda: [HookCommand()])


class HookConfig(BaseModel):
    model_config = ConfigDict(extra="allow")

    description: str
    hooks: dict[str, list[HookMatcher]] = Field(
        default_factory=lambda: {"PostToolUse": [HookMatcher()]}
    )


def dump_json(document: Any) -> str:
    """Serialize a JSON document with the catalog's stable indentation."""
    return json.dumps(document, indent=2, ensure_ascii=False)


# Markdown templates


def _agent_template(name: str, description: str) -> str:
    return f"""---
name: {name}
description: {description}
tools: Read, Write, Edit, Bash
model: sonnet
---

# {title_from_slug(name)}

{description}

## Expertise
- Domain-specific knowledge
- Key capabilities
- Use cases

## Instructions
Detailed instructions for Claude on how to act as this agent.

## Examples
Practical examples of agent usage.
"""


def _command_template(name: str, description: str) -> str:
    return f"""---
allowed-tools: Read, Write, Edit, Bash
argument-hint: [arguments]
description: {description}
---

# /{name}

{description}

## Purpose
What this command accomplishes.

## Usage
`/{name} [arguments]`

## Implementation
Technical details of what the command does.

## Examples
`/{name} example-usage`
"""


def _skill_template(name: str, description: str) -> str:
    return f"""---
name: {name}
description: {description}
---

# {title_from_slug(name)}

{description}

## Overview

[Describe what this skill enables]

## When to Use

[Describe when Claude should use this skill]

## How to Use

[Describe how Claude should use this skill and its resources]
"""


def _mcp_default(name: str, description: str) -> dict[str, Any]:
    config = McpConfig(mcpServers={name.replace("-", "_"): McpServer(description=description)})
    return config.model_dump(by_alias=True)


def _setting_default(name: str, description: str) -> dict[str, Any]:
    return SettingConfig(description=description).model_dump()


def _hook_default(name: str, description: str) -> dict[str, Any]:
    return HookConfig(description=description).model_dump()


@dataclass(frozen=True)
class ComponentKind:
    """Everything that differs between component types."""

    type: ComponentType
    extension: str
    body_format: Literal["markdown", "json"]
    nested: bool  # stored as <category>/<name>/SKILL.md
    authoring_instructions: str
    markdown_template: Callable[[str, str], str] | None = None
    json_default: Callable[[str, str], dict[str, Any]] | None = None

    def relative_path(self, category: str, name: str) -> PurePosixPath:
        """Catalog-relative destination of a component, e.g. ``agents/dev/x.md``."""
        base = PurePosixPath(self.type.value, category)
        if self.nested:
            return base / name / "SKILL.md"
        return base / f"{name}{self.extension}"

    def render(self, name: str, description: str, content: str | None = None) -> str:
        """Produce the file body, using ``content`` when it was supplied."""
        if self.body_format == "markdown":
            assert self.markdown_template is not None
            return content or self.markdown_template(name, description)

        assert self.json_default is not None
        if content:
            try:
                return dump_json(json.loads(content))
            except json.JSONDecodeError:
                pass
        return dump_json(self.json_default(name, description))


KINDS: dict[ComponentType, ComponentKind] = {
    ComponentType.AGENTS: ComponentKind(
        type=ComponentType.AGENTS,
        extension=".md",
        body_format="markdown",
        nested=False,
        markdown_template=_agent_template,
        authoring_instructions=(
            "- Include frontmatter with name, description, tools, model\n"
            "- Define expertise areas\n"
            "- Provide clear instructions\n"
            "- Include usage examples"
        ),
    ),
    ComponentType.COMMANDS: ComponentKind(
        type=ComponentType.COMMANDS,
        extension=".md",
        body_format="markdown",
        nested=False,
        markdown_template=_command_template,
        authoring_instructions=(
            "- Include frontmatter with allowed-tools, argument-hint, description\n"
            "- Define purpose and usage\n"
            "- Provide implementation details\n"
            "- Include command examples"
        ),
    ),
    ComponentType.MCPS: ComponentKind(
        type=ComponentType.MCPS,
        extension=".json",
        body_format="json",
        nested=False,
        json_default=_mcp_default,
        authoring_instructions=(
            "- Create valid JSON configuration\n"
            "- Include mcpServers object\n"
            "- Define command, args, and env variables\n"
            "- Add description"
        ),
    ),
    ComponentType.SETTINGS: ComponentKind(
        type=ComponentType.SETTINGS,
        extension=".json",
        body_format="json",
        nested=False,
        json_default=_setting_default,
        authoring_instructions=(
            "- Create valid JSON configuration\n"
            "- Include description and env variables\n"
            "- Define configuration options"
        ),
    ),
    ComponentType.HOOKS: ComponentKind(
        type=ComponentType.HOOKS,
        extension=".json",
        body_format="json",
        nested=False,
        json_default=_hook_default,
        authoring_instructions=(
            "- Create valid JSON configuration\n"
            "- Include description and hooks configuration\n"
            "- Define trigger conditions"
        ),
    ),
    ComponentType.SKILLS: ComponentKind(
        type=ComponentType.SKILLS,
        extension=".md",
        body_format="markdown",
        nested=True,
        markdown_template=_skill_template,
        authoring_instructions=(
            "- Create a SKILL.md file with proper YAML frontmatter\n"
            "- Include name and description fields\n"
            "- Write instructions in imperative form\n"
            "- Add examples section"
        ),
    ),
}


def get_kind(value: str | None) -> ComponentKind:
    """Look up a component kind by its wire name.

    Raises:
        PluginsNotSupported: for ``plugins``, which are not file-backed.
        InvalidComponentType: for anything outside the closed set.
    """
    if value == PLUGINS:
        raise PluginsNotSupported()
    try:
        return KINDS[ComponentType(value)]
    except ValueError as e:
        raise InvalidComponentType(str(value), ComponentType.values()) from e
