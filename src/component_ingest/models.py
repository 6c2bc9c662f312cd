"""Data model shared by the scrape, classify and synthesize stages."""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model that speaks camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_wire(self, **kwargs: Any) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True, **kwargs)


class ComponentType(str, Enum):
    """Closed set of file-backed component kinds, named by catalog directory."""

    AGENTS = "agents"
    COMMANDS = "commands"
    MCPS = "mcps"
    SETTINGS = "settings"
    HOOKS = "hooks"
    SKILLS = "skills"

    @classmethod
    def values(cls) -> list[str]:
        return [member.value for member in cls]


PLUGINS = "plugins"


class CodeBlock(CamelModel):
    """A code sample found in the page."""

    language: str = "text"
    content: str

    @field_validator("language")
    @classmethod
    def _lower_language(cls, value: str) -> str:
        return (value or "text").lower()

    @field_validator("content")
    @classmethod
    def _non_empty(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("code block content must not be empty")
        return value


class Repository(CamelModel):
    owner: str
    name: str


class RepoEntry(CamelModel):
    """A file or directory link discovered on a repository root page."""

    name: str
    path: str = Field(min_length=1)
    type: Literal["file", "directory"]
    url: str


class Heading(CamelModel):
    level: int
    text: str


class Link(CamelModel):
    text: str
    href: str


class Section(CamelModel):
    level: str
    title: str
    id: str = ""


class PageMetadata(CamelModel):
    """Open metadata mapping with typed well-known keys."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="allow"
    )

    url: str
    domain: str
    content_type: str | None = None
    scraped_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    headings: list[Heading] | None = None
    links: list[Link] | None = None
    og_title: str | None = None
    og_description: str | None = None

    source: str | None = None
    repository: Repository | None = None
    branch: str | None = None
    file_path: str | None = None
    file_extension: str | None = None
    is_raw: bool | None = None
    raw_url: str | None = None
    raw_content: bool | None = None
    raw_content_fetched: bool | None = None
    is_readme: bool | None = None
    is_repo_root: bool | None = None
    repo_structure: list[RepoEntry] | None = None

    is_markdown: bool | None = None
    raw_markdown: str | None = None
    sections: list[Section] | None = None


class ExtractedMetadata(CamelModel):
    description: str = ""
    purpose: str = ""
    features: list[str] = Field(default_factory=list)
    tools: list[str] = Field(default_factory=list)
    model: str | None = None


class Validation(CamelModel):
    data_quality: Literal["high", "medium", "low"] = "low"
    missing_fields: list[str] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)


class AnalysisMetadata(CamelModel):
    analyzed_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    model: str
    tokens_used: int = 0


class AIAnalysis(CamelModel):
    """Structured suggestion produced by the classifier.

    A degraded analysis (``error`` set) still carries every field so callers
    can treat classification as always succeeding.
    """

    suggested_component_type: str = ComponentType.AGENTS.value
    confidence: float = Field(default=0.0, ge=0.0, le=1.0)
    suggested_category: str = "general"
    suggested_name: str = "component"
    extracted_metadata: ExtractedMetadata = Field(default_factory=ExtractedMetadata)
    repository_insights: dict[str, Any] = Field(default_factory=dict)
    validation: Validation = Field(default_factory=Validation)
    reasoning: str = ""
    metadata: AnalysisMetadata | None = None
    degraded: bool = False
    error: str | None = None


class ScrapedContent(CamelModel):
    """Normalized representation of a fetched page."""

    title: str = ""
    description: str = ""
    content: str = ""
    code_blocks: list[CodeBlock] = Field(default_factory=list)
    metadata: PageMetadata
    ai_analysis: AIAnalysis | None = None


class ComponentArtifact(CamelModel):
    """A component file persisted to the catalog tree."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True
    )

    type: ComponentType
    category: str = Field(pattern=r"^[a-z0-9-]+$")
    name: str = Field(pattern=r"^[a-z0-9-]+$")
    content: str
    path: str
