"""Configuration management with Pydantic models."""

import os
from pathlib import Path

from pydantic import BaseModel, Field

_BROWSER_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)


class FetcherConfig(BaseModel):
    """Configuration for page fetching."""

    user_agent: str = _BROWSER_USER_AGENT
    accept: str = "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8"
    accept_language: str = "en-US,en;q=0.9"
    timeout_ms: int = Field(default=30000, ge=1000, le=120000)
    max_redirects: int = Field(default=5, ge=0, le=20)
    max_content_bytes: int = Field(default=10 * 1024 * 1024, ge=1024)
    raw_timeout_ms: int = Field(default=10000, ge=1000, le=60000)
    raw_accept: str = "text/plain,text/*"

    @property
    def headers(self) -> dict[str, str]:
        return {
            "User-Agent": self.user_agent,
            "Accept": self.accept,
            "Accept-Language": self.accept_language,
            "DNT": "1",
            "Upgrade-Insecure-Requests": "1",
        }


class ExtractorConfig(BaseModel):
    """Configuration for content extraction."""

    # Priority order: the first selector that matches becomes the content root.
    content_selectors: list[str] = Field(
        default_factory=lambda: [
            "main",
            "article",
            ".content",
            ".markdown-body",
            "#readme",
            "body",
        ]
    )
    remove_selectors: list[str] = Field(
        default_factory=lambda: [
            "script",
            "style",
            "nav",
            "header",
            "footer",
            ".nav",
            ".navigation",
            ".sidebar",
            ".menu",
            ".advertisement",
            ".ads",
            ".social-share",
            ".comments",
            ".related-posts",
        ]
    )
    max_links: int = Field(default=20, ge=0)


class SourceConfig(BaseModel):
    """Configuration for host-specific normalizers."""

    github_hosts: list[str] = Field(
        default_factory=lambda: ["github.com", "raw.githubusercontent.com"]
    )
    raw_github_host: str = "raw.githubusercontent.com"
    max_repo_entries: int = Field(default=50, ge=1)
    raw_fallback_threshold: int = Field(default=500, ge=0)
    docs_hosts: list[str] = Field(
        default_factory=lambda: ["code.claude.com", "claude.com"]
    )


class AIConfig(BaseModel):
    """Configuration for the AI-backed classifier and synthesizer."""

    api_key: str | None = Field(
        default_factory=lambda: os.environ.get("ANTHROPIC_API_KEY") or None,
        repr=False,
    )
    model: str = "claude-3-5-sonnet-20241022"
    classifier_max_tokens: int = Field(default=2000, ge=1)
    synthesizer_max_tokens: int = Field(default=4000, ge=1)
    timeout_seconds: float = Field(default=120.0, gt=0)


class CatalogConfig(BaseModel):
    """Locations of the catalog tree and its collaborators."""

    root: Path = Path(".")
    components_dir: Path = Path("cli-tool/components")
    docs_dir: Path = Path("docs-claude")
    best_practices_file: Path = Path("docs/CLAUDE.md")
    marketplace_file: Path = Path(".claude-plugin/marketplace.json")
    generation_script: Path = Path("generate_components_json.py")
    regenerate_timeout_seconds: float = Field(default=60.0, gt=0)
    output_tail_lines: int = Field(default=20, ge=1)

    def resolve(self, path: Path) -> Path:
        """Resolve a configured path against the project root."""
        return path if path.is_absolute() else self.root / path

    @property
    def components_path(self) -> Path:
        return self.resolve(self.components_dir)


class AppConfig(BaseModel):
    """Main application configuration."""

    fetcher: FetcherConfig = Field(default_factory=FetcherConfig)
    extractor: ExtractorConfig = Field(default_factory=ExtractorConfig)
    sources: SourceConfig = Field(default_factory=SourceConfig)
    ai: AIConfig = Field(default_factory=AIConfig)
    catalog: CatalogConfig = Field(default_factory=CatalogConfig)
    verbose: bool = False

    @classmethod
    def from_toml(cls, path: Path) -> "AppConfig":
        """Load config from a TOML file."""
        import tomllib

        with open(path, "rb") as f:
            data = tomllib.load(f)
        return cls.model_validate(data)
