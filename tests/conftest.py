"""Shared fixtures: fake model client, fake command runner, catalog trees."""

from __future__ import annotations

import json
from collections.abc import Sequence
from pathlib import Path

import httpx
import pytest

from component_ingest.ai import Completion
from component_ingest.catalog import CommandResult
from component_ingest.config import AIConfig, AppConfig, CatalogConfig


class FakeCompletionClient:
    """Returns canned replies and records every prompt."""

    def __init__(self, replies: list[str] | None = None, error: Exception | None = None):
        self.replies = list(replies or [])
        self.error = error
        self.calls: list[dict[str, object]] = []

    async def complete(self, prompt: str, *, max_tokens: int) -> Completion:
        self.calls.append({"prompt": prompt, "max_tokens": max_tokens})
        if self.error is not None:
            raise self.error
        return Completion(text=self.replies.pop(0), model="fake-model", output_tokens=42)


class FakeCommandRunner:
    def __init__(self, result: CommandResult | None = None, error: Exception | None = None):
        self.result = result or CommandResult(returncode=0, stdout="", stderr="")
        self.error = error
        self.calls: list[dict[str, object]] = []

    async def run(self, args: Sequence[str], *, cwd: Path, timeout: float) -> CommandResult:
        self.calls.append({"args": list(args), "cwd": cwd, "timeout": timeout})
        if self.error is not None:
            raise self.error
        return self.result


@pytest.fixture
def fake_client() -> FakeCompletionClient:
    return FakeCompletionClient()


@pytest.fixture
def catalog_root(tmp_path: Path) -> Path:
    """A small catalog tree with examples, reference docs and a marketplace."""
    components = tmp_path / "cli-tool" / "components"
    (components / "agents" / "development-team").mkdir(parents=True)
    (components / "agents" / "development-team" / "frontend-developer.md").write_text(
        "---\nname: frontend-developer\ndescription: Builds UIs\n---\n\nYou build UIs.\n",
        encoding="utf-8",
    )
    (components / "agents" / "security").mkdir()
    (components / "skills" / "productivity" / "pdf-tools").mkdir(parents=True)
    (components / "skills" / "productivity" / "pdf-tools" / "SKILL.md").write_text(
        "---\nname: pdf-tools\ndescription: Work with PDFs\n---\n", encoding="utf-8"
    )
    (components / "mcps" / "database").mkdir(parents=True)

    docs = tmp_path / "docs-claude"
    docs.mkdir()
    (docs / "subagents.md").write_text("Subagents are specialists.", encoding="utf-8")
    (docs / "skills.md").write_text("Skills are capabilities.", encoding="utf-8")

    (tmp_path / "docs").mkdir()
    (tmp_path / "docs" / "CLAUDE.md").write_text("Keep components focused.", encoding="utf-8")

    (tmp_path / ".claude-plugin").mkdir()
    (tmp_path / ".claude-plugin" / "marketplace.json").write_text(
        json.dumps({"plugins": [{"name": "git-workflow"}, {"id": "devops-suite"}]}),
        encoding="utf-8",
    )
    return tmp_path


@pytest.fixture
def app_config(catalog_root: Path) -> AppConfig:
    return AppConfig(
        ai=AIConfig(api_key="test-key"),
        catalog=CatalogConfig(root=catalog_root),
    )


class FakeSite:
    """Serves fixed bodies by exact URL through an ``httpx.MockTransport``."""

    def __init__(self) -> None:
        self.routes: dict[str, tuple[int, str, str]] = {}
        self.requests: list[httpx.Request] = []

    def add(self, url: str, body: str, *, status: int = 200, content_type: str = "text/html") -> None:
        self.routes[url] = (status, body, content_type)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        status, body, content_type = self.routes.get(
            str(request.url), (404, "not found", "text/plain")
        )
        return httpx.Response(status, text=body, headers={"Content-Type": content_type})

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def requested(self, url: str) -> int:
        return sum(1 for r in self.requests if str(r.url) == url)


@pytest.fixture
def site() -> FakeSite:
    return FakeSite()
