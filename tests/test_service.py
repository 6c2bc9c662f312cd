"""Tests for the FastAPI service mode."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from component_ingest.catalog import CommandResult
from component_ingest.config import AIConfig, AppConfig
from component_ingest.errors import AuthenticationFailed
from component_ingest.service import create_app
from conftest import FakeCommandRunner, FakeCompletionClient, FakeSite

RAW_URL = "https://raw.githubusercontent.com/o/r/main/README.md"


@pytest.fixture
def runner() -> FakeCommandRunner:
    return FakeCommandRunner(CommandResult(returncode=0, stdout="Generated 3 components\n", stderr=""))


@pytest.fixture
def client(
    app_config: AppConfig,
    fake_client: FakeCompletionClient,
    runner: FakeCommandRunner,
    site: FakeSite,
) -> TestClient:
    app = create_app(
        app_config,
        completion_client_factory=lambda _config: fake_client,
        command_runner=runner,
        transport=site.transport,
    )
    return TestClient(app)


def test_scrape_raw_file(client: TestClient, site: FakeSite) -> None:
    site.add(RAW_URL, "# Title\n\nBody", content_type="text/plain")

    response = client.post("/scrape-url", json={"url": RAW_URL})

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["content"] == "# Title\n\nBody"
    assert data["metadata"]["isRaw"] is True
    assert data["metadata"]["repository"] == {"owner": "o", "name": "r"}
    assert "aiAnalysis" not in data


def test_scrape_with_ai_degrades_instead_of_failing(
    client: TestClient, site: FakeSite, fake_client: FakeCompletionClient
) -> None:
    site.add(RAW_URL, "# Title\n\nBody", content_type="text/plain")
    fake_client.replies.append("I cannot help with that")

    response = client.post("/scrape-url", json={"url": RAW_URL, "useAI": True})

    assert response.status_code == 200
    analysis = response.json()["data"]["aiAnalysis"]
    assert analysis["degraded"] is True
    assert analysis["confidence"] == 0
    assert analysis["validation"]["dataQuality"] == "low"


def test_scrape_with_ai(client: TestClient, site: FakeSite, fake_client: FakeCompletionClient) -> None:
    site.add(RAW_URL, "# Title\n\nBody", content_type="text/plain")
    fake_client.replies.append(
        json.dumps({"suggestedComponentType": "commands", "confidence": 0.6, "suggestedName": "title"})
    )

    analysis = client.post("/scrape-url", json={"url": RAW_URL, "useAI": True}).json()["data"]["aiAnalysis"]

    assert analysis["suggestedComponentType"] == "commands"
    assert analysis["metadata"]["tokensUsed"] == 42


@pytest.mark.parametrize(
    ("body", "status"),
    [({}, 400), ({"url": "nope"}, 400), ({"url": "https://example.com/gone"}, 404)],
)
def test_scrape_failures(client: TestClient, body: dict[str, str], status: int) -> None:
    response = client.post("/scrape-url", json=body)

    assert response.status_code == status
    assert response.json()["success"] is False


def test_generate_component(client: TestClient, fake_client: FakeCompletionClient) -> None:
    fake_client.replies.append("```\n{\"mcpServers\": {}}\n```")

    response = client.post(
        "/generate-component",
        json={"componentType": "mcps", "description": "Postgres access", "name": "pg"},
    )

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["content"] == '{"mcpServers": {}}'
    assert data["name"] == "pg"
    assert data["metadata"]["model"] == "fake-model"


def test_generate_without_credential(
    catalog_root: Path, fake_client: FakeCompletionClient
) -> None:
    config = AppConfig(ai=AIConfig(api_key=None))
    config.catalog.root = catalog_root
    client = TestClient(create_app(config, completion_client_factory=lambda _c: fake_client))

    response = client.post("/generate-component", json={"componentType": "mcps", "description": "x"})

    assert response.status_code == 500
    assert "ANTHROPIC_API_KEY" in response.json()["error"]


def test_generate_missing_fields(client: TestClient) -> None:
    response = client.post("/generate-component", json={"description": "x"})
    assert response.status_code == 400
    assert response.json()["required"] == ["componentType", "description"]


def test_create_then_conflict(client: TestClient, catalog_root: Path) -> None:
    payload = {"type": "agents", "category": "Dev Team!", "name": "My Agent", "description": "x"}

    first = client.post("/create-component", json=payload)
    second = client.post("/create-component", json=payload)

    assert first.status_code == 201
    assert first.json()["data"] == {
        "type": "agents",
        "category": "dev-team",
        "name": "my-agent",
        "path": "agents/dev-team/my-agent.md",
    }
    assert (catalog_root / "cli-tool" / "components" / "agents" / "dev-team" / "my-agent.md").is_file()
    assert second.status_code == 409


def test_create_plugin_is_rejected(client: TestClient) -> None:
    response = client.post(
        "/create-component",
        json={"type": "plugins", "category": "c", "name": "n", "description": "d"},
    )
    assert response.status_code == 400
    assert "marketplace.json" in response.json()["error"]


def test_create_with_wrong_field_type(client: TestClient) -> None:
    response = client.post("/create-component", json={"type": ["agents"]})
    assert response.status_code == 400


def test_categories(client: TestClient) -> None:
    body = client.get("/categories").json()
    assert body["success"] is True
    assert body["categories"]["agents"] == ["development-team", "security"]
    assert body["categories"]["plugins"] == ["git-workflow", "devops-suite"]

    single = client.get("/categories", params={"type": "skills"}).json()
    assert single == {"success": True, "type": "skills", "categories": ["productivity"]}


def test_regenerate(client: TestClient, catalog_root: Path, runner: FakeCommandRunner) -> None:
    (catalog_root / "generate_components_json.py").write_text("print('x')\n", encoding="utf-8")

    response = client.post("/regenerate-catalog")

    assert response.status_code == 200
    assert response.json()["output"] == ["Generated 3 components"]
    assert runner.calls[0]["cwd"] == catalog_root


def test_regenerate_without_script(client: TestClient) -> None:
    response = client.post("/regenerate-catalog")
    assert response.status_code == 404


@pytest.mark.parametrize("path", ["/scrape-url", "/generate-component", "/categories"])
def test_options_answers_ok(client: TestClient, path: str) -> None:
    response = client.options(path)
    assert response.status_code == 200
    assert response.json() == {"ok": True}


def test_cors_header(client: TestClient) -> None:
    response = client.get("/categories", headers={"Origin": "https://admin.example.com"})
    assert response.headers["access-control-allow-origin"] == "*"


def test_generate_with_rejected_credential(
    client: TestClient, fake_client: FakeCompletionClient
) -> None:
    fake_client.error = AuthenticationFailed()

    response = client.post("/generate-component", json={"componentType": "agents", "description": "x"})

    assert response.status_code == 500
    assert response.json()["error"] == "Anthropic API authentication failed"
    assert response.json()["message"] == "Please check your ANTHROPIC_API_KEY"


def test_cors_header_without_origin(client: TestClient) -> None:
    response = client.get("/categories")
    assert response.headers["access-control-allow-origin"] == "*"


def test_cors_header_on_error_responses(client: TestClient) -> None:
    response = client.post("/generate-component", json={"description": "x"})
    assert response.status_code == 400
    assert response.headers["access-control-allow-origin"] == "*"
