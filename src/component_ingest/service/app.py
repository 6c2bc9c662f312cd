"""FastAPI application exposing the ingest pipeline over HTTP."""

import logging
from typing import Any

import httpx
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from component_ingest.ai import GenerateComponentRequest, Synthesizer, create_completion_client
from component_ingest.ai.classifier import CompletionClientFactory
from component_ingest.catalog import (
    ArtifactWriter,
    CatalogRegenerator,
    CommandRunner,
    CreateComponentRequest,
    list_categories,
)
from component_ingest.config import AppConfig
from component_ingest.errors import IngestError, MissingFields
from component_ingest.orchestrator import ScrapePipeline

logger = logging.getLogger(__name__)


class ScrapeRequest(BaseModel):
    url: str | None = None
    useAI: bool = False


def create_app(
    config: AppConfig | None = None,
    completion_client_factory: CompletionClientFactory = create_completion_client,
    command_runner: CommandRunner | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    """Create the FastAPI application for the scrape, generate and catalog operations."""

    config = config or AppConfig()
    catalog = config.catalog

    app = FastAPI(title="Component Ingest Service", version="1.0.0")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def allow_any_origin(request: Request, call_next):
        response = await call_next(request)
        response.headers.setdefault("Access-Control-Allow-Origin", "*")
        return response

    pipeline = ScrapePipeline(
        config, transport=transport, client_factory=completion_client_factory
    )
    synthesizer = Synthesizer(
        config.ai,
        catalog.components_path,
        catalog.resolve(catalog.best_practices_file),
        client_factory=completion_client_factory,
    )
    writer = ArtifactWriter(catalog.components_path)
    regenerator = CatalogRegenerator(
        catalog.resolve(catalog.generation_script),
        cwd=catalog.root,
        runner=command_runner,
        timeout=catalog.regenerate_timeout_seconds,
        tail_lines=catalog.output_tail_lines,
    )

    @app.options("/{path:path}")
    async def preflight(path: str) -> dict[str, bool]:
        return {"ok": True}

    @app.post("/scrape-url")
    async def scrape_url(payload: ScrapeRequest) -> dict[str, Any]:
        if not (payload.url or "").strip():
            raise MissingFields(["url"], "URL is required")
        content = await pipeline.scrape(payload.url or "", classify=payload.useAI)
        return {"success": True, "data": content.to_wire()}

    @app.post("/generate-component")
    async def generate_component(payload: GenerateComponentRequest) -> dict[str, Any]:
        data = await synthesizer.generate(payload)
        return {"success": True, "data": data}

    @app.post("/create-component", status_code=201)
    async def create_component(payload: CreateComponentRequest) -> dict[str, Any]:
        artifact = await writer.create(payload)
        return {
            "success": True,
            "message": "Component created successfully",
            "data": artifact.to_wire(include={"type", "category", "name", "path"}),
        }

    @app.post("/regenerate-catalog")
    async def regenerate_catalog() -> dict[str, Any]:
        output = await regenerator.regenerate()
        return {
            "success": True,
            "message": "Catalog regenerated successfully",
            "output": output,
        }

    @app.get("/categories")
    async def categories(type: str | None = None) -> dict[str, Any]:
        listing = list_categories(
            catalog.components_path, catalog.resolve(catalog.marketplace_file)
        )
        if type and type in listing:
            return {"success": True, "type": type, "categories": listing[type]}
        return {"success": True, "categories": listing}

    @app.exception_handler(IngestError)
    async def ingest_error_handler(_: Request, exc: IngestError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error("%s: %s", exc.title, exc.message)
        return JSONResponse(status_code=exc.status_code, content=exc.to_payload())

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        _: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=400,
            content={"success": False, "error": "Invalid request body", "message": str(exc)},
        )

    @app.exception_handler(Exception)
    async def unexpected_error_handler(_: Request, exc: Exception) -> JSONResponse:
        # Runs outside the middleware stack, so the CORS header is set here.
        logger.exception("Unhandled error")
        return JSONResponse(
            status_code=500,
            content={"success": False, "error": "Internal error", "message": str(exc)},
            headers={"Access-Control-Allow-Origin": "*"},
        )

    return app


def run_service(
    config: AppConfig | None = None, host: str = "0.0.0.0", port: int = 8000
) -> None:  # pragma: no cover - integration path
    import uvicorn

    uvicorn.run(create_app(config), host=host, port=port)
