"""HTTP service mode."""

from component_ingest.service.app import create_app, run_service

__all__ = ["create_app", "run_service"]
