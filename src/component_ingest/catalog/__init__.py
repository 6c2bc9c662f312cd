"""Catalog tree access: component kinds, writing, listing and regeneration."""

from component_ingest.catalog.categories import list_categories
from component_ingest.catalog.kinds import KINDS, ComponentKind, get_kind
from component_ingest.catalog.regenerator import (
    CatalogRegenerator,
    CommandResult,
    CommandRunner,
    SubprocessRunner,
)
from component_ingest.catalog.writer import ArtifactWriter, CreateComponentRequest

__all__ = [
    "KINDS",
    "ArtifactWriter",
    "CatalogRegenerator",
    "CommandResult",
    "CommandRunner",
    "ComponentKind",
    "CreateComponentRequest",
    "SubprocessRunner",
    "get_kind",
    "list_categories",
]
