"""List the categories present in the catalog tree."""

import json
import logging
from pathlib import Path

from component_ingest.errors import CatalogReadError
from component_ingest.models import PLUGINS, ComponentType

logger = logging.getLogger(__name__)


def list_type_categories(components_dir: Path, component_type: ComponentType) -> list[str]:
    """Sorted, non-hidden category directories of one component type."""
    type_path = components_dir / component_type.value
    if not type_path.is_dir():
        return []
    return sorted(
        item.name
        for item in type_path.iterdir()
        if item.is_dir() and not item.name.startswith(".")
    )


def list_plugins(marketplace_file: Path) -> list[str]:
    """Plugin names (or ids) declared in the marketplace file."""
    if not marketplace_file.is_file():
        return []
    try:
        marketplace = json.loads(marketplace_file.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError):
        logger.warning("Could not read marketplace file %s", marketplace_file, exc_info=True)
        return []
    plugins = (marketplace.get("plugins") or []) if isinstance(marketplace, dict) else []
    names = []
    for plugin in plugins:
        if isinstance(plugin, dict):
            name = plugin.get("name") or plugin.get("id")
            if name:
                names.append(str(name))
    return names


def list_categories(components_dir: Path, marketplace_file: Path) -> dict[str, list[str]]:
    """Categories for every component type, plus the plugin names."""
    try:
        categories = {
            component_type.value: list_type_categories(components_dir, component_type)
            for component_type in ComponentType
        }
    except OSError as e:
        raise CatalogReadError(str(e)) from e
    categories[PLUGINS] = list_plugins(marketplace_file)
    return categories
