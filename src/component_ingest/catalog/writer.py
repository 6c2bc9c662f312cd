"""Persist components to the catalog tree without overwriting."""

import logging
from pathlib import Path

import aiofiles  # type: ignore[import-untyped]
from pydantic import BaseModel

from component_ingest.catalog.kinds import get_kind
from component_ingest.errors import AlreadyExists, InvalidField, MissingFields
from component_ingest.models import ComponentArtifact
from component_ingest.utils.text_utils import slugify

logger = logging.getLogger(__name__)

_REQUIRED = ["type", "category", "name", "description"]


class CreateComponentRequest(BaseModel):
    type: str | None = None
    category: str | None = None
    name: str | None = None
    description: str | None = None
    content: str | None = None


class ArtifactWriter:
    """Create-if-absent writer rooted at the components directory."""

    def __init__(self, components_dir: Path):
        self.components_dir = Path(components_dir)

    async def create(self, request: CreateComponentRequest) -> ComponentArtifact:
        """Validate, render and write one component.

        The existence check and the exclusive-create open are separate steps:
        the check produces the conflict response, the open makes sure a writer
        that raced past the check cannot overwrite the winner's file.
        """
        values = request.model_dump()
        missing = [field for field in _REQUIRED if not (values[field] or "").strip()]
        if missing:
            raise MissingFields(_REQUIRED)

        kind = get_kind(request.type)
        category = slugify(request.category or "")
        name = slugify(request.name or "")
        if not category:
            raise InvalidField("category must contain at least one letter or digit")
        if not name:
            raise InvalidField("name must contain at least one letter or digit")

        relative = kind.relative_path(category, name)
        destination = self.components_dir / relative
        if destination.exists():
            raise AlreadyExists(str(relative))

        description = (request.description or "").strip()
        body = kind.render(name, description, request.content)

        destination.parent.mkdir(parents=True, exist_ok=True)
        try:
            async with aiofiles.open(destination, "x", encoding="utf-8") as f:
                await f.write(body)
        except FileExistsError as e:
            raise AlreadyExists(str(relative)) from e

        logger.info("Created component %s", relative)
        return ComponentArtifact(
            type=kind.type,
            category=category,
            name=name,
            content=body,
            path=str(relative),
        )
