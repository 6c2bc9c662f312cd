"""Reference material embedded in prompts: docs excerpts and catalog examples."""

import logging
from pathlib import Path

from pydantic import BaseModel

from component_ingest.models import ComponentType

logger = logging.getLogger(__name__)

REFERENCE_DOCS = {
    "subagents": "subagents.md",
    "skills": "skills.md",
    "plugins": "plugins.md",
    "mcp": "mcp.md",
    "hooks": "hooks.md",
}


class ExampleComponent(BaseModel):
    """An existing catalog entry shown to the model as a style exemplar."""

    category: str
    name: str
    content: str


def _read_excerpt(path: Path, limit: int) -> str | None:
    try:
        return path.read_text(encoding="utf-8")[:limit]
    except (OSError, UnicodeDecodeError):
        logger.warning("Could not load %s", path, exc_info=True)
        return None


def load_reference_docs(docs_dir: Path, limit: int = 3000) -> dict[str, str]:
    """Load the first ``limit`` characters of each reference topic present."""
    docs: dict[str, str] = {}
    for topic, filename in REFERENCE_DOCS.items():
        path = docs_dir / filename
        if not path.is_file():
            continue
        excerpt = _read_excerpt(path, limit)
        if excerpt is not None:
            docs[topic] = excerpt
    return docs


def load_best_practices(path: Path, limit: int = 5000) -> str:
    if not path.is_file():
        return ""
    return _read_excerpt(path, limit) or ""


def _first_example_file(category_dir: Path, component_type: ComponentType) -> Path | None:
    if component_type is ComponentType.SKILLS:
        for skill_dir in sorted(p for p in category_dir.iterdir() if p.is_dir()):
            skill_file = skill_dir / "SKILL.md"
            if skill_file.is_file():
                return skill_file
        return None

    for candidate in sorted(category_dir.iterdir()):
        if candidate.is_file() and candidate.suffix in (".md", ".json"):
            return candidate
    return None


def load_examples(
    components_dir: Path,
    component_type: ComponentType,
    max_examples: int = 3,
    limit: int = 2000,
) -> list[ExampleComponent]:
    """Pick one existing component from each of the first few categories."""
    type_dir = components_dir / component_type.value
    if not type_dir.is_dir():
        return []

    examples: list[ExampleComponent] = []
    try:
        categories = sorted(
            p for p in type_dir.iterdir() if p.is_dir() and not p.name.startswith(".")
        )
        for category_dir in categories[:max_examples]:
            path = _first_example_file(category_dir, component_type)
            if path is None:
                continue
            content = _read_excerpt(path, limit)
            if content is None:
                continue
            name = path.parent.name if component_type is ComponentType.SKILLS else path.stem
            examples.append(
                ExampleComponent(category=category_dir.name, name=name, content=content)
            )
    except OSError:
        logger.warning("Could not load example components from %s", type_dir, exc_info=True)

    return examples
