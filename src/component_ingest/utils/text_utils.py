"""Text helpers for slugs and model output."""

import re

_WHITESPACE_RE = re.compile(r"\s+")
_SLUG_INVALID_RE = re.compile(r"[^a-z0-9-]")
_FENCED_JSON_RE = re.compile(r"```(?:json)?\n([\s\S]*?)\n```")


def slugify(value: str) -> str:
    """Lower-case, hyphenate whitespace and drop anything outside ``[a-z0-9-]``."""
    value = _WHITESPACE_RE.sub("-", value.strip().lower())
    return _SLUG_INVALID_RE.sub("", value)


def title_from_slug(slug: str) -> str:
    """Turn ``my-agent`` into ``My Agent``."""
    return " ".join(word[:1].upper() + word[1:] for word in slug.split("-"))


def strip_code_fence(text: str) -> str:
    """Remove a single outer triple-backtick wrapper, if the text has one."""
    stripped = text.strip()
    if not stripped.startswith("```"):
        return stripped
    lines = stripped.split("\n")
    if len(lines) >= 2 and lines[-1].strip() == "```":
        return "\n".join(lines[1:-1])
    return stripped


def unwrap_json(text: str) -> str:
    """Return the JSON payload of a reply that may be wrapped in a json fence."""
    stripped = text.strip()
    if stripped.startswith("```"):
        match = _FENCED_JSON_RE.search(stripped)
        if match:
            return match.group(1)
    return stripped


def truncate(text: str | None, limit: int) -> str:
    return (text or "")[:limit]
