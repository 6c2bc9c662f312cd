"""Code block discovery with language detection."""

import re

from bs4 import Tag

from component_ingest.models import CodeBlock

_LANGUAGE_RE = re.compile(r"language-(\w+)")
_HIGHLIGHT_RE = re.compile(r"highlight-source-(\w+)")
_FENCE_RE = re.compile(r"^```[ \t]*([\w+#.-]*)[^\n]*\n(.*?)^```[ \t]*$", re.MULTILINE | re.DOTALL)


def _class_string(elem: Tag) -> str:
    raw_classes: str | list[str] = elem.get("class") or []
    return raw_classes if isinstance(raw_classes, str) else " ".join(raw_classes)


def detect_language(code: Tag) -> str:
    """Resolve the language of a ``code`` element.

    Tries, in order: a ``language-X`` class on the element, a ``data-lang`` or
    ``lang`` attribute, a ``language-X`` class on the enclosing ``pre``, and a
    ``highlight-source-X`` class on an enclosing ``.highlight`` wrapper.
    """
    match = _LANGUAGE_RE.search(_class_string(code))
    if match:
        return match.group(1).lower()

    attr = code.get("data-lang") or code.get("lang")
    if attr:
        return str(attr).lower()

    pre = code.find_parent("pre")
    if pre is not None:
        match = _LANGUAGE_RE.search(_class_string(pre))
        if match:
            return match.group(1).lower()

    wrapper = code.find_parent(class_="highlight")
    if wrapper is not None:
        match = _HIGHLIGHT_RE.search(_class_string(wrapper))
        if match:
            return match.group(1).lower()

    return "text"


def extract_code_blocks(root: Tag, selector: str = "pre code, code") -> list[CodeBlock]:
    """Collect every non-empty code element under ``root`` in document order."""
    blocks: list[CodeBlock] = []
    for code in root.select(selector):
        text = code.get_text().strip()
        if not text:
            continue
        blocks.append(CodeBlock(language=detect_language(code), content=text))
    return blocks


def extract_fenced_blocks(text: str) -> list[CodeBlock]:
    """Collect fenced code blocks from Markdown source."""
    blocks: list[CodeBlock] = []
    for match in _FENCE_RE.finditer(text):
        body = match.group(2).strip()
        if body:
            blocks.append(CodeBlock(language=match.group(1) or "text", content=body))
    return blocks
