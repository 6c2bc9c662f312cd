"""Tests for HTML and raw-text content extraction."""

from __future__ import annotations

import pytest
from bs4 import BeautifulSoup

from component_ingest.config import ExtractorConfig
from component_ingest.extractor import ContentExtractor, detect_language, extract_code_blocks
from component_ingest.models import PageMetadata

PAGE = """<!DOCTYPE html>
<html>
<head>
  <title>Example Docs</title>
  <meta name="description" content="How to use the example">
  <meta property="og:title" content="OG Example">
</head>
<body>
  <nav><a href="/home">Home</a></nav>
  <main>
    <h1>Getting started</h1>
    <p>Install the tool.</p>
    <script>track()</script>
    <div class="sidebar">Sidebar links</div>
    <pre><code class="language-Python">print("hi")</code></pre>
    <pre><code>   </code></pre>
    <h2 id="usage">Usage</h2>
    <a href="https://example.com/more">More</a>
  </main>
  <footer>Copyright</footer>
</body>
</html>"""


@pytest.fixture
def extractor() -> ContentExtractor:
    return ContentExtractor(ExtractorConfig())


def _metadata() -> PageMetadata:
    return PageMetadata(url="https://example.com/docs", domain="example.com")


def test_extract_html_page(extractor: ContentExtractor) -> None:
    soup = extractor.parse(PAGE)
    content = extractor.extract(soup, _metadata())

    assert content.title == "Example Docs"
    assert content.description == "How to use the example"
    assert "Install the tool." in content.content
    assert "track()" not in content.content
    assert "Sidebar links" not in content.content
    assert "Copyright" not in content.content

    assert [(b.language, b.content) for b in content.code_blocks] == [("python", 'print("hi")')]
    assert [(h.level, h.text) for h in content.metadata.headings or []] == [
        (1, "Getting started"),
        (2, "Usage"),
    ]
    assert [link.href for link in content.metadata.links or []] == ["https://example.com/more"]
    assert content.metadata.og_title == "OG Example"


def test_extract_leaves_source_tree_untouched(extractor: ContentExtractor) -> None:
    soup = extractor.parse(PAGE)
    extractor.extract(soup, _metadata())
    assert soup.find("script") is not None


@pytest.mark.parametrize(
    ("html", "expected"),
    [
        ("<body><div class='content'>C</div><article>A</article></body>", "A"),
        ("<body><div class='content'>C</div><div id='readme'>R</div></body>", "C"),
        ("<body><div id='readme'>R</div></body>", "R"),
        ("<body><p>Only body</p></body>", "Only body"),
    ],
)
def test_content_root_priority(extractor: ContentExtractor, html: str, expected: str) -> None:
    root = extractor.find_content_root(extractor.parse(html))
    assert root is not None
    assert root.get_text(strip=True) == expected


def test_title_falls_back_to_headings(extractor: ContentExtractor) -> None:
    soup = extractor.parse("<body><h2>Second</h2><h1>First</h1></body>")
    assert extractor.extract(soup, _metadata()).title == "First"


def test_links_are_capped(extractor: ContentExtractor) -> None:
    anchors = "".join(f"<a href='/p{i}'>p{i}</a>" for i in range(30))
    content = extractor.extract(extractor.parse(f"<main>{anchors}</main>"), _metadata())
    assert len(content.metadata.links or []) == 20


@pytest.mark.parametrize(
    ("html", "expected"),
    [
        ('<pre><code class="language-TypeScript">x</code></pre>', "typescript"),
        ('<pre><code data-lang="rust">x</code></pre>', "rust"),
        ('<pre><code lang="go">x</code></pre>', "go"),
        ('<pre class="language-bash"><code>x</code></pre>', "bash"),
        ('<div class="highlight highlight-source-js"><pre><code>x</code></pre></div>', "js"),
        ("<pre><code>x</code></pre>", "text"),
    ],
)
def test_detect_language(html: str, expected: str) -> None:
    code = BeautifulSoup(html, "lxml").find("code")
    assert detect_language(code) == expected


def test_empty_code_blocks_are_dropped() -> None:
    soup = BeautifulSoup("<div><code> </code><code>\n\n</code><code>ls</code></div>", "lxml")
    blocks = extract_code_blocks(soup)
    assert [b.content for b in blocks] == ["ls"]
    assert all(b.content.strip() for b in blocks)


def test_extract_raw_keeps_body_verbatim(extractor: ContentExtractor) -> None:
    text = "# Title\n\nBody\n\n```bash\nnpm test\n```\n\n```\n\n```\n"
    content = extractor.extract_raw(text, _metadata())

    assert content.content == text
    assert content.title == "Title"
    assert [(b.language, b.content) for b in content.code_blocks] == [("bash", "npm test")]
