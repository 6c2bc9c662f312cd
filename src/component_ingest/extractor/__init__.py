"""Content extraction from HTML pages and raw files."""

from component_ingest.extractor.code_blocks import detect_language, extract_code_blocks
from component_ingest.extractor.main_content import ContentExtractor

__all__ = [
    "ContentExtractor",
    "detect_language",
    "extract_code_blocks",
]
