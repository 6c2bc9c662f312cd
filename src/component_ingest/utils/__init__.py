"""Utility functions."""

from component_ingest.utils.text_utils import slugify, strip_code_fence, truncate
from component_ingest.utils.url_utils import get_host, host_matches, validate_url

__all__ = [
    "get_host",
    "host_matches",
    "slugify",
    "strip_code_fence",
    "truncate",
    "validate_url",
]
