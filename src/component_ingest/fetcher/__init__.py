"""Page fetching."""

from component_ingest.fetcher.base import BaseFetcher, FetchResult
from component_ingest.fetcher.http_fetcher import HttpFetcher

__all__ = [
    "BaseFetcher",
    "FetchResult",
    "HttpFetcher",
]
