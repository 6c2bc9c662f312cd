"""HTTP fetcher for pages and raw files."""

import logging

import httpx

from component_ingest.config import FetcherConfig
from component_ingest.errors import (
    ConnectionRefused,
    ContentTooLarge,
    DNSResolutionFailed,
    FetchFailed,
    FetchTimeout,
    IngestError,
    InvalidURL,
    TooManyRedirects,
    UpstreamHTTPError,
)
from component_ingest.fetcher.base import BaseFetcher, FetchResult

logger = logging.getLogger(__name__)

_DNS_KEYWORDS = (
    "name or service not known",
    "nodename nor servname",
    "getaddrinfo",
    "name resolution",
    "no address associated",
    "dns",
)


class HttpFetcher(BaseFetcher):
    """Single-attempt HTTP fetcher with browser-like headers and a body cap."""

    def __init__(
        self,
        config: FetcherConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        super().__init__(config)
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self):
        """Initialize HTTP client."""
        self._client = httpx.AsyncClient(
            headers=self.config.headers,
            follow_redirects=True,
            max_redirects=self.config.max_redirects,
            timeout=self.config.timeout_ms / 1000,
            transport=self._transport,
        )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Clean up HTTP client."""
        if self._client:
            await self._client.aclose()

    async def fetch(self, url: str) -> FetchResult:
        """Fetch a page via HTTP."""
        try:
            result = await self._get(url)
        except httpx.TooManyRedirects as e:
            raise TooManyRedirects() from e
        except httpx.TimeoutException as e:
            raise FetchTimeout() from e
        except httpx.ConnectError as e:
            raise self._classify_connect_error(e) from e
        except (httpx.InvalidURL, httpx.UnsupportedProtocol) as e:
            raise InvalidURL(str(e)) from e
        except httpx.HTTPError as e:
            raise FetchFailed(str(e) or type(e).__name__) from e

        if result.status_code >= 500:
            raise UpstreamHTTPError(result.status_code)
        return result

    async def fetch_raw(self, url: str) -> FetchResult | None:
        """Fetch a raw file with the short timeout; never raises."""
        try:
            result = await self._get(
                url,
                headers={"Accept": self.config.raw_accept},
                timeout=self.config.raw_timeout_ms / 1000,
            )
        except (httpx.HTTPError, IngestError) as e:
            logger.info("Could not fetch raw content from %s: %s", url, e)
            return None

        if not 200 <= result.status_code < 300:
            logger.info(
                "Could not fetch raw content from %s: HTTP %d", url, result.status_code
            )
            return None
        return result

    async def _get(
        self,
        url: str,
        headers: dict[str, str] | None = None,
        timeout: float | None = None,
    ) -> FetchResult:
        if not self._client:
            raise RuntimeError("Fetcher not initialized. Use 'async with' context manager.")

        limit = self.config.max_content_bytes
        kwargs: dict = {"headers": headers}
        if timeout is not None:
            kwargs["timeout"] = timeout

        async with self._client.stream("GET", url, **kwargs) as response:
            declared = response.headers.get("content-length")
            if declared and declared.isdigit() and int(declared) > limit:
                raise ContentTooLarge(limit)

            chunks: list[bytes] = []
            received = 0
            async for chunk in response.aiter_bytes():
                received += len(chunk)
                if received > limit:
                    raise ContentTooLarge(limit)
                chunks.append(chunk)

            body = b"".join(chunks).decode(response.encoding or "utf-8", errors="replace")
            return FetchResult(
                url=url,
                final_url=str(response.url),
                body=body,
                status_code=response.status_code,
                content_type=response.headers.get("content-type"),
            )

    @staticmethod
    def _classify_connect_error(error: httpx.ConnectError) -> IngestError:
        """Tell a DNS failure apart from a refused connection."""
        msg_lower = str(error).lower()
        if any(kw in msg_lower for kw in _DNS_KEYWORDS):
            return DNSResolutionFailed()
        return ConnectionRefused()
