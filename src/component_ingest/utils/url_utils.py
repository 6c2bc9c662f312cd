"""URL manipulation utilities."""

from urllib.parse import urljoin, urlparse

from component_ingest.errors import InvalidURL


def validate_url(url: str) -> str:
    """Return ``url`` if it is a well-formed absolute http(s) URL."""
    try:
        parsed = urlparse(url.strip())
    except (AttributeError, ValueError) as e:
        raise InvalidURL(f"Could not parse URL: {url!r}") from e
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise InvalidURL(f"Not an absolute http(s) URL: {url!r}")
    return url.strip()


def get_host(url: str) -> str:
    """Extract the lower-cased host name from a URL."""
    return (urlparse(url).hostname or "").lower()


def host_matches(url: str, hosts: list[str]) -> bool:
    """Check if the URL host is one of ``hosts`` or a subdomain of one."""
    host = get_host(url)
    return any(host == h or host.endswith("." + h) for h in hosts)


def make_absolute(base_url: str, href: str) -> str:
    """Convert a potentially relative URL to absolute."""
    return urljoin(base_url, href)


def path_segments(url: str) -> list[str]:
    """Split the URL path into its non-empty segments."""
    return [segment for segment in urlparse(url).path.split("/") if segment]


def file_extension(path: str) -> str:
    """Return the text after the last dot of ``path`` (the whole name if none)."""
    return path.rsplit(".", 1)[-1]
