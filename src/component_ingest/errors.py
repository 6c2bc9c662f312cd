"""Error taxonomy shared by the pipeline stages and the HTTP service."""

from typing import Any


class IngestError(Exception):
    """Base class for every failure scoped to a single request."""

    status_code: int = 500
    title: str = "Internal error"

    def __init__(self, message: str | None = None, **extra: Any):
        self.message = message or self.title
        self.extra = extra
        super().__init__(self.message)

    def to_payload(self) -> dict[str, Any]:
        """Render the error as the JSON body returned to HTTP callers."""
        payload: dict[str, Any] = {
            "success": False,
            "error": self.title,
            "message": self.message,
        }
        payload.update(self.extra)
        return payload


# Input validation (400)


class InvalidURL(IngestError):
    status_code = 400
    title = "Invalid URL format"


class MissingFields(IngestError):
    status_code = 400
    title = "Missing required fields"

    def __init__(self, required: list[str], message: str | None = None):
        super().__init__(
            message or f"Required fields: {', '.join(required)}",
            required=required,
        )


class InvalidField(IngestError):
    status_code = 400
    title = "Invalid field value"


class InvalidComponentType(IngestError):
    status_code = 400
    title = "Invalid component type"

    def __init__(self, value: str, valid_types: list[str]):
        super().__init__(
            f"'{value}' is not a component type. Use one of: {', '.join(valid_types)}",
            validTypes=valid_types,
        )


class PluginsNotSupported(IngestError):
    status_code = 400
    title = "Plugins must be created manually in .claude-plugin/marketplace.json"

    def __init__(self) -> None:
        super().__init__(
            "Plugins are collections of other components, not individual files",
        )


# Network (mapped to specific status codes, never retried)


class DNSResolutionFailed(IngestError):
    status_code = 400
    title = "Could not resolve URL"

    def __init__(self, message: str | None = None):
        super().__init__(
            message or "The domain name could not be found. Please check the URL."
        )


class ConnectionRefused(IngestError):
    status_code = 400
    title = "Connection refused"

    def __init__(self, message: str | None = None):
        super().__init__(
            message or "Could not connect to the server. Please check the URL."
        )


class TooManyRedirects(IngestError):
    status_code = 400
    title = "Too many redirects"

    def __init__(self, message: str | None = None):
        super().__init__(
            message or "The URL redirects too many times. Please check the URL."
        )


class FetchTimeout(IngestError):
    status_code = 408
    title = "Request timeout"

    def __init__(self, message: str | None = None):
        super().__init__(
            message or "The request took too long. The website may be slow or unavailable."
        )


class ContentTooLarge(IngestError):
    status_code = 413
    title = "Content too large"

    def __init__(self, limit_bytes: int):
        super().__init__(
            "The page content is too large to scrape. Please try a different URL.",
            limitBytes=limit_bytes,
        )


_UPSTREAM_MESSAGES = {
    403: "Access forbidden. The website may require authentication or block scrapers.",
    404: "Page not found. Please check the URL.",
    429: "Rate limited. Please try again later.",
}


class UpstreamHTTPError(IngestError):
    """The fetched site answered with an error status."""

    title = "Failed to fetch URL"

    def __init__(self, upstream_status: int, reason: str = ""):
        if upstream_status >= 500:
            message = "Server error. The website may be temporarily unavailable."
        else:
            message = _UPSTREAM_MESSAGES.get(upstream_status) or reason or "Failed to fetch URL"
        super().__init__(message, status=upstream_status)
        self.upstream_status = upstream_status
        self.status_code = upstream_status if upstream_status < 500 else 500


# Catalog conflicts and tooling


class AlreadyExists(IngestError):
    status_code = 409
    title = "Component already exists"

    def __init__(self, path: str):
        super().__init__(f"A component already exists at {path}", path=path)
        self.path = path


class ScriptNotFound(IngestError):
    status_code = 404
    title = "Catalog generation script not found"

    def __init__(self, path: str):
        super().__init__(f"No generation script at {path}", path=path)


class RegenerationFailed(IngestError):
    status_code = 500
    title = "Failed to regenerate catalog"


class CatalogReadError(IngestError):
    status_code = 500
    title = "Failed to fetch categories"


# External AI provider


class GenerationUnavailable(IngestError):
    status_code = 500
    title = "ANTHROPIC_API_KEY not configured"

    def __init__(self) -> None:
        super().__init__("Please set ANTHROPIC_API_KEY in your environment variables")


class AuthenticationFailed(IngestError):
    status_code = 500
    title = "Anthropic API authentication failed"

    def __init__(self) -> None:
        super().__init__("Please check your ANTHROPIC_API_KEY")


class GenerationFailed(IngestError):
    status_code = 500
    title = "Failed to generate component"


class FetchFailed(IngestError):
    status_code = 500
    title = "Failed to scrape URL"
