class LinkAuditError(ValueError):
    """Input rejected before any network activity. Surfaced as HTTP 400."""


class BatchSizeError(LinkAuditError):
    pass


class InvalidFormat(LinkAuditError):
    def __init__(self, url: str):
        self.url = url
        super().__init__(f"Invalid URL format: {url}")


class MalformedUrl(InvalidFormat):
    """Raised by normalize() when the input cannot be turned into an absolute URL."""


class SeedFetchError(Exception):
    """The seed page itself could not be fetched or returned non-2xx."""

    def __init__(self, message: str, status_code: int = 0):
        self.status_code = status_code
        super().__init__(message)


class LinkResolutionError(Exception):
    """A single outbound request got no usable HTTP response (timeout, network failure)."""

    def __init__(self, message: str, status_code: int = 0):
        self.status_code = status_code
        super().__init__(message)
