import re
from typing import Union
from urllib.parse import urlsplit, urlunsplit

from requests.utils import requote_uri

from .config import MAX_BATCH_SIZE, MIN_BATCH_SIZE
from .errors import BatchSizeError, InvalidFormat, LinkAuditError, MalformedUrl

# scheme, dotted host with a 2+ letter TLD, optional port, then path / query / fragment
_URL_PATTERN = re.compile(
    r"^https?://"
    r"([a-zA-Z0-9-]+\.)*[a-zA-Z0-9-]+\.[a-zA-Z]{2,}(:[0-9]+)?"
    r"(/[^?#]*)?"
    r"(\?[^#]*)?"
    r"(#.*)?$"
)

_DEFAULT_PORTS = {"http": 80, "https": 443}


def canonicalize(url: str) -> str:
    """
    Reduce an absolute http(s) URL to one canonical string.

    - lowercases scheme and host, drops default ports
    - empty path becomes "/"
    - percent-quotes unsafe characters the same way requests does
    Raises ValueError when there is no host or the port is not numeric.
    """
    parts = urlsplit(url)
    host = parts.hostname
    if not host:
        raise ValueError(f"no host in {url!r}")
    if ":" in host:
        host = f"[{host}]"  # IPv6 literal

    scheme = parts.scheme.lower()
    port = parts.port
    netloc = host if port is None or _DEFAULT_PORTS.get(scheme) == port else f"{host}:{port}"

    return requote_uri(urlunsplit((scheme, netloc, parts.path or "/", parts.query, parts.fragment)))


def normalize(raw: str) -> str:
    """Trim, default the scheme to https, and canonicalize. Idempotent."""
    entry = (raw or "").strip()
    url = entry
    if not url.lower().startswith(("http://", "https://")):
        url = "https://" + url
    try:
        return canonicalize(url)
    except ValueError:
        raise MalformedUrl(entry) from None


def _check_batch_size(urls: list[str]) -> None:
    if not MIN_BATCH_SIZE <= len(urls) <= MAX_BATCH_SIZE:
        raise BatchSizeError(f"Please enter between {MIN_BATCH_SIZE} and {MAX_BATCH_SIZE} URLs")


def validate_batch(urls: list[str]) -> None:
    _check_batch_size(urls)

    for url in urls:
        if not _URL_PATTERN.match(url):
            raise InvalidFormat(url)


def split_urls(urls: Union[list[str], str]) -> list[str]:
    """Accept a list or a newline separated string; trim entries and drop blanks."""
    if isinstance(urls, str):
        entries = urls.splitlines()
    elif isinstance(urls, list) and all(isinstance(u, str) for u in urls):
        entries = urls
    else:
        raise LinkAuditError("Invalid URLs format")
    return [u.strip() for u in entries if u and u.strip()]


def prepare_batch(urls: Union[list[str], str]) -> list[str]:
    """
    Turn caller input into the list of seeds to process, or raise.

    Normalization runs before the pattern check so scheme-less entries such
    as "example.com/page" are accepted. The returned entries are the trimmed
    inputs, not their normalized forms; the orchestrator normalizes again.
    """
    entries = split_urls(urls)
    _check_batch_size(entries)
    for entry in entries:
        # errors name the entry as typed, not its normalized form
        if not _URL_PATTERN.match(normalize(entry)):
            raise InvalidFormat(entry)
    return entries
