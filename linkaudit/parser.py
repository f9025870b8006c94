import logging
from typing import Iterable, Iterator, Optional
from urllib.parse import urljoin

from bs4 import BeautifulSoup, SoupStrainer

from .config import TRACKED_DOMAINS
from .urls import canonicalize

logger = logging.getLogger(__name__)

# only <a href> tags matter for link extraction
_ANCHOR_STRAINER = SoupStrainer("a", href=True)

_SKIPPED_PREFIXES = ("#", "javascript:")


def get_meta(soup: BeautifulSoup, name: str = None, prop: str = None) -> Optional[str]:
    """Pull content from a <meta> tag by name or property attribute."""
    tag = None
    if name:
        tag = soup.find("meta", attrs={"name": name})
    if not tag and prop:
        tag = soup.find("meta", attrs={"property": prop})
    if tag:
        return (tag.get("content") or "").strip() or None
    return None


def _iter_hrefs(html: str) -> Iterator[str]:
    soup = BeautifulSoup(html or "", "lxml", parse_only=_ANCHOR_STRAINER)
    for anchor in soup.find_all("a", href=True):
        href = (anchor.get("href") or "").strip()
        if href and not href.lower().startswith(_SKIPPED_PREFIXES):
            yield href


def _resolve_href(href: str, base_url: str) -> Optional[str]:
    """Absolute canonical form of href, or None when it is not a fetchable http(s) URL."""
    try:
        absolute = urljoin(base_url, href)
        if not absolute.lower().startswith(("http://", "https://")):
            return None
        return canonicalize(absolute)
    except ValueError:
        logger.debug("Dropping unresolvable href %r on %s", href, base_url)
        return None


def extract_links(html: str, base_url: str, allowlist: Optional[Iterable[str]] = None) -> list[str]:
    """
    Every anchor's href resolved against base_url, in document order, each URL once.

    Fragment-only and javascript: hrefs are skipped, as are hrefs that fail to
    resolve. With an allowlist, only URLs containing one of its substrings survive.
    """
    allowed = tuple(allowlist) if allowlist is not None else None

    # dict keys keep first-seen order
    links: dict[str, None] = {}
    for href in _iter_hrefs(html):
        url = _resolve_href(href, base_url)
        if url is None:
            continue
        if allowed is not None and not any(fragment in url for fragment in allowed):
            continue
        links.setdefault(url, None)
    return list(links)


def extract_all_links(html: str, base_url: str) -> list[str]:
    return extract_links(html, base_url)


def extract_tracked_links(html: str, base_url: str, domains: Iterable[str] = TRACKED_DOMAINS) -> list[str]:
    """Links pointing at one of the tracked redirect domains (rt mode)."""
    return extract_links(html, base_url, allowlist=domains)
