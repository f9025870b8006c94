from .core import fetch_url, fetch_urls
from .fetcher import fetch_page, resolve
from .parser import extract_links
from .extractor import find_duplicate_descriptions
from .urls import normalize, validate_batch
from .models import LinkRecord, ResolutionOutcome, SeedResult

__all__ = [
    "fetch_url",
    "fetch_urls",
    "fetch_page",
    "resolve",
    "extract_links",
    "find_duplicate_descriptions",
    "normalize",
    "validate_batch",
    "LinkRecord",
    "ResolutionOutcome",
    "SeedResult",
]
