from dataclasses import asdict, dataclass, field
from typing import Optional


FETCH_TYPES = ("rt", "broken", "seo")


@dataclass
class ResolutionOutcome:
    url: str                            # final URL after transport-side redirects
    status_code: int                    # 0 when no response was received
    ok: bool = False
    error: Optional[str] = None


@dataclass
class LinkRecord:
    original_url: str
    destination_url: str
    status_code: int
    error: Optional[str] = None
    redirected: bool = False

    @classmethod
    def from_outcome(cls, link: str, outcome: ResolutionOutcome) -> "LinkRecord":
        return cls(
            original_url=link,
            destination_url=outcome.url,
            status_code=outcome.status_code,
            error=outcome.error,
            redirected=outcome.url != link,
        )


@dataclass
class SeedResult:
    source_url: str                     # as supplied by the caller
    fetch_type: str                     # rt | broken | seo
    status: str = "success"             # success | error
    status_code: int = 0                # status of the seed page fetch itself

    # rt mode
    fetched_urls: Optional[list[str]] = None
    destination_urls: Optional[list[LinkRecord]] = None

    # broken mode
    total_links: Optional[int] = None
    broken_links: Optional[list[LinkRecord]] = None

    # seo mode
    duplicate_descriptions: Optional[list[str]] = None

    # error info (populated only when the seed page could not be fetched)
    error: Optional[str] = None

    @classmethod
    def empty(cls, source_url: str, fetch_type: str, **kwargs) -> "SeedResult":
        """A result carrying the empty payload for its mode."""
        result = cls(source_url=source_url, fetch_type=fetch_type, **kwargs)
        if fetch_type == "rt":
            result.fetched_urls = []
            result.destination_urls = []
        elif fetch_type == "broken":
            result.total_links = 0
            result.broken_links = []
        elif fetch_type == "seo":
            result.duplicate_descriptions = []
        return result

    @classmethod
    def failed(cls, source_url: str, fetch_type: str, error: str, status_code: int = 0) -> "SeedResult":
        return cls.empty(source_url, fetch_type, status="error", status_code=status_code, error=error)

    def to_dict(self) -> dict:
        return asdict(self)
