from typing import Iterable, Optional

from .config import SHORTLINK_DOMAIN, TARGET_DOMAIN
from .models import LinkRecord, SeedResult


# Status classes used throughout reporting
STATUS_CLASSES = ("success", "redirect", "client_error", "not_found", "server_error", "connection_error")


def is_broken(record: LinkRecord) -> bool:
    """A link is broken when it errored, got no response, or answered >= 400."""
    return record.status_code >= 400 or bool(record.error) or record.status_code == 0


def classify_status(status_code: Optional[int]) -> str:
    """
    Bucket a status code for display:
      success | redirect | client_error | not_found | server_error | connection_error

    404 gets its own bucket ahead of the generic client errors.
    """
    if status_code == 404:
        return "not_found"
    if not status_code:
        return "connection_error"
    if status_code >= 500:
        return "server_error"
    if status_code >= 400:
        return "client_error"
    if status_code >= 300:
        return "redirect"
    return "success"


def count_tracked_redirects(
    results: Iterable[SeedResult],
    shortlink_domain: str = SHORTLINK_DOMAIN,
    target_domain: str = TARGET_DOMAIN,
) -> dict[str, int]:
    """
    Count rt-mode links that land on the target domain.

      shortlink_to_target: fetched link is on the shortlink domain and either
                            it or its destination is on the target domain
      direct_target:       target domain reached without a shortlink

    Failed seeds contribute nothing.
    """
    counts = {"shortlink_to_target": 0, "direct_target": 0}
    for result in results:
        if result.status == "error":
            continue
        fetched = result.fetched_urls or []
        destinations = result.destination_urls or []
        for i, fetched_url in enumerate(fetched):
            destination_url = destinations[i].destination_url if i < len(destinations) else ""
            on_target = target_domain in fetched_url or target_domain in destination_url
            if not on_target:
                continue
            if shortlink_domain in fetched_url:
                counts["shortlink_to_target"] += 1
            else:
                counts["direct_target"] += 1
    return counts


def count_red_links(results: Iterable[SeedResult]) -> int:
    """Failed seeds count once each; otherwise every broken link record counts."""
    total = 0
    for result in results:
        if result.status == "error":
            total += 1
            continue
        records = (result.destination_urls or []) + (result.broken_links or [])
        total += sum(1 for record in records if is_broken(record))
    return total
