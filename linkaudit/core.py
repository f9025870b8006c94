import asyncio
import logging
from concurrent.futures import Executor, ThreadPoolExecutor
from typing import Optional, Union

from .classifier import is_broken
from .config import MAX_CONCURRENT_REQUESTS
from .errors import LinkAuditError, MalformedUrl, SeedFetchError
from .extractor import find_duplicate_descriptions
from .fetcher import fetch_page, resolve
from .models import FETCH_TYPES, LinkRecord, SeedResult
from .parser import extract_all_links, extract_tracked_links
from .urls import normalize, prepare_batch

logger = logging.getLogger(__name__)


async def _resolve_link(link: str, limiter: Optional[asyncio.Semaphore], executor: Optional[Executor]) -> LinkRecord:
    try:
        outcome = await resolve(link, limiter=limiter, executor=executor)
    except Exception as exc:
        logger.error("Resolving %s failed unexpectedly: %s", link, exc, exc_info=True)
        return LinkRecord(original_url=link, destination_url="", status_code=0, error=str(exc))
    return LinkRecord.from_outcome(link, outcome)


async def _resolve_all(links: list[str], limiter, executor) -> list[LinkRecord]:
    # gather keeps argument order, so records line up with extraction order
    return list(await asyncio.gather(*(_resolve_link(link, limiter, executor) for link in links)))


async def fetch_url(
    url: str,
    fetch_type: str = "rt",
    limiter: Optional[asyncio.Semaphore] = None,
    executor: Optional[Executor] = None,
) -> SeedResult:
    """
    Run one seed URL through the pipeline for fetch_type.
    Returns a SeedResult and never raises; errors are captured in result.error.
    """
    if limiter is None:
        limiter = asyncio.Semaphore(MAX_CONCURRENT_REQUESTS)

    try:
        normalized = normalize(url)
        html, status_code, final_url = await fetch_page(normalized, limiter=limiter, executor=executor)
    except MalformedUrl as exc:
        return SeedResult.failed(url, fetch_type, str(exc))
    except SeedFetchError as exc:
        logger.warning("Seed fetch failed for %s: %s", url, exc)
        return SeedResult.failed(url, fetch_type, str(exc), status_code=exc.status_code)
    except Exception as exc:
        logger.error("Fetch failed for %s: %s", url, exc, exc_info=True)
        return SeedResult.failed(url, fetch_type, str(exc))

    result = SeedResult.empty(url, fetch_type, status_code=status_code)
    try:
        if fetch_type == "rt":
            links = extract_tracked_links(html, final_url)
            result.fetched_urls = links
            result.destination_urls = await _resolve_all(links, limiter, executor)

        elif fetch_type == "broken":
            links = extract_all_links(html, final_url)
            records = await _resolve_all(links, limiter, executor)
            result.total_links = len(links)
            result.broken_links = [record for record in records if is_broken(record)]

        elif fetch_type == "seo":
            result.duplicate_descriptions = find_duplicate_descriptions(html)

    except Exception as exc:
        logger.error("Processing failed for %s: %s", url, exc, exc_info=True)
        return SeedResult.failed(url, fetch_type, str(exc), status_code=status_code)

    return result


async def fetch_urls(urls: Union[list[str], str], fetch_type: str = "rt") -> list[SeedResult]:
    """
    Top-level entry point for a batch.

    Validates the whole batch first (LinkAuditError propagates before any
    network activity), then runs every seed concurrently. Results come back
    in input order; one seed failing never affects its siblings.
    """
    if fetch_type not in FETCH_TYPES:
        raise LinkAuditError(f"Unknown fetch type: {fetch_type}")

    seeds = prepare_batch(urls)
    logger.info("Processing %d seed URL(s) in %s mode", len(seeds), fetch_type)

    # one bounded pool per batch: the semaphore caps in-flight requests and the
    # executor has as many threads; a slot is only freed when its thread is, so an
    # admitted request always finds a free thread
    limiter = asyncio.Semaphore(MAX_CONCURRENT_REQUESTS)
    executor = ThreadPoolExecutor(max_workers=MAX_CONCURRENT_REQUESTS, thread_name_prefix="linkaudit")
    try:
        results = await asyncio.gather(
            *(fetch_url(seed, fetch_type, limiter=limiter, executor=executor) for seed in seeds)
        )
    finally:
        # timed-out requests may still be running in their threads; don't block on them
        executor.shutdown(wait=False)

    return list(results)
