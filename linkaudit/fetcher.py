import asyncio
import logging
import threading
import time
from concurrent.futures import Executor
from typing import Optional

import requests

from .config import MAX_CONTENT_BYTES, MAX_REDIRECTS, REQUEST_TIMEOUT, USER_AGENT
from .errors import LinkResolutionError, SeedFetchError
from .models import ResolutionOutcome

logger = logging.getLogger(__name__)

TIMEOUT_STATUS = 408
TIMEOUT_MESSAGE = "Request timed out"
NETWORK_ERROR_MESSAGE = "Network error or CORS restriction"

# canned messages for the status codes people ask about most
_STATUS_ERRORS = {
    403: "Access Forbidden",
    404: "Not Found",
    500: "Server Error",
    408: "Request Timeout",
}

_HEADERS = {
    "User-Agent": USER_AGENT,
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.5",
}

# one Session per worker thread so links on the same host reuse connections
_local = threading.local()


def _session() -> requests.Session:
    session = getattr(_local, "session", None)
    if session is None:
        session = requests.Session()
        session.max_redirects = MAX_REDIRECTS
        session.headers.update(_HEADERS)
        _local.session = session
    return session


def _read_body(response: requests.Response, deadline: float) -> str:
    """Read at most MAX_CONTENT_BYTES, giving up once the wall-clock deadline passes."""
    chunks = []
    size = 0
    for chunk in response.iter_content(chunk_size=64 * 1024):
        if time.monotonic() > deadline:
            raise requests.exceptions.ReadTimeout(f"body of {response.url} not received in time")
        chunks.append(chunk)
        size += len(chunk)
        if size >= MAX_CONTENT_BYTES:
            break
    content = b"".join(chunks)[:MAX_CONTENT_BYTES]
    try:
        return content.decode(response.encoding or "utf-8", errors="replace")
    except LookupError:
        return content.decode("utf-8", errors="replace")


def _sync_get(url: str, read_body: bool = True) -> tuple[str, int, str]:
    """
    Synchronous GET using requests, run inside a thread executor.
    Redirects are followed transport-side; returns (body, status_code, final_url).
    The body is skipped entirely when read_body is False.
    """
    deadline = time.monotonic() + REQUEST_TIMEOUT
    response = _session().get(url, timeout=REQUEST_TIMEOUT, allow_redirects=True, stream=True)
    try:
        body = _read_body(response, deadline) if read_body else ""
        return body, response.status_code, response.url
    finally:
        response.close()


def _release_when_done(future: asyncio.Future, limiter: asyncio.Semaphore) -> None:
    def _done(fut: asyncio.Future) -> None:
        limiter.release()
        if not fut.cancelled():
            fut.exception()  # already reported to the caller, or abandoned after a timeout

    future.add_done_callback(_done)


async def _request(
    url: str,
    read_body: bool,
    limiter: Optional[asyncio.Semaphore] = None,
    executor: Optional[Executor] = None,
) -> tuple[str, int, str]:
    """
    Run one outbound request with its own deadline.

    The deadline starts once a slot in the limiter is acquired, so queueing
    behind other requests of the same batch never counts against it. The slot
    is held until the worker thread really finishes, even after the caller
    has given up on it, so a slot always means a free thread.
    Raises LinkResolutionError when no HTTP response was obtained.
    """
    loop = asyncio.get_running_loop()
    if limiter is not None:
        await limiter.acquire()
    try:
        future = loop.run_in_executor(executor, _sync_get, url, read_body)
    except BaseException:
        if limiter is not None:
            limiter.release()
        raise
    if limiter is not None:
        _release_when_done(future, limiter)

    try:
        return await asyncio.wait_for(asyncio.shield(future), timeout=REQUEST_TIMEOUT)
    except (asyncio.TimeoutError, requests.exceptions.Timeout):
        raise LinkResolutionError(TIMEOUT_MESSAGE, status_code=TIMEOUT_STATUS) from None
    except requests.exceptions.ConnectionError as exc:
        logger.debug("Connection failed for %s: %s", url, exc)
        raise LinkResolutionError(NETWORK_ERROR_MESSAGE) from exc
    except (requests.exceptions.RequestException, ValueError) as exc:
        # ValueError: urllib rejecting a malformed redirect Location
        raise LinkResolutionError(str(exc) or NETWORK_ERROR_MESSAGE) from exc


def classify_response(status_code: int) -> Optional[str]:
    """Error text for a received response, or None for 2xx."""
    if status_code in _STATUS_ERRORS:
        return _STATUS_ERRORS[status_code]
    if not 200 <= status_code < 300:
        return f"HTTP Error {status_code}"
    return None


async def resolve(
    url: str,
    limiter: Optional[asyncio.Semaphore] = None,
    executor: Optional[Executor] = None,
) -> ResolutionOutcome:
    """
    Follow a link to the end of its redirect chain and classify the outcome.
    One attempt, no retries. Request failures are reported, never raised.
    """
    try:
        _, status_code, final_url = await _request(url, read_body=False, limiter=limiter, executor=executor)
    except LinkResolutionError as exc:
        logger.info("Could not resolve %s: %s", url, exc)
        return ResolutionOutcome(url=url, status_code=exc.status_code, ok=False, error=str(exc))

    error = classify_response(status_code)
    return ResolutionOutcome(url=final_url, status_code=status_code, ok=error is None, error=error)


async def fetch_page(
    url: str,
    limiter: Optional[asyncio.Semaphore] = None,
    executor: Optional[Executor] = None,
) -> tuple[str, int, str]:
    """
    Fetch the HTML content of a seed URL asynchronously.

    Uses requests in a thread executor to stay non-blocking inside the event loop.
    Returns (html_content, status_code, final_url); raises SeedFetchError when the
    page is unreachable or answers with a non-2xx status.
    """
    try:
        html, status_code, final_url = await _request(url, read_body=True, limiter=limiter, executor=executor)
    except LinkResolutionError as exc:
        raise SeedFetchError(str(exc), status_code=exc.status_code) from exc

    if status_code == 403:
        raise SeedFetchError(
            "Access Forbidden - Consider authentication or checking access permissions",
            status_code=status_code,
        )
    if not 200 <= status_code < 300:
        raise SeedFetchError(f"HTTP error! status: {status_code}", status_code=status_code)

    return html, status_code, final_url
