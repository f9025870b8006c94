import logging
from typing import Optional, Union

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from linkaudit.core import fetch_url, fetch_urls
from linkaudit.errors import LinkAuditError
from linkaudit.urls import normalize
from .schemas import (
    DescriptionCheckResponse,
    ErrorResponse,
    FetchRequest,
    FetchResponse,
    HealthResponse,
    SeedResultSchema,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/api/fetch-urls",
    response_model=FetchResponse,
    response_model_exclude_none=True,
    responses={400: {"model": ErrorResponse}},
    summary="Analyse a batch of seed URLs",
)
async def fetch_urls_endpoint(request: FetchRequest) -> FetchResponse:
    """
    Runs one analysis per seed URL, all seeds concurrently.

    - `rt`: resolve every aka.ms / query.prod link to its final destination.
    - `broken`: resolve every link and return the broken ones.
    - `seo`: report duplicated metadata content.

    Invalid batches are rejected with 400 before any URL is fetched. Once the
    batch is accepted the response is always 200; per-seed failures are
    reported inside `results`.
    """
    results = await fetch_urls(request.urls, request.fetch_type)
    return FetchResponse(results=[SeedResultSchema(**result.to_dict()) for result in results])


@router.get(
    "/api/check-description",
    response_model=DescriptionCheckResponse,
    responses={400: {"model": ErrorResponse}},
    summary="Check a single URL for duplicated metadata",
)
async def check_description(url: Optional[str] = None) -> Union[DescriptionCheckResponse, JSONResponse]:
    if not url:
        raise LinkAuditError("URL parameter is required")
    normalize(url)  # raises MalformedUrl

    result = await fetch_url(url, "seo")
    if result.status == "error":
        logger.info("Description check failed for %s: %s", url, result.error)
        return JSONResponse(status_code=400, content={"success": False, "error": result.error})

    duplicates = result.duplicate_descriptions or []
    return DescriptionCheckResponse(has_duplicate_description=bool(duplicates), duplicates=duplicates)


@router.get("/health", response_model=HealthResponse, summary="Service health check")
async def health_check() -> HealthResponse:
    return HealthResponse(status="ok")
