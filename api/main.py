import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from linkaudit.errors import LinkAuditError
from .middleware import RequestLoggingMiddleware
from .routes import router

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Link Audit",
    description=(
        "Given a batch of up to 20 URLs, resolves tracked redirect links to their final "
        "destination, reports broken outbound links, or flags duplicated SEO metadata."
    ),
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(RequestLoggingMiddleware)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "error": message})


@app.exception_handler(LinkAuditError)
async def link_audit_error_handler(request: Request, exc: LinkAuditError):
    logger.info("Rejected %s: %s", request.url.path, exc)
    return _error(400, str(exc))


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    if any("urls" in err.get("loc", ()) for err in errors):
        message = "Invalid URLs format"
    elif errors:
        first = errors[0]
        message = f"{'.'.join(str(part) for part in first.get('loc', ()))}: {first.get('msg')}"
    else:
        message = "Invalid request"
    logger.info("Rejected %s: %s", request.url.path, message)
    return _error(400, message)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error("Unhandled error: %s", exc, exc_info=True)
    return _error(500, "An unexpected error occurred.")


app.include_router(router)
