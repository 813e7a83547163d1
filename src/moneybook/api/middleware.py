"""API error handling and content negotiation middleware.

Registers FastAPI exception handlers that convert domain exceptions into
standardised ``{"error": {"code": "...", "message": "..."}}`` JSON responses.

Status code mapping:
- ``DomainError`` subclasses → the status carried by the class
  (``NotModifiedError`` → 304 with an empty body)
- ``RequestValidationError`` → 400 Bad Request
- Any other ``Exception`` → 500 Internal Server Error
"""

import logging

from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from moneybook.api.schemas import ErrorDetail, ErrorResponse
from moneybook.domain.errors import DomainError, NotModifiedError

logger = logging.getLogger(__name__)

JSON_MEDIA_TYPE = "application/json"
ACCEPTABLE_MEDIA_RANGES = {JSON_MEDIA_TYPE, "application/*", "*/*"}


def error_response(status_code: int, code: str, message: str) -> JSONResponse:
    """Build a JSON response carrying the standard error envelope."""
    body = ErrorResponse(error=ErrorDetail(code=code, message=message))
    return JSONResponse(status_code=status_code, content=body.model_dump())


async def _handle_domain_error(request: Request, exc: DomainError) -> Response:
    """Render a domain error with the status its category carries."""
    if isinstance(exc, NotModifiedError):
        return Response(status_code=exc.status_code)
    if exc.status_code >= 500:
        logger.error("%s on %s %s: %s", exc.code, request.method, request.url.path, exc)
    else:
        logger.info("%s on %s %s: %s", exc.code, request.method, request.url.path, exc)
    return error_response(exc.status_code, exc.code, str(exc))


async def _handle_request_validation(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Return 400 for malformed bodies, path and query parameters."""
    problems = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        problems.append(f"{location}: {error.get('msg')}" if location else str(error.get("msg")))
    message = "; ".join(problems) or "Invalid request"
    logger.info("Validation error on %s %s: %s", request.method, request.url.path, message)
    return error_response(400, "VALIDATION_ERROR", message)


class CatchAllErrorMiddleware(BaseHTTPMiddleware):
    """ASGI middleware that catches any unhandled exception and returns a 500.

    Sits above the Starlette exception handler layer so that exceptions not
    caught by ``add_exception_handler`` still produce the standard envelope.
    """

    async def dispatch(self, request: Request, call_next):
        try:
            return await call_next(request)
        except Exception:
            logger.error(
                "Unhandled exception on %s %s",
                request.method,
                request.url.path,
                exc_info=True,
            )
            return error_response(500, "INTERNAL_ERROR", "Internal server error")


def _media_type(value: str) -> str:
    return value.split(";", 1)[0].strip().lower()


def _accepted_ranges(accept: str) -> set[str]:
    """Media ranges of an Accept header, minus those refused with ``q=0``."""
    ranges = set()
    for part in accept.split(","):
        media_range, *params = part.split(";")
        quality = 1.0
        for param in params:
            key, _, value = param.partition("=")
            if key.strip().lower() == "q":
                try:
                    quality = float(value.strip())
                except ValueError:
                    quality = 1.0
        if quality > 0:
            ranges.add(media_range.strip().lower())
    return ranges


class ContentNegotiationMiddleware(BaseHTTPMiddleware):
    """Reject requests whose body or accepted response is not JSON.

    Runs ahead of routing and business logic:
    - a ``Content-Type`` that is present and not ``application/json`` → 415
    - an ``Accept`` that admits no JSON media range → 406
    ``charset`` is ignored; a range refused with ``q=0`` does not count.
    """

    async def dispatch(self, request: Request, call_next):
        content_type = request.headers.get("content-type")
        if content_type is not None and content_type.strip():
            if _media_type(content_type) != JSON_MEDIA_TYPE:
                logger.info("Rejected Content-Type %r on %s", content_type, request.url.path)
                return error_response(
                    415,
                    "UNSUPPORTED_MEDIA_TYPE",
                    f"Content-Type must be {JSON_MEDIA_TYPE}",
                )

        accept = request.headers.get("accept")
        if accept is not None and accept.strip():
            if not _accepted_ranges(accept) & ACCEPTABLE_MEDIA_RANGES:
                logger.info("Rejected Accept %r on %s", accept, request.url.path)
                return error_response(
                    406,
                    "NOT_ACCEPTABLE",
                    f"This API only produces {JSON_MEDIA_TYPE}",
                )

        return await call_next(request)


def register_error_handlers(app: FastAPI) -> None:
    """Attach all exception handlers to the FastAPI application.

    Call this from ``create_app()`` after the other middleware so that the
    catch-all wraps them.
    """
    app.add_exception_handler(DomainError, _handle_domain_error)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, _handle_request_validation)  # type: ignore[arg-type]
    app.add_middleware(CatchAllErrorMiddleware)
