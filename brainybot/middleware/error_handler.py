"""Global exception handler: maps exceptions to structured JSON responses."""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException
from starlette.responses import JSONResponse

from brainybot.utils.errors import TutorError, UpstreamError

logger = logging.getLogger(__name__)


def _request_id(request: Request) -> str:
    return getattr(request.state, "request_id", "unknown")


def error_response(
    status: int, error_type: str, message: str, request_id: str, headers: dict | None = None,
) -> JSONResponse:
    return JSONResponse(
        status_code=status,
        headers=headers,
        content={
            "error": message,
            "type": error_type,
            "request_id": request_id,
        },
    )


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(RequestValidationError)
    async def validation_error(request: Request, exc: RequestValidationError):
        messages = "; ".join(
            f"{'.'.join(str(part) for part in e['loc'])}: {e['msg']}" for e in exc.errors()
        )
        return error_response(422, "validation_error", messages, _request_id(request))

    @app.exception_handler(HTTPException)
    async def http_error(request: Request, exc: HTTPException):
        type_map = {
            400: "invalid_request",
            401: "authentication_error",
            403: "forbidden",
            404: "not_found",
            405: "method_not_allowed",
        }
        error_type = type_map.get(exc.status_code, "http_error")
        return error_response(exc.status_code, error_type, exc.detail, _request_id(request), exc.headers)

    @app.exception_handler(TutorError)
    async def tutor_error(request: Request, exc: TutorError):
        if isinstance(exc, UpstreamError):
            logger.error("AI gateway error: status=%s detail=%s", exc.upstream_status, exc.detail)
        elif exc.status_code >= 500:
            logger.error("%s on %s %s: %s", exc.error_type, request.method, request.url.path, exc.message)
        return error_response(exc.status_code, exc.error_type, exc.message, _request_id(request))

    @app.exception_handler(Exception)
    async def unhandled_error(request: Request, exc: Exception):
        logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
        return error_response(500, "internal_error", "An unexpected error occurred", _request_id(request))
