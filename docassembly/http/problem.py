"""Problem+JSON utilities and global exception handlers.

Defines the RFC7807 media type and handler callables that turn adapter
errors, request validation failures and unexpected exceptions into
application/problem+json responses.
"""

from __future__ import annotations

import logging

from fastapi import HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from docassembly.http.error_mapping import lookup_error
from docassembly.logic.errors import AssemblyAdapterError, AnswerSourceDecodeError, CallerContractError

PROBLEM_MEDIA_TYPE = "application/problem+json"

logger = logging.getLogger(__name__)


async def handle_adapter_error(request: Request, exc: AssemblyAdapterError) -> JSONResponse:  # noqa: D401
    entry = lookup_error(exc)
    status = int(entry["status"])
    problem: dict = {
        "title": entry["title"],
        "status": status,
        "detail": str(exc),
        "code": entry["code"],
    }
    if isinstance(exc, CallerContractError):
        problem["parameter"] = exc.parameter
    if isinstance(exc, AnswerSourceDecodeError):
        problem["position"] = exc.position
    if status >= 500:
        logger.error("error_handler.handle", extra={"code": entry["code"]}, exc_info=exc)
    else:
        logger.info("error_handler.handle", extra={"code": entry["code"]})
    return JSONResponse(problem, status_code=status, media_type=PROBLEM_MEDIA_TYPE)


async def handle_http_exception(request: Request, exc: HTTPException) -> JSONResponse:  # noqa: D401
    if isinstance(exc.detail, dict):
        detail = exc.detail
    else:
        detail = {"title": "Error", "status": int(exc.status_code), "detail": str(exc.detail or "")}
    return JSONResponse(
        detail,
        status_code=int(exc.status_code),
        media_type=PROBLEM_MEDIA_TYPE,
        headers=dict(exc.headers) if exc.headers else None,
    )


async def handle_request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:  # noqa: D401
    problem = {
        "title": "Invalid Request",
        "status": 422,
        "detail": "Request validation failed",
        "code": "PRE_REQUEST_INVALID",
        "errors": [
            {"loc": list(err.get("loc", ())), "msg": str(err.get("msg", "")), "type": str(err.get("type", ""))}
            for err in exc.errors()
        ],
    }
    return JSONResponse(problem, status_code=422, media_type=PROBLEM_MEDIA_TYPE)


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:  # noqa: D401
    logger.error("unexpected_error", exc_info=exc)
    return JSONResponse({"title": "Internal Server Error", "status": 500}, status_code=500, media_type=PROBLEM_MEDIA_TYPE)


__all__ = [
    "PROBLEM_MEDIA_TYPE",
    "handle_adapter_error",
    "handle_http_exception",
    "handle_request_validation_error",
    "handle_unexpected_error",
]
