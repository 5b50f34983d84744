from __future__ import annotations

import logging

from fastapi import FastAPI, HTTPException
from fastapi.exceptions import RequestValidationError

from docassembly.http.log_ref import LogRefMiddleware
from docassembly.http.problem import (
    handle_adapter_error,
    handle_http_exception,
    handle_request_validation_error,
    handle_unexpected_error,
)
from docassembly.logging_setup import configure_logging
from docassembly.logic.errors import AssemblyAdapterError
from docassembly.middleware.cors import apply_cors
from docassembly.routes import api_router

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    """Build the FastAPI application exposing the adapter to hosts."""
    configure_logging()
    app = FastAPI(title="Document Assembly Adapter")
    app.add_exception_handler(AssemblyAdapterError, handle_adapter_error)
    app.add_exception_handler(HTTPException, handle_http_exception)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)
    apply_cors(app)
    # Added last so it wraps the CORS layer and every routed response
    app.add_middleware(LogRefMiddleware)

    app.include_router(api_router, prefix="/api/v1")

    @app.get("/health")
    def health() -> dict:  # pragma: no cover - trivial
        return {"status": "ok"}

    logger.info("app.created routes=%s", len(app.routes))
    return app


# Intentionally do not instantiate the app at import time to prevent side effects.
