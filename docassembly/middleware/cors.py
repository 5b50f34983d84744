"""CORS configuration helpers.

Applies CORS for browser hosts and exposes the log reference header so
interview pages can correlate their calls.
"""

from __future__ import annotations

from typing import Iterable
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from docassembly.http.log_ref import LOG_REF_HEADER


EXPOSE_HEADERS: list[str] = [
    LOG_REF_HEADER,
    "Content-Disposition",
]


def apply_cors(app: FastAPI, *, origins: Iterable[str] | None = None) -> None:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(origins or ["*"]),
        allow_credentials=False,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
        expose_headers=EXPOSE_HEADERS,
    )


__all__ = ["apply_cors", "EXPOSE_HEADERS"]
