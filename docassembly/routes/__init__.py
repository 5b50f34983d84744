"""APIRouter registration for the assembly adapter."""

from __future__ import annotations

from fastapi import APIRouter

from docassembly.routes.answers import router as answers_router
from docassembly.routes.assemblies import router as assemblies_router
from docassembly.routes.interviews import router as interviews_router
from docassembly.routes.templates import router as templates_router

api_router = APIRouter()
api_router.include_router(assemblies_router, tags=["Assembly"])
api_router.include_router(interviews_router, tags=["Interview"])
api_router.include_router(templates_router, tags=["Templates"])
api_router.include_router(answers_router, tags=["Answers"])

__all__ = ["api_router"]
