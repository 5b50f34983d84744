"""Answer overlay endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from docassembly.http.log_ref import get_log_ref
from docassembly.logic.assembly_service import AssemblyService
from docassembly.models.api import OverlayRequest, OverlayResponse
from docassembly.routes.dependencies import get_service


router = APIRouter()


@router.post("/answers/overlay", summary="Consolidate answer sources", response_model=OverlayResponse)
def post_answer_overlay(
    body: OverlayRequest,
    log_ref: str = Depends(get_log_ref),
    service: AssemblyService = Depends(get_service),
) -> OverlayResponse:
    return OverlayResponse(answers=service.get_answers(log_ref, body.sources))


__all__ = ["router"]
