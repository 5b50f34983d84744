"""Template metadata endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from docassembly.http.log_ref import get_log_ref
from docassembly.logic.assembly_service import AssemblyService
from docassembly.models.api import ComponentInfoRequest
from docassembly.models.results import ComponentInfo
from docassembly.routes.dependencies import get_service, resolve_template


router = APIRouter()


@router.post("/templates/components", summary="Describe template variables and dialogs", response_model=ComponentInfo)
def post_component_info(
    body: ComponentInfoRequest,
    log_ref: str = Depends(get_log_ref),
    service: AssemblyService = Depends(get_service),
) -> ComponentInfo:
    template = resolve_template(body.template, service.config)
    return service.get_component_info(log_ref, template, body.include_dialogs)


__all__ = ["router"]
