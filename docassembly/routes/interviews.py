"""Interview endpoints: interview markup and interview definition files."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response

from docassembly.http.log_ref import get_log_ref
from docassembly.logic.assembly_service import AssemblyService
from docassembly.models.api import InterviewDefinitionRequest, InterviewRequest, InterviewResponse
from docassembly.routes.dependencies import get_service, resolve_template


router = APIRouter()


@router.post("/interviews", summary="Fetch interview markup", response_model=InterviewResponse)
def post_interview(
    body: InterviewRequest,
    log_ref: str = Depends(get_log_ref),
    service: AssemblyService = Depends(get_service),
) -> InterviewResponse:
    template = resolve_template(body.template, service.config)
    result = service.get_interview(log_ref, template, body.answers, body.settings)
    return InterviewResponse.from_result(result)


@router.post("/interviews/definition", summary="Fetch an interview definition file")
def post_interview_definition(
    body: InterviewDefinitionRequest,
    log_ref: str = Depends(get_log_ref),
    service: AssemblyService = Depends(get_service),
) -> Response:
    template = resolve_template(body.template, service.config)
    definition = service.get_interview_definition(log_ref, template, body.state)
    return Response(
        content=definition.content,
        media_type=definition.media_type,
        headers={"Content-Disposition": f'inline; filename="{definition.file_name}"'},
    )


__all__ = ["router"]
