"""Document assembly endpoint.

Assembles a template through the engine and returns the decoded result.
A call that produced no primary document answers 204 No Content.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Response

from docassembly.http.log_ref import get_log_ref
from docassembly.logic.assembly_service import AssemblyService
from docassembly.models.api import AssembleRequest, AssembleResponse
from docassembly.routes.dependencies import get_service, resolve_template


router = APIRouter()
logger = logging.getLogger(__name__)


@router.post(
    "/assemblies",
    summary="Assemble a document",
    response_model=AssembleResponse,
    responses={204: {"description": "Nothing was assembled"}},
)
def post_assembly(
    body: AssembleRequest,
    log_ref: str = Depends(get_log_ref),
    service: AssemblyService = Depends(get_service),
):
    template = resolve_template(body.template, service.config)
    result = service.assemble_document(log_ref, template, body.answers, body.settings)
    if result is None:
        logger.info("assembly.empty", extra={"log_ref": log_ref})
        return Response(status_code=204)
    return AssembleResponse.from_result(result)


__all__ = ["router"]
