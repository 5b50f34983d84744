"""Pydantic request and response bodies for the host HTTP surface.

Binary content travels base64 encoded in JSON bodies.
"""

from __future__ import annotations

import base64
from typing import List, Optional

from pydantic import BaseModel, Field

from docassembly.models.results import AssembledResult, InterviewResult, NamedFile
from docassembly.models.settings import AssemblySettings, InterviewSettings
from docassembly.models.template import Template


def _b64(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


class AssembleRequest(BaseModel):
    template: Template
    answers: List[str] = Field(default_factory=list)
    settings: AssemblySettings = Field(default_factory=AssemblySettings)


class InterviewRequest(BaseModel):
    template: Template
    answers: List[str] = Field(default_factory=list)
    settings: InterviewSettings = Field(default_factory=InterviewSettings)


class ComponentInfoRequest(BaseModel):
    template: Template
    include_dialogs: bool = False


class InterviewDefinitionRequest(BaseModel):
    template: Template
    state: str = ""


class OverlayRequest(BaseModel):
    # Optional so a missing list reaches the service's parameter check
    sources: Optional[List[str]] = None


class OverlayResponse(BaseModel):
    answers: str


class FileBody(BaseModel):
    file_name: str
    content_base64: str

    @classmethod
    def from_file(cls, item: NamedFile) -> "FileBody":
        return cls(file_name=item.file_name, content_base64=_b64(item.content))


class DocumentBody(BaseModel):
    file_name: Optional[str] = None
    document_type: str
    content_base64: str


class PendingAssemblyBody(BaseModel):
    file_name: str
    location: str
    switches: str


class AssembleResponse(BaseModel):
    document: DocumentBody
    answers: Optional[str] = None
    pending_assemblies: List[PendingAssemblyBody] = Field(default_factory=list)
    supporting_files: List[FileBody] = Field(default_factory=list)
    unanswered_variables: List[str] = Field(default_factory=list)

    @classmethod
    def from_result(cls, result: AssembledResult) -> "AssembleResponse":
        return cls(
            document=DocumentBody(
                file_name=result.document.file_name,
                document_type=result.document.document_type.value,
                content_base64=_b64(result.document.content),
            ),
            answers=result.answers,
            pending_assemblies=[
                PendingAssemblyBody(
                    file_name=p.template.file_name,
                    location=p.template.location,
                    switches=p.switches,
                )
                for p in result.pending_assemblies
            ],
            supporting_files=[FileBody.from_file(f) for f in result.supporting_files],
            unanswered_variables=list(result.unanswered_variables),
        )


class InterviewResponse(BaseModel):
    markup: str
    image_url: str
    files: List[FileBody] = Field(default_factory=list)

    @classmethod
    def from_result(cls, result: InterviewResult) -> "InterviewResponse":
        return cls(
            markup=result.markup,
            image_url=result.image_url,
            files=[FileBody.from_file(f) for f in result.files],
        )


__all__ = [
    "AssembleRequest",
    "InterviewRequest",
    "ComponentInfoRequest",
    "InterviewDefinitionRequest",
    "OverlayRequest",
    "OverlayResponse",
    "AssembleResponse",
    "InterviewResponse",
    "DocumentBody",
    "FileBody",
    "PendingAssemblyBody",
]
