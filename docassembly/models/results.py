"""Typed results handed back to the host after an engine call."""

from __future__ import annotations

from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict

from docassembly.models.formats import DocumentType
from docassembly.models.template import Template


class NamedFile(BaseModel):
    model_config = ConfigDict(frozen=True)

    file_name: str
    content: bytes


class PendingAssembly(BaseModel):
    """A sub-template referenced by the assembled template, still to be assembled."""

    model_config = ConfigDict(frozen=True)

    template: Template
    switches: str = ""


class AssembledDocument(BaseModel):
    model_config = ConfigDict(frozen=True)

    content: bytes
    document_type: DocumentType
    file_name: Optional[str] = None


class AssembledResult(BaseModel):
    """Decoded outcome of one assembly call.

    `answers` is None when the engine returned no answer snapshot.
    """

    model_config = ConfigDict(frozen=True)

    document: AssembledDocument
    answers: Optional[str] = None
    pending_assemblies: Tuple[PendingAssembly, ...] = ()
    supporting_files: Tuple[NamedFile, ...] = ()
    unanswered_variables: Tuple[str, ...] = ()


class InterviewResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    markup: str
    image_url: str
    files: Tuple[NamedFile, ...] = ()


class VariableInfo(BaseModel):
    name: str
    type: str = "Text"


class DialogInfo(BaseModel):
    name: str
    items: list[str] = []


class ComponentInfo(BaseModel):
    variables: list[VariableInfo] = []
    dialogs: list[DialogInfo] = []


class InterviewDefinition(BaseModel):
    model_config = ConfigDict(frozen=True)

    file_name: str
    content: bytes
    media_type: str = "application/octet-stream"


__all__ = [
    "NamedFile",
    "PendingAssembly",
    "AssembledDocument",
    "AssembledResult",
    "InterviewResult",
    "VariableInfo",
    "DialogInfo",
    "ComponentInfo",
    "InterviewDefinition",
]
