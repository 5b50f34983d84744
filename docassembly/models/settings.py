"""Caller-supplied settings for assembly and interview calls.

Behavioural toggles are tri-states: `True`, `False` or unset (`None`).
Only an explicit `True` switches the corresponding option on.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from docassembly.models.formats import DocumentType


class AssemblySettings(BaseModel):
    document_type: DocumentType = DocumentType.NATIVE
    use_markup_syntax: Optional[bool] = None


class InterviewSettings(BaseModel):
    disable_preview_button: Optional[bool] = None
    disable_save_answers_button: Optional[bool] = None
    exclude_state_from_output: Optional[bool] = None
    # Host endpoint serving interview images; engine output never embeds them
    image_url: str = ""
    marked_variables: List[str] = Field(default_factory=list)


__all__ = ["AssemblySettings", "InterviewSettings"]
