"""Request flag encoding (pure, no transport imports).

Maps a document type selector and tri-state settings onto the flag sets the
engine expects. Every function here is total: unmapped input falls back to a
documented default instead of raising.
"""

from __future__ import annotations

from urllib.parse import quote

from docassembly.models.formats import (
    AssemblyOptions,
    DocumentType,
    InterviewOptions,
    OutputFormat,
)
from docassembly.models.settings import AssemblySettings, InterviewSettings


# XML has no wire format; the engine only ever returns answers for it.
_DOCUMENT_FORMATS: dict[DocumentType, OutputFormat] = {
    DocumentType.HFD: OutputFormat.HFD,
    DocumentType.HPD: OutputFormat.HPD,
    DocumentType.HTML: OutputFormat.HTML,
    DocumentType.HTML_DATA_URIS: OutputFormat.HTML_DATA_URIS,
    DocumentType.MHTML: OutputFormat.MHTML,
    DocumentType.NATIVE: OutputFormat.NATIVE,
    DocumentType.PDF: OutputFormat.PDF,
    DocumentType.PLAIN_TEXT: OutputFormat.PLAIN_TEXT,
    DocumentType.WORD_DOC: OutputFormat.DOCX,
    DocumentType.WORD_DOCX: OutputFormat.DOCX,
    DocumentType.WORD_PERFECT: OutputFormat.WPD,
    DocumentType.WORD_RTF: OutputFormat.RTF,
    DocumentType.XML: OutputFormat.NONE,
}

IMAGE_MARKER = "img="


def encode_output_format(document_type: DocumentType | str | None) -> OutputFormat:
    """Return the requested document format unioned with ANSWERS.

    Unknown selectors map to NONE, so the result is then ANSWERS alone.
    """
    try:
        selector = DocumentType(document_type) if document_type is not None else None
    except ValueError:
        selector = None
    return _DOCUMENT_FORMATS.get(selector, OutputFormat.NONE) | OutputFormat.ANSWERS


def encode_assembly_options(settings: AssemblySettings) -> AssemblyOptions:
    options = AssemblyOptions.NONE
    if settings.use_markup_syntax is True:
        options |= AssemblyOptions.MARKUP_VIEW
    return options


def encode_interview_options(settings: InterviewSettings) -> InterviewOptions:
    """Build interview toggles; images are always served by the host."""
    options = InterviewOptions.OMIT_IMAGES
    if settings.disable_preview_button is True:
        options |= InterviewOptions.NO_PREVIEW
    if settings.disable_save_answers_button is True:
        options |= InterviewOptions.NO_SAVE
    if settings.exclude_state_from_output is True:
        options |= InterviewOptions.EXCLUDE_STATE_FROM_OUTPUT
    return options


def interview_image_url(image_url: str, template_locator: str) -> str:
    """Return the image query prefix embedded into interview markup.

    The interview appends the image file name after the trailing `img=`.
    """
    separator = "&" if "?" in image_url else "?"
    return f"{image_url}{separator}loc={quote(template_locator, safe='')}&{IMAGE_MARKER}"


__all__ = [
    "encode_output_format",
    "encode_assembly_options",
    "encode_interview_options",
    "interview_image_url",
    "IMAGE_MARKER",
]
