"""Decoding of tagged engine parts into typed results.

Pure logic: no FastAPI or HTTP client imports. The decoder consumes the
ordered part sequence of one call exactly once.

Part kinds, by tag:
- `PendingAssembly`: a sub-template still to be assembled (zero or more)
- `ANSWERS`: the updated answer snapshot (zero or one)
- `JPEG` / `PNG`: supporting images (zero or more)
- anything else: the primary document (exactly one expected)
"""

from __future__ import annotations

import logging
import posixpath
import re
from typing import Iterable, List, Optional, Sequence, TypeVar

from docassembly.logic.errors import EngineResponseError
from docassembly.logic.text_encoding import decode_text
from docassembly.models.formats import (
    ANSWERS_TAG,
    EXTENSION_DOCUMENT_TYPES,
    IMAGE_TAGS,
    PENDING_ASSEMBLY_TAG,
    DocumentType,
    OutputFormat,
    wire_tag,
)
from docassembly.models.results import (
    AssembledDocument,
    AssembledResult,
    InterviewResult,
    NamedFile,
    PendingAssembly,
)
from docassembly.models.template import Template
from docassembly.models.wire import TaggedPart


logger = logging.getLogger(__name__)

T = TypeVar("T")


def _prefer_later_part(previous: Optional[T], current: T, kind: str) -> T:
    """Single decision point for duplicate answers/document parts: last one wins."""
    if previous is not None:
        logger.warning("assembly.decode.duplicate_part", extra={"kind": kind})
    return current


def _bare_file_name(name: str | None) -> str:
    return re.split(r"[\\/]", name or "")[-1]


def resolve_native_type(file_name: str | None) -> DocumentType:
    """Return the concrete document type implied by a file name extension.

    Unknown or missing extensions keep NATIVE.
    """
    ext = posixpath.splitext(_bare_file_name(file_name))[1].lower()
    return EXTENSION_DOCUMENT_TYPES.get(ext, DocumentType.NATIVE)


def _decode_answers(part: TaggedPart) -> str:
    try:
        return decode_text(part.data)
    except UnicodeDecodeError as exc:
        raise EngineResponseError(f"answers part is not valid text: {exc}") from exc


def decode_assembly(
    template: Template,
    parts: Iterable[TaggedPart],
    requested_type: DocumentType,
    unanswered_variables: Sequence[str] = (),
) -> AssembledResult | None:
    """Decode one assembly response.

    Returns None when no primary document part is present; that means
    nothing was assembled, which is not the same as an empty document.
    """
    pending: List[PendingAssembly] = []
    images: List[NamedFile] = []
    answers: Optional[str] = None
    document: Optional[AssembledDocument] = None

    for part in parts:
        tag = part.format
        if tag == PENDING_ASSEMBLY_TAG:
            name = _bare_file_name(part.file_name)
            if not name:
                raise EngineResponseError("pending assembly part has no template file name")
            sub_template = Template(file_name=name, location=template.location, switches=part.switches)
            pending.append(PendingAssembly(template=sub_template, switches=part.switches))
        elif tag == ANSWERS_TAG:
            answers = _prefer_later_part(answers, _decode_answers(part), "answers")
        elif tag in IMAGE_TAGS:
            images.append(NamedFile(file_name=part.file_name or "", content=part.data))
        else:
            doc_type = requested_type
            if requested_type == DocumentType.NATIVE:
                doc_type = resolve_native_type(part.file_name)
            current = AssembledDocument(content=part.data, document_type=doc_type, file_name=part.file_name)
            document = _prefer_later_part(document, current, "document")

    if document is None:
        logger.info(
            "assembly.decode.no_document",
            extra={"template": template.file_name, "pending": len(pending), "images": len(images)},
        )
        return None

    return AssembledResult(
        document=document,
        answers=answers,
        pending_assemblies=tuple(pending),
        supporting_files=tuple(images),
        unanswered_variables=tuple(unanswered_variables),
    )


def decode_interview(parts: Iterable[TaggedPart], image_url: str) -> InterviewResult:
    """Split an interview response into its markup and supporting files."""
    markup: Optional[str] = None
    files: List[NamedFile] = []
    for part in parts:
        if markup is None and part.format == wire_tag(OutputFormat.HTML):
            try:
                markup = decode_text(part.data)
            except UnicodeDecodeError as exc:
                raise EngineResponseError(f"interview markup is not valid text: {exc}") from exc
        elif part.file_name:
            files.append(NamedFile(file_name=part.file_name, content=part.data))
    if markup is None:
        raise EngineResponseError("interview response carried no HTML markup part")
    return InterviewResult(markup=markup, image_url=image_url, files=tuple(files))


__all__ = ["decode_assembly", "decode_interview", "resolve_native_type"]
