"""Format and option vocabularies shared by request encoding and response decoding.

`OutputFormat`, `AssemblyOptions` and `InterviewOptions` are flag sets: the
integer value is what travels on a request, the member name is the tag the
engine puts on each returned part. `DocumentType` is the caller-facing
selector for the primary output.
"""

from __future__ import annotations

from enum import Enum, Flag


class DocumentType(str, Enum):
    HFD = "HFD"
    HPD = "HPD"
    HTML = "HTML"
    HTML_DATA_URIS = "HTMLwDataURIs"
    MHTML = "MHTML"
    NATIVE = "Native"
    PDF = "PDF"
    PLAIN_TEXT = "PlainText"
    WORD_DOC = "WordDOC"
    WORD_DOCX = "WordDOCX"
    WORD_PERFECT = "WordPerfect"
    WORD_RTF = "WordRTF"
    XML = "XML"


class OutputFormat(Flag):
    NONE = 0
    ANSWERS = 1
    JPEG = 2
    PNG = 4
    DOCX = 8
    HTML = 16
    HTML_DATA_URIS = 32
    MHTML = 64
    NATIVE = 128
    PDF = 256
    PLAIN_TEXT = 512
    WPD = 1024
    RTF = 2048
    HFD = 4096
    HPD = 8192


class AssemblyOptions(Flag):
    NONE = 0
    MARKUP_VIEW = 1


class InterviewOptions(Flag):
    NONE = 0
    OMIT_IMAGES = 1
    NO_PREVIEW = 2
    NO_SAVE = 4
    EXCLUDE_STATE_FROM_OUTPUT = 8


def wire_tag(fmt: OutputFormat) -> str:
    """Return the part tag the engine uses for a single format member."""
    return fmt.name or ""


# Tag carried by a part that describes a sub-template still to be assembled
PENDING_ASSEMBLY_TAG = "PendingAssembly"

# Non-document part tags
ANSWERS_TAG = wire_tag(OutputFormat.ANSWERS)
IMAGE_TAGS = frozenset({wire_tag(OutputFormat.JPEG), wire_tag(OutputFormat.PNG)})

# File extension -> concrete type, used when the caller asked for Native output
EXTENSION_DOCUMENT_TYPES: dict[str, DocumentType] = {
    ".docx": DocumentType.WORD_DOCX,
    ".doc": DocumentType.WORD_DOC,
    ".rtf": DocumentType.WORD_RTF,
    ".wpd": DocumentType.WORD_PERFECT,
    ".pdf": DocumentType.PDF,
    ".htm": DocumentType.HTML,
    ".html": DocumentType.HTML,
    ".mht": DocumentType.MHTML,
    ".mhtml": DocumentType.MHTML,
    ".txt": DocumentType.PLAIN_TEXT,
    ".hfd": DocumentType.HFD,
    ".hpd": DocumentType.HPD,
    ".xml": DocumentType.XML,
}


__all__ = [
    "DocumentType",
    "OutputFormat",
    "AssemblyOptions",
    "InterviewOptions",
    "PENDING_ASSEMBLY_TAG",
    "ANSWERS_TAG",
    "IMAGE_TAGS",
    "EXTENSION_DOCUMENT_TYPES",
    "wire_tag",
]
