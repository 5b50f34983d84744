"""Answer overlay: merge several answer sources into one answer set.

Each source is either answer-set XML or an encoded interview submission
(base64 of the answer-set XML). Sources are normalized independently and
then applied in order; a later source overwrites same-named answers and adds
new ones, and answers found only in earlier sources are kept.

Canonical form::

    <?xml version="1.0" encoding="utf-8" standalone="yes"?>
    <AnswerSet title="" version="1.1"><Answer name="...">...</Answer></AnswerSet>
"""

from __future__ import annotations

import base64
import binascii
import copy
import logging
import xml.etree.ElementTree as ET
from typing import Dict, List, Optional, Sequence

from docassembly.logic.errors import AnswerSourceDecodeError, CallerContractError


logger = logging.getLogger(__name__)

ROOT_TAG = "AnswerSet"
ANSWER_TAG = "Answer"
XML_DECLARATION = '<?xml version="1.0" encoding="utf-8" standalone="yes"?>\n'
DEFAULT_VERSION = "1.1"


class AnswerCollection:
    """Ordered name -> answer element mapping with answer-set attributes."""

    def __init__(self, title: Optional[str] = None, version: Optional[str] = None) -> None:
        self.title = title
        self.version = version
        self._answers: Dict[str, ET.Element] = {}

    def __len__(self) -> int:
        return len(self._answers)

    def names(self) -> List[str]:
        return list(self._answers)

    def set(self, element: ET.Element) -> None:
        self._answers[element.get("name", "")] = element

    def value_of(self, name: str) -> Optional[str]:
        """Return the text of the answer's value element, or None when absent."""
        element = self._answers.get(name)
        if element is None or len(element) == 0:
            return None
        return "".join(element[0].itertext())

    def update(self, other: "AnswerCollection") -> None:
        if other.title is not None:
            self.title = other.title
        if other.version is not None:
            self.version = other.version
        for element in other._answers.values():
            self.set(element)

    def to_xml(self) -> str:
        root = ET.Element(ROOT_TAG, {"title": self.title or "", "version": self.version or DEFAULT_VERSION})
        for element in self._answers.values():
            item = copy.deepcopy(element)
            item.tail = None
            root.append(item)
        return XML_DECLARATION + ET.tostring(root, encoding="unicode")


def _source_document(text: str, position: int) -> str | bytes:
    stripped = text.strip().lstrip("\ufeff").strip()
    if stripped.startswith("<"):
        return stripped
    # Interview submissions arrive base64 encoded
    try:
        return base64.b64decode("".join(stripped.split()), validate=True)
    except (binascii.Error, ValueError) as exc:
        raise AnswerSourceDecodeError(position, f"not answer XML and not base64: {exc}") from exc


def parse_answer_source(text: str, position: int = 0) -> AnswerCollection:
    """Parse one answer source into an AnswerCollection.

    Blank text yields an empty collection.
    """
    if not isinstance(text, str):
        raise AnswerSourceDecodeError(position, f"expected text, got {type(text).__name__}")
    if not text.strip():
        return AnswerCollection()
    document = _source_document(text, position)
    try:
        root = ET.fromstring(document)
    except ET.ParseError as exc:
        raise AnswerSourceDecodeError(position, f"invalid XML: {exc}") from exc
    if root.tag != ROOT_TAG:
        raise AnswerSourceDecodeError(position, f"root element is <{root.tag}>, expected <{ROOT_TAG}>")

    collection = AnswerCollection(title=root.get("title"), version=root.get("version"))
    for element in root.findall(ANSWER_TAG):
        name = element.get("name")
        if not name:
            raise AnswerSourceDecodeError(position, "answer element without a name")
        collection.set(element)
    return collection


def normalize_answer_source(text: str, position: int = 0) -> str:
    return parse_answer_source(text, position).to_xml()


def overlay_answers(sources: Sequence[str] | None) -> str:
    """Merge answer sources in order; the last source defining a name wins."""
    if sources is None:
        raise CallerContractError("sources", "overlay_answers")
    merged = AnswerCollection()
    for position, source in enumerate(sources):
        merged.update(parse_answer_source(source, position))
    logger.debug("answers.overlay.merged", extra={"sources": len(sources), "answers": len(merged)})
    return merged.to_xml()


__all__ = [
    "AnswerCollection",
    "parse_answer_source",
    "normalize_answer_source",
    "overlay_answers",
]
