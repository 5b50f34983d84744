"""Engine wire payloads.

The engine answers assembly and interview calls with a JSON envelope whose
`parts` carry base64 payloads. `AssemblyEnvelope.to_parts()` turns them into
the ordered `TaggedPart` sequence the decoder consumes.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import Base64Bytes, BaseModel, ConfigDict, Field


class TaggedPart(BaseModel):
    """One item of an engine response: payload, format tag and optional file name."""

    model_config = ConfigDict(frozen=True)

    data: bytes = b""
    format: str
    file_name: Optional[str] = None
    # Only meaningful on pending sub-assembly parts
    switches: str = ""


class WirePart(BaseModel):
    format: str
    file_name: Optional[str] = None
    switches: str = ""
    data: Base64Bytes = b""


class AssemblyEnvelope(BaseModel):
    parts: List[WirePart] = Field(default_factory=list)
    unanswered_variables: List[str] = Field(default_factory=list)

    def to_parts(self) -> List[TaggedPart]:
        return [
            TaggedPart(
                data=bytes(p.data),
                format=p.format,
                file_name=p.file_name,
                switches=p.switches,
            )
            for p in self.parts
        ]


__all__ = ["TaggedPart", "WirePart", "AssemblyEnvelope"]
