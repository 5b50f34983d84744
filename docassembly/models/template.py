"""Template reference model.

A template names one assembly unit: a file identifier relative to a
location root, an opaque key and the switches string passed to the engine.
"""

from __future__ import annotations

from pathlib import PurePosixPath

from pydantic import BaseModel, ConfigDict, Field


class Template(BaseModel):
    model_config = ConfigDict(frozen=True)

    file_name: str = Field(min_length=1)
    location: str = ""
    key: str = ""
    switches: str = ""

    @property
    def path(self) -> str:
        """Location root joined with the file name, using forward slashes."""
        if not self.location:
            return self.file_name
        root = self.location.replace("\\", "/").rstrip("/")
        return str(PurePosixPath(root) / self.file_name.replace("\\", "/"))


__all__ = ["Template"]
