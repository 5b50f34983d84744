"""Template path helpers.

Derives the engine-facing template identifier from a template's absolute
location by stripping the configured base path.
"""

from __future__ import annotations

from docassembly.logic.errors import ConfigurationMismatchError


def _normalize(path: str) -> str:
    return path.replace("\\", "/")


def relative_template_path(template_path: str, base_path: str) -> str:
    """Return `template_path` relative to `base_path`, with forward slashes.

    The prefix comparison is case-insensitive and must end on a path
    segment boundary. Raises ConfigurationMismatchError when the template
    does not live under the base path.
    """
    path = _normalize(template_path)
    base = _normalize(base_path).rstrip("/")
    if not base or not path.lower().startswith(base.lower()):
        raise ConfigurationMismatchError(template_path, base_path)
    remainder = path[len(base):]
    if remainder and not remainder.startswith("/"):
        raise ConfigurationMismatchError(template_path, base_path)
    relative = remainder.lstrip("/")
    if not relative:
        raise ConfigurationMismatchError(template_path, base_path)
    return relative


__all__ = ["relative_template_path"]
