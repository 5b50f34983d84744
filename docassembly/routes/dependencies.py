"""Shared FastAPI dependencies for route handlers."""

from __future__ import annotations

from docassembly.config import AppConfig, load_config
from docassembly.logic.assembly_service import AssemblyService
from docassembly.models.template import Template


# Module-level cached service so configuration is read once per process
_SERVICE: AssemblyService | None = None


def get_service() -> AssemblyService:
    global _SERVICE
    if _SERVICE is None:
        _SERVICE = AssemblyService(load_config())
    return _SERVICE


def resolve_template(template: Template, config: AppConfig) -> Template:
    """Place a template without a location under the configured base path."""
    if template.location:
        return template
    return template.model_copy(update={"location": config.templates.base_path})


__all__ = ["get_service", "resolve_template"]
