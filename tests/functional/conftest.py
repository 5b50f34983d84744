"""Shared fixtures for functional tests."""

from __future__ import annotations

import pytest

from docassembly.config import AppConfig, EngineConfig, InterviewConfig, TemplateStoreConfig
from docassembly.logic.assembly_service import AssemblyService
from docassembly.models.template import Template

from fakes import ENGINE_URL, TEMPLATE_ROOT, FakeEngine


@pytest.fixture()
def app_config() -> AppConfig:
    return AppConfig(
        engine=EngineConfig(base_url=ENGINE_URL, timeout_seconds=5),
        templates=TemplateStoreConfig(base_path=TEMPLATE_ROOT),
        interview=InterviewConfig(image_url="/host/images"),
    )


@pytest.fixture()
def fake_engine() -> FakeEngine:
    return FakeEngine()


@pytest.fixture()
def service(app_config: AppConfig, fake_engine: FakeEngine) -> AssemblyService:
    return AssemblyService(app_config, client_factory=fake_engine.client_factory)


@pytest.fixture()
def template() -> Template:
    return Template(file_name="leases/Lease.docx", location=TEMPLATE_ROOT, key="k-1", switches="/nw")
