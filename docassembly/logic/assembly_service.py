"""Assembly service: one method per engine call.

Each method validates its required parameters before touching the
transport, encodes flags, runs the call inside `engine_session` and decodes
the response. Answer sources are overlaid into a single payload first.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional, Sequence

from docassembly.config import AppConfig
from docassembly.logic.answer_overlay import overlay_answers
from docassembly.logic.errors import require
from docassembly.logic.request_encoder import (
    encode_assembly_options,
    encode_interview_options,
    encode_output_format,
    interview_image_url,
)
from docassembly.logic.response_decoder import decode_assembly, decode_interview
from docassembly.logic.template_paths import relative_template_path
from docassembly.logic.transport_scope import engine_session
from docassembly.models.results import (
    AssembledResult,
    ComponentInfo,
    InterviewDefinition,
    InterviewResult,
)
from docassembly.models.settings import AssemblySettings, InterviewSettings
from docassembly.models.template import Template
from docassembly.transport.engine_client import EngineClient


logger = logging.getLogger(__name__)

ClientFactory = Callable[[], EngineClient]


class AssemblyService:
    def __init__(self, config: AppConfig, client_factory: ClientFactory | None = None) -> None:
        self.config = config
        self._client_factory = client_factory or self._default_client

    def _default_client(self) -> EngineClient:
        engine = self.config.engine
        return EngineClient(engine.base_url, timeout=engine.timeout_seconds, retries=engine.retries)

    def _template_id(self, template: Template) -> str:
        return relative_template_path(template.path, self.config.templates.base_path)

    def _combined_answers(self, answers: Optional[Sequence[str]]) -> Optional[str]:
        if not answers:
            return None
        return overlay_answers(answers)

    def assemble_document(
        self,
        log_ref: str,
        template: Template,
        answers: Optional[Sequence[str]],
        settings: AssemblySettings,
    ) -> AssembledResult | None:
        """Assemble `template`; None means the engine produced no document."""
        context = "assemble_document"
        require(log_ref, "log_ref", context)
        require(template, "template", context)
        require(template.file_name, "template", context)
        require(settings, "settings", context)

        template_id = self._template_id(template)
        combined = self._combined_answers(answers)
        output_format = encode_output_format(settings.document_type)
        options = encode_assembly_options(settings)
        logger.info(
            "assembly.request",
            extra={"log_ref": log_ref, "template_id": template_id, "output_format": output_format.value},
        )
        with engine_session(self._client_factory, context=context) as client:
            envelope = client.assemble(
                template_id,
                combined,
                output_format,
                options,
                key=template.key,
                switches=template.switches,
                log_ref=log_ref,
            )
        return decode_assembly(
            template,
            envelope.to_parts(),
            settings.document_type,
            envelope.unanswered_variables,
        )

    def get_interview(
        self,
        log_ref: str,
        template: Template,
        answers: Optional[Sequence[str]],
        settings: InterviewSettings,
    ) -> InterviewResult:
        context = "get_interview"
        require(log_ref, "log_ref", context)
        require(template, "template", context)
        require(template.file_name, "template", context)
        require(settings, "settings", context)

        template_id = self._template_id(template)
        combined = self._combined_answers(answers)
        options = encode_interview_options(settings)
        image_url = interview_image_url(settings.image_url or self.config.interview.image_url, template_id)
        with engine_session(self._client_factory, context=context) as client:
            envelope = client.get_interview(
                template_id,
                combined,
                options,
                image_url=image_url,
                marked_variables=settings.marked_variables,
                key=template.key,
                switches=template.switches,
                log_ref=log_ref,
            )
        return decode_interview(envelope.to_parts(), image_url)

    def get_component_info(self, log_ref: str, template: Template, include_dialogs: bool = False) -> ComponentInfo:
        context = "get_component_info"
        require(log_ref, "log_ref", context)
        require(template, "template", context)
        require(template.file_name, "template", context)

        template_id = self._template_id(template)
        with engine_session(self._client_factory, context=context) as client:
            return client.get_component_info(
                template_id, include_dialogs=include_dialogs, key=template.key, log_ref=log_ref
            )

    def get_interview_definition(self, log_ref: str, template: Template, state: str = "") -> InterviewDefinition:
        context = "get_interview_definition"
        require(log_ref, "log_ref", context)
        require(template, "template", context)
        require(template.file_name, "template", context)

        template_id = self._template_id(template)
        with engine_session(self._client_factory, context=context) as client:
            return client.get_interview_definition(template_id, state=state, key=template.key, log_ref=log_ref)

    def get_answers(self, log_ref: str, sources: Optional[Sequence[str]]) -> str:
        """Overlay answer sources into one consolidated answer set."""
        context = "get_answers"
        require(log_ref, "log_ref", context)
        require(sources, "sources", context)
        return overlay_answers(sources)


__all__ = ["AssemblyService", "ClientFactory"]
