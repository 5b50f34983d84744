"""HTTP transport to the remote assembly engine.

One `EngineClient` serves one call: it is created by a factory, used, and
released through `docassembly.logic.transport_scope.engine_session`. The
client owns its httpx transport so that `abort()` can drop connections even
when a graceful `close()` has failed.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import httpx
from pydantic import ValidationError as PydanticValidationError

from docassembly.logic.errors import (
    EngineCommunicationError,
    EngineRequestError,
    EngineResponseError,
)
from docassembly.models.formats import AssemblyOptions, InterviewOptions, OutputFormat
from docassembly.models.results import ComponentInfo, InterviewDefinition
from docassembly.models.wire import AssemblyEnvelope


logger = logging.getLogger(__name__)


class EngineClient:
    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 60.0,
        retries: int = 0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._transport = transport or httpx.HTTPTransport(retries=retries)
        self._http = httpx.Client(base_url=base_url, timeout=timeout, transport=self._transport)
        self.aborted = False

    # -- lifecycle -------------------------------------------------------

    def close(self) -> None:
        self._http.close()

    def abort(self) -> None:
        """Force the underlying transport closed without a graceful shutdown."""
        self.aborted = True
        self._transport.close()

    # -- calls -----------------------------------------------------------

    def _post(self, path: str, body: Dict[str, Any]) -> httpx.Response:
        try:
            response = self._http.post(path, json=body)
        except httpx.TransportError as exc:
            logger.error("transport.call.failed path=%s error=%s", path, exc)
            raise EngineCommunicationError(f"engine call {path} failed: {exc}") from exc
        if response.is_error:
            detail = response.text[:500]
            logger.warning("transport.call.rejected path=%s status=%s", path, response.status_code)
            raise EngineRequestError(response.status_code, detail)
        return response

    def _json(self, response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as exc:
            raise EngineResponseError(f"engine returned non-JSON body: {exc}") from exc

    def _envelope(self, response: httpx.Response) -> AssemblyEnvelope:
        try:
            return AssemblyEnvelope.model_validate(self._json(response))
        except PydanticValidationError as exc:
            raise EngineResponseError(f"malformed assembly envelope: {exc}") from exc

    def assemble(
        self,
        template_id: str,
        answers: Optional[str],
        output_format: OutputFormat,
        options: AssemblyOptions,
        *,
        key: str = "",
        switches: str = "",
        log_ref: str = "",
    ) -> AssemblyEnvelope:
        body = {
            "template": template_id,
            "key": key,
            "switches": switches,
            "answers": answers,
            "format": output_format.value,
            "options": options.value,
            "log_ref": log_ref,
        }
        return self._envelope(self._post("/assemble", body))

    def get_interview(
        self,
        template_id: str,
        answers: Optional[str],
        options: InterviewOptions,
        *,
        image_url: str,
        marked_variables: List[str] | None = None,
        key: str = "",
        switches: str = "",
        log_ref: str = "",
    ) -> AssemblyEnvelope:
        body = {
            "template": template_id,
            "key": key,
            "switches": switches,
            "answers": answers,
            "format": OutputFormat.HTML.value,
            "options": options.value,
            "image_url": image_url,
            "marked_variables": list(marked_variables or []),
            "log_ref": log_ref,
        }
        return self._envelope(self._post("/interview", body))

    def get_component_info(
        self,
        template_id: str,
        *,
        include_dialogs: bool = False,
        key: str = "",
        log_ref: str = "",
    ) -> ComponentInfo:
        body = {
            "template": template_id,
            "key": key,
            "include_dialogs": include_dialogs,
            "log_ref": log_ref,
        }
        try:
            return ComponentInfo.model_validate(self._json(self._post("/componentinfo", body)))
        except PydanticValidationError as exc:
            raise EngineResponseError(f"malformed component info: {exc}") from exc

    def get_interview_definition(
        self,
        template_id: str,
        *,
        state: str = "",
        key: str = "",
        log_ref: str = "",
    ) -> InterviewDefinition:
        body = {"template": template_id, "key": key, "state": state, "log_ref": log_ref}
        response = self._post("/interviewdefinition", body)
        media_type = response.headers.get("content-type", "application/octet-stream").split(";")[0].strip()
        file_name = template_id.rsplit("/", 1)[-1] + ".js"
        return InterviewDefinition(file_name=file_name, content=response.content, media_type=media_type)


__all__ = ["EngineClient"]
