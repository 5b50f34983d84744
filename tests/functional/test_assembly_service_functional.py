"""Functional tests for the assembly service against a fake engine.

Covers request building (flags, template id, combined answers), response
decoding, parameter checks before transport use, and release of the
per-call client.
"""

from __future__ import annotations

import httpx
import pytest

from docassembly.logic.answer_overlay import parse_answer_source
from docassembly.logic.errors import (
    CallerContractError,
    ConfigurationMismatchError,
    EngineCommunicationError,
    EngineRequestError,
    EngineResponseError,
)
from docassembly.models.formats import DocumentType, PENDING_ASSEMBLY_TAG
from docassembly.models.settings import AssemblySettings, InterviewSettings
from docassembly.models.template import Template

from fakes import answer_xml, wire_part


def _docx_envelope(**extra):
    payload = {
        "parts": [
            wire_part("DOCX", b"PK\x03\x04doc", "Lease.docx"),
            wire_part("ANSWERS", answer_xml(("Tenant", "Ada")).encode("utf-8")),
            wire_part(PENDING_ASSEMBLY_TAG, b"", "Addendum.docx", "/nw"),
        ],
        "unanswered_variables": ["Landlord"],
    }
    payload.update(extra)
    return payload


def test_assemble_builds_request_and_decodes(service, fake_engine, template):
    fake_engine.reply_json("/assemble", _docx_envelope())
    settings = AssemblySettings(document_type=DocumentType.WORD_DOCX, use_markup_syntax=True)

    result = service.assemble_document("log-1", template, [answer_xml(("Tenant", "Ada"))], settings)

    body = fake_engine.last_body
    assert body["template"] == "leases/Lease.docx"
    assert body["format"] == 8 | 1
    assert body["options"] == 1
    assert body["key"] == "k-1"
    assert body["switches"] == "/nw"
    assert body["log_ref"] == "log-1"
    assert "<AnswerSet" in body["answers"]

    assert result is not None
    assert result.document.content == b"PK\x03\x04doc"
    assert result.document.document_type == DocumentType.WORD_DOCX
    assert result.answers is not None and "Ada" in result.answers
    assert [p.template.file_name for p in result.pending_assemblies] == ["Addendum.docx"]
    assert result.pending_assemblies[0].template.location == template.location
    assert result.unanswered_variables == ("Landlord",)


def test_assemble_overlays_multiple_sources(service, fake_engine, template):
    fake_engine.reply_json("/assemble", _docx_envelope())
    service.assemble_document(
        "log-1",
        template,
        [answer_xml(("A", "old"), ("B", "b")), answer_xml(("A", "new"))],
        AssemblySettings(),
    )
    combined = parse_answer_source(fake_engine.last_body["answers"])
    assert combined.value_of("A") == "new"
    assert combined.value_of("B") == "b"


def test_assemble_without_answers_sends_null(service, fake_engine, template):
    fake_engine.reply_json("/assemble", _docx_envelope())
    service.assemble_document("log-1", template, None, AssemblySettings())
    assert fake_engine.last_body["answers"] is None


def test_assemble_with_nothing_produced_returns_none(service, fake_engine, template):
    fake_engine.reply_json("/assemble", {"parts": [wire_part("ANSWERS", b"<AnswerSet/>")]})
    assert service.assemble_document("log-1", template, [], AssemblySettings()) is None


def test_client_is_closed_after_each_call(service, fake_engine, template):
    fake_engine.reply_json("/assemble", _docx_envelope())
    service.assemble_document("log-1", template, [], AssemblySettings())
    service.assemble_document("log-2", template, [], AssemblySettings())
    assert len(fake_engine.clients) == 2
    assert all(c._http.is_closed for c in fake_engine.clients)
    assert not any(c.aborted for c in fake_engine.clients)


@pytest.mark.parametrize(
    "log_ref, template_obj, settings, parameter",
    [
        ("", Template(file_name="x.docx"), AssemblySettings(), "log_ref"),
        ("   ", Template(file_name="x.docx"), AssemblySettings(), "log_ref"),
        ("log", None, AssemblySettings(), "template"),
        ("log", Template(file_name="x.docx"), None, "settings"),
    ],
)
def test_missing_parameters_fail_before_transport(service, fake_engine, log_ref, template_obj, settings, parameter):
    with pytest.raises(CallerContractError) as err:
        service.assemble_document(log_ref, template_obj, [], settings)
    assert err.value.parameter == parameter
    assert err.value.context == "assemble_document"
    assert fake_engine.requests == []
    assert fake_engine.clients == []


def test_template_outside_base_path_is_fatal(service, fake_engine):
    outside = Template(file_name="Lease.docx", location="/elsewhere")
    with pytest.raises(ConfigurationMismatchError):
        service.assemble_document("log", outside, [], AssemblySettings())
    assert fake_engine.clients == []


def test_engine_error_status_is_surfaced(service, fake_engine, template):
    fake_engine.reply("/assemble", lambda body: httpx.Response(500, text="template failed to compile"))
    with pytest.raises(EngineRequestError) as err:
        service.assemble_document("log", template, [], AssemblySettings())
    assert err.value.status_code == 500
    assert "compile" in err.value.detail
    assert fake_engine.clients[0]._http.is_closed


def test_engine_network_failure_is_surfaced(service, fake_engine, template):
    def _boom(body):
        raise httpx.ConnectError("connection refused")

    fake_engine.reply("/assemble", _boom)
    with pytest.raises(EngineCommunicationError):
        service.assemble_document("log", template, [], AssemblySettings())


def test_malformed_envelope_is_surfaced(service, fake_engine, template):
    fake_engine.reply_json("/assemble", {"parts": [{"data": "AAAA"}]})
    with pytest.raises(EngineResponseError):
        service.assemble_document("log", template, [], AssemblySettings())


def test_interview_request_and_result(service, fake_engine, template):
    fake_engine.reply_json(
        "/interview",
        {"parts": [wire_part("HTML", b"<div class='hd'/>"), wire_part("NONE", b"js", "Lease.docx.js")]},
    )
    settings = InterviewSettings(disable_save_answers_button=True, marked_variables=["Tenant"])

    result = service.get_interview("log-9", template, [answer_xml(("Tenant", "Ada"))], settings)

    body = fake_engine.last_body
    assert body["options"] == 1 | 4
    assert body["marked_variables"] == ["Tenant"]
    assert body["image_url"] == "/host/images?loc=leases%2FLease.docx&img="
    assert result.markup == "<div class='hd'/>"
    assert result.image_url.endswith("img=")
    assert [f.file_name for f in result.files] == ["Lease.docx.js"]


def test_interview_settings_image_url_overrides_config(service, fake_engine, template):
    fake_engine.reply_json("/interview", {"parts": [wire_part("HTML", b"<div/>")]})
    result = service.get_interview("log", template, None, InterviewSettings(image_url="https://host/img"))
    assert result.image_url == "https://host/img?loc=leases%2FLease.docx&img="


def test_component_info(service, fake_engine, template):
    fake_engine.reply_json(
        "/componentinfo",
        {
            "variables": [{"name": "Tenant", "type": "Text"}, {"name": "Rent", "type": "Number"}],
            "dialogs": [{"name": "Parties", "items": ["Tenant"]}],
        },
    )
    info = service.get_component_info("log", template, include_dialogs=True)
    assert [v.name for v in info.variables] == ["Tenant", "Rent"]
    assert info.dialogs[0].items == ["Tenant"]
    assert fake_engine.last_body["include_dialogs"] is True


def test_interview_definition(service, fake_engine, template):
    fake_engine.reply(
        "/interviewdefinition",
        lambda body: httpx.Response(200, content=b"function hd(){}", headers={"content-type": "application/javascript; charset=utf-8"}),
    )
    definition = service.get_interview_definition("log", template, state="abc")
    assert definition.content == b"function hd(){}"
    assert definition.media_type == "application/javascript"
    assert definition.file_name == "Lease.docx.js"
    assert fake_engine.last_body["state"] == "abc"


def test_get_answers_requires_sources(service):
    with pytest.raises(CallerContractError) as err:
        service.get_answers("log", None)
    assert err.value.parameter == "sources"
    assert err.value.context == "get_answers"


def test_get_answers_overlays_locally(service, fake_engine):
    merged = service.get_answers("log", [answer_xml(("A", "1")), answer_xml(("A", "2"))])
    assert parse_answer_source(merged).value_of("A") == "2"
    assert fake_engine.requests == []


@pytest.mark.parametrize("call", ["assemble", "interview", "components", "definition"])
def test_blank_template_name_fails_before_transport(service, fake_engine, call):
    blank = Template(file_name="   ", location="/srv/Templates")
    calls = {
        "assemble": lambda: service.assemble_document("log", blank, None, AssemblySettings()),
        "interview": lambda: service.get_interview("log", blank, None, InterviewSettings()),
        "components": lambda: service.get_component_info("log", blank),
        "definition": lambda: service.get_interview_definition("log", blank),
    }
    with pytest.raises(CallerContractError) as err:
        calls[call]()
    assert err.value.parameter == "template"
    assert fake_engine.requests == []
    assert fake_engine.clients == []
