"""Fake engine helpers shared by functional tests.

The engine is never contacted: calls are served by `httpx.MockTransport`
handlers that record each request body and answer with canned envelopes.
"""

from __future__ import annotations

import base64
import json
from typing import Any, Callable, Dict, List

import httpx

from docassembly.transport.engine_client import EngineClient


ENGINE_URL = "http://engine.test/api"
TEMPLATE_ROOT = "/srv/Templates"


def answer_xml(*pairs: tuple[str, str], title: str | None = None) -> str:
    """Build a small answer-set document with text answers."""
    attrs = f' title="{title}"' if title is not None else ""
    items = "".join(f'<Answer name="{n}"><TextValue>{v}</TextValue></Answer>' for n, v in pairs)
    return f'<?xml version="1.0" encoding="utf-8"?><AnswerSet{attrs} version="1.1">{items}</AnswerSet>'


def wire_part(fmt: str, data: bytes = b"", file_name: str | None = None, switches: str = "") -> Dict[str, Any]:
    return {
        "format": fmt,
        "file_name": file_name,
        "switches": switches,
        "data": base64.b64encode(data).decode("ascii"),
    }


class FakeEngine:
    """Records requests and replies through a per-path handler table."""

    def __init__(self) -> None:
        self.requests: List[Dict[str, Any]] = []
        self.replies: Dict[str, Callable[[Dict[str, Any]], httpx.Response]] = {}
        self.clients: List[EngineClient] = []

    def reply_json(self, path: str, payload: Any, status: int = 200) -> None:
        self.replies[path] = lambda body: httpx.Response(status, json=payload)

    def reply(self, path: str, fn: Callable[[Dict[str, Any]], httpx.Response]) -> None:
        self.replies[path] = fn

    def _handle(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path.removeprefix("/api")
        body = json.loads(request.content or b"{}")
        self.requests.append({"path": path, "body": body, "headers": dict(request.headers)})
        if path not in self.replies:
            return httpx.Response(404, text=f"no handler for {path}")
        return self.replies[path](body)

    def client_factory(self) -> EngineClient:
        client = EngineClient(ENGINE_URL, transport=httpx.MockTransport(self._handle))
        self.clients.append(client)
        return client

    @property
    def last_body(self) -> Dict[str, Any]:
        return self.requests[-1]["body"]

