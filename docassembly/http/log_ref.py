"""Log reference middleware.

Every request carries a log reference that is forwarded to the engine for
correlation. An incoming X-Log-Ref header is reused; otherwise one is
generated. The value is exposed to handlers as `request.state.log_ref` and
echoed on the response.
"""

from __future__ import annotations

import uuid

from fastapi import Request

LOG_REF_HEADER = "X-Log-Ref"


class LogRefMiddleware:
    def __init__(self, app, header_name: str = LOG_REF_HEADER) -> None:  # type: ignore[no-untyped-def]
        self.app = app
        self.header_name = header_name

    def _incoming(self, scope) -> str:  # type: ignore[no-untyped-def]
        wanted = self.header_name.lower().encode("latin-1")
        for key, value in scope.get("headers") or []:
            if key.lower() == wanted:
                return value.decode("latin-1").strip()
        return ""

    async def __call__(self, scope, receive, send):  # type: ignore[no-untyped-def]
        if scope.get("type") != "http":
            await self.app(scope, receive, send)
            return

        log_ref = self._incoming(scope) or str(uuid.uuid4())
        scope.setdefault("state", {})["log_ref"] = log_ref

        async def send_wrapper(message):  # type: ignore[no-untyped-def]
            if message.get("type") == "http.response.start":
                headers = list(message.get("headers") or [])
                headers.append((self.header_name.encode("latin-1"), log_ref.encode("latin-1")))
                message = {**message, "headers": headers}
            await send(message)

        await self.app(scope, receive, send_wrapper)


def get_log_ref(request: Request) -> str:
    """FastAPI dependency returning the request's log reference."""
    return str(getattr(request.state, "log_ref", "") or "")


__all__ = ["LogRefMiddleware", "LOG_REF_HEADER", "get_log_ref"]
