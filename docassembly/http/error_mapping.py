"""Central error mapping for adapter exceptions.

Single source of truth for mapping adapter exception classes to
problem+json codes and HTTP statuses. Handlers must import from here
instead of hardcoding strings or numbers.
"""

from __future__ import annotations

from docassembly.logic.errors import (
    AnswerSourceDecodeError,
    CallerContractError,
    ConfigurationMismatchError,
    EngineCommunicationError,
    EngineRequestError,
    EngineResponseError,
)

# Ordered most specific first; lookup walks the list with isinstance()
ADAPTER_ERROR_MAP = [
    (CallerContractError, {"code": "PRE_PARAMETER_MISSING", "status": 400, "title": "Invalid Request"}),
    (AnswerSourceDecodeError, {"code": "ANSWER_SOURCE_INVALID", "status": 422, "title": "Invalid Answer Source"}),
    (ConfigurationMismatchError, {"code": "CONFIG_TEMPLATE_PATH_MISMATCH", "status": 500, "title": "Configuration Error"}),
    (EngineRequestError, {"code": "ENGINE_REQUEST_FAILED", "status": 502, "title": "Bad Gateway"}),
    (EngineCommunicationError, {"code": "ENGINE_UNAVAILABLE", "status": 502, "title": "Bad Gateway"}),
    (EngineResponseError, {"code": "ENGINE_RESPONSE_INVALID", "status": 502, "title": "Bad Gateway"}),
]

DEFAULT_ERROR = {"code": "ADAPTER_ERROR", "status": 500, "title": "Internal Server Error"}


def lookup_error(exc: BaseException) -> dict:
    for cls, entry in ADAPTER_ERROR_MAP:
        if isinstance(exc, cls):
            return entry
    return DEFAULT_ERROR


__all__ = ["ADAPTER_ERROR_MAP", "DEFAULT_ERROR", "lookup_error"]
