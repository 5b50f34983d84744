"""Exception taxonomy for the assembly adapter.

Route handlers translate these into problem+json responses; see
`docassembly.http.error_mapping` for codes and statuses.
"""

from __future__ import annotations


class AssemblyAdapterError(Exception):
    pass


class CallerContractError(AssemblyAdapterError, ValueError):
    """A required parameter was missing or blank."""

    def __init__(self, parameter: str, context: str) -> None:
        self.parameter = parameter
        self.context = context
        super().__init__(f"{context}: required parameter '{parameter}' is missing or blank")


class ConfigurationMismatchError(AssemblyAdapterError):
    """A template path does not reside under the configured base path."""

    def __init__(self, template_path: str, base_path: str) -> None:
        self.template_path = template_path
        self.base_path = base_path
        super().__init__(
            f"template path '{template_path}' is not under configured base path '{base_path}'"
        )


class AnswerSourceDecodeError(AssemblyAdapterError, ValueError):
    def __init__(self, position: int, reason: str) -> None:
        self.position = position
        self.reason = reason
        super().__init__(f"answer source {position} could not be decoded: {reason}")


class EngineRequestError(AssemblyAdapterError):
    """The engine answered with an error status."""

    def __init__(self, status_code: int, detail: str = "") -> None:
        self.status_code = status_code
        self.detail = detail
        message = f"engine request failed with status {status_code}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class EngineCommunicationError(AssemblyAdapterError):
    pass


class EngineResponseError(AssemblyAdapterError):
    """The engine answered, but the payload does not fit the call's contract."""


def require(value: object, parameter: str, context: str) -> None:
    """Raise CallerContractError when `value` is None or a blank string."""
    if value is None:
        raise CallerContractError(parameter, context)
    if isinstance(value, str) and not value.strip():
        raise CallerContractError(parameter, context)


__all__ = [
    "AssemblyAdapterError",
    "CallerContractError",
    "ConfigurationMismatchError",
    "AnswerSourceDecodeError",
    "EngineRequestError",
    "EngineCommunicationError",
    "EngineResponseError",
    "require",
]
