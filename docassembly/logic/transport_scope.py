"""Scoped acquisition of a per-call engine handle.

The handle is released after use whether or not the call succeeded.
Release failures are classified:

- communication failures (httpx transport errors, timeouts, OS errors) are
  logged and the handle is force-aborted;
- anything else is aborted and re-raised, unless the call itself already
  failed, in which case the original error is the one that propagates.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Callable, Iterator, Protocol, TypeVar

import httpx


logger = logging.getLogger(__name__)

# Release errors that mean "the connection is gone", not "the code is wrong"
COMMUNICATION_ERRORS: tuple[type[BaseException], ...] = (httpx.TransportError, OSError)


class ReleasableHandle(Protocol):
    def close(self) -> None: ...

    def abort(self) -> None: ...


H = TypeVar("H", bound=ReleasableHandle)


def _abort(handle: ReleasableHandle, context: str) -> None:
    try:
        handle.abort()
    except Exception:
        logger.error("transport.release.abort_failed context=%s", context, exc_info=True)


def release_handle(handle: ReleasableHandle, context: str, *, reraise: bool = True) -> None:
    """Close `handle`, falling back to abort when closing fails."""
    try:
        handle.close()
    except COMMUNICATION_ERRORS as exc:
        logger.warning("transport.release.aborted context=%s error=%s", context, exc)
        _abort(handle, context)
    except Exception:
        logger.error("transport.release.unexpected context=%s", context, exc_info=True)
        _abort(handle, context)
        if reraise:
            raise


@contextmanager
def engine_session(factory: Callable[[], H], *, context: str) -> Iterator[H]:
    """Yield a fresh handle from `factory` and release it on exit."""
    handle = factory()
    try:
        yield handle
    except BaseException:
        release_handle(handle, context, reraise=False)
        raise
    release_handle(handle, context)


__all__ = ["engine_session", "release_handle", "ReleasableHandle", "COMMUNICATION_ERRORS"]
