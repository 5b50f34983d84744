"""Document assembly adapter package.

Translates host intents into engine requests and engine responses into
typed results. The pure translation logic lives in `docassembly/logic/`;
`create_app` exposes it over HTTP for hosts.
"""

from __future__ import annotations

from docassembly.main import create_app

__all__ = ["create_app"]
