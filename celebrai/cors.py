"""
App-wide CORS with per-path exemptions.

Public function endpoints answer their own preflights with wildcard headers,
so the global allow-lists must not see their requests.
"""

from typing import Sequence

from starlette.middleware.cors import CORSMiddleware
from starlette.types import ASGIApp, Receive, Scope, Send


class PathExemptCORSMiddleware(CORSMiddleware):
    """CORSMiddleware that passes requests under ``exclude_paths`` straight through"""

    def __init__(self, app: ASGIApp, exclude_paths: Sequence[str] = (), **options) -> None:
        super().__init__(app, **options)
        self.exclude_paths = tuple(exclude_paths)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "http" and scope["path"].startswith(self.exclude_paths):
            await self.app(scope, receive, send)
            return
        await super().__call__(scope, receive, send)
