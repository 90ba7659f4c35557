"""
ASGI middleware applying routing decisions to every HTTP request.

Runs ahead of all routes: redirects are answered here, rewrites swap the
request path before the application sees it.
"""

import logging

from starlette.responses import RedirectResponse
from starlette.types import ASGIApp, Receive, Scope, Send

from .models import Redirect, Rewrite, RoutingMode
from .router import route_request

logger = logging.getLogger(__name__)


class LocaleRoutingMiddleware:
    """
    Edge router for the site.

    Usage:
        app.add_middleware(LocaleRoutingMiddleware, mode=LocaleRoutingMode())
    """

    def __init__(self, app: ASGIApp, mode: RoutingMode) -> None:
        self.app = app
        self.mode = mode

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        path = scope["path"]
        query = scope.get("query_string", b"").decode("latin-1")
        raw_path = scope.get("raw_path")
        raw = raw_path.decode("latin-1") if raw_path else path
        decision = route_request(path, query, self.mode, raw_path=raw)

        if isinstance(decision, Redirect):
            logger.debug("Redirecting %s to %s", path, decision.location)
            response = RedirectResponse(decision.location, status_code=decision.status_code)
            await response(scope, receive, send)
            return

        if isinstance(decision, Rewrite):
            scope = dict(scope)
            scope["path"] = decision.path
            scope["raw_path"] = decision.path.encode("latin-1")
            scope["query_string"] = b""

        await self.app(scope, receive, send)
