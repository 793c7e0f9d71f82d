from __future__ import annotations

from starlette.requests import Request
from starlette.types import ASGIApp, Receive, Scope, Send

from featurectx.core.config import settings
from featurectx.core.ctx import reset_ctx, set_ctx
from featurectx.http.request import derive_ctx


class FeatureContextMiddleware:
    """
    Derive the flag overlay from each HTTP request's query and headers.

    The overlay is stored in the request's existing state mapping, so
    ``request.state`` stays shared with the middlewares around this one, and
    it is bound as the ambient context while downstream apps run, so
    ``Feature("x").is_enabled()`` works inside handlers.
    """

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        ctx = derive_ctx(Request(scope, receive))
        scope.setdefault("state", {})[settings.FEATURE_STATE_KEY] = ctx
        token = set_ctx(ctx)
        try:
            await self.app(scope, receive, send)
        finally:
            reset_ctx(token)
