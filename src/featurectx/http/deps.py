from __future__ import annotations

from fastapi import Request

from featurectx.core.ctx import FlagContext
from featurectx.http.request import derive_ctx, feature_ctx_from_request


async def get_feature_ctx(request: Request) -> FlagContext:
    """
    FastAPI dependency returning the request's flag overlay.

    Falls back to deriving it on the spot when FeatureContextMiddleware is
    not installed.
    """
    ctx = feature_ctx_from_request(request)
    if not ctx:
        ctx = derive_ctx(request)
    return ctx
