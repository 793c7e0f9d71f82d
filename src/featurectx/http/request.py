# src/featurectx/http/request.py
"""
Feature values from inbound HTTP requests.

Ways to toggle a feature "paginate" for a single request:

  - query:  ?feature-paginate=true|false   (or just ?feature-paginate)
  - header: X-Feature-Paginate: true|false (case insensitive)

Header values are applied after query values, so a header wins when both name
the same flag. Either one overrides the environment and the default store.
"""
from __future__ import annotations

from typing import Iterable, Optional, Tuple

from starlette.requests import Request

from featurectx.core.config import settings
from featurectx.core.ctx import EMPTY, FlagContext
from featurectx.core.flags import parse_bool
from featurectx.core.logging import get_logger
from featurectx.core.metrics import REQUEST_FLAGS

log = get_logger(__name__)


def feature_ctx_from_request(request: Request) -> FlagContext:
    """Return the flag overlay bound to ``request`` (empty when none)."""
    state = request.scope.get("state") or {}
    ctx = state.get(settings.FEATURE_STATE_KEY)
    return ctx if isinstance(ctx, FlagContext) else EMPTY


def from_values(ctx: FlagContext, items: Iterable[Tuple[str, str]], prefix: str,
                origin: str = "query") -> FlagContext:
    """
    Derive ``ctx`` with every item whose key starts with ``prefix``
    (case-insensitive). An empty value means the flag is on.
    """
    prefix = prefix.lower()
    for key, raw in items:
        lower_key = key.lower()
        if not lower_key.startswith(prefix):
            continue
        name = lower_key[len(prefix):]
        value = raw == "" or parse_bool(raw)
        REQUEST_FLAGS.labels(origin).inc()
        log.debug("request %s sets feature %s=%s", origin, name, value)
        ctx = ctx.with_value(name, value)
    return ctx


def derive_ctx(request: Request, base: Optional[FlagContext] = None) -> FlagContext:
    ctx = base if base is not None else feature_ctx_from_request(request)
    ctx = from_values(ctx, request.query_params.multi_items(), settings.FEATURE_QUERY_PREFIX, "query")
    ctx = from_values(ctx, request.headers.items(), settings.FEATURE_HEADER_PREFIX, "header")
    return ctx


def bind_ctx(scope: dict, ctx: FlagContext) -> dict:
    """Shallow-copy ``scope`` with a fresh state mapping carrying ``ctx``."""
    new_scope = dict(scope)
    state = dict(scope.get("state") or {})
    state[settings.FEATURE_STATE_KEY] = ctx
    new_scope["state"] = state
    return new_scope


def req_with_feature_ctx(request: Request) -> Request:
    """
    Parse the request query and headers into a flag overlay and return a new
    request carrying it. The input request is NOT mutated.

    Handy inside a handler or middleware:
        request = req_with_feature_ctx(request)
        if is_enabled(feature_ctx_from_request(request), "paginate"): ...
    """
    ctx = derive_ctx(request)
    return Request(bind_ctx(request.scope, ctx), request.receive)
