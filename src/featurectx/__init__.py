# src/featurectx/__init__.py
from featurectx.core.ctx import EMPTY, FlagContext, current_ctx, use_ctx
from featurectx.core.flags import ENV_PREFIX, HEADER_PREFIX, QUERY_PREFIX, Feature, parse_bool
from featurectx.core.registry import FlagStore, InMemoryFlagStore, default_store
from featurectx.core.resolver import (
    Resolver,
    disable,
    disable_in_ctx,
    enable,
    enable_in_ctx,
    is_enabled,
)
from featurectx.http.request import feature_ctx_from_request, req_with_feature_ctx

__all__ = [
    "EMPTY",
    "ENV_PREFIX",
    "HEADER_PREFIX",
    "QUERY_PREFIX",
    "Feature",
    "FlagContext",
    "FlagStore",
    "InMemoryFlagStore",
    "Resolver",
    "current_ctx",
    "default_store",
    "disable",
    "disable_in_ctx",
    "enable",
    "enable_in_ctx",
    "feature_ctx_from_request",
    "is_enabled",
    "parse_bool",
    "req_with_feature_ctx",
    "use_ctx",
]
