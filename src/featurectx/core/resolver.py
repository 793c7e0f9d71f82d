# src/featurectx/core/resolver.py
from __future__ import annotations

import os
from typing import Mapping, Optional, Tuple

from featurectx.core.config import settings
from featurectx.core.ctx import FlagContext, current_ctx
from featurectx.core.flags import env_key, normalize, parse_bool
from featurectx.core.logging import get_logger
from featurectx.core.metrics import FEATURE_RESOLUTIONS
from featurectx.core.registry import FlagStore, default_store

log = get_logger(__name__)


class Resolver:
    """
    Resolves a flag in order: context overlay, environment, store, False.

    The first layer that defines a value wins; a context entry set to False
    still counts as defined. ``environ`` defaults to the live ``os.environ``
    and is read on every call.
    """

    def __init__(self, store: Optional[FlagStore] = None,
                 environ: Optional[Mapping[str, str]] = None,
                 env_prefix: Optional[str] = None):
        self.store = store if store is not None else default_store
        self._environ = environ
        self.env_prefix = env_prefix if env_prefix is not None else settings.FEATURE_ENV_PREFIX

    @property
    def environ(self) -> Mapping[str, str]:
        return self._environ if self._environ is not None else os.environ

    def lookup_env(self, name: str) -> Tuple[bool, bool]:
        """Return (value, defined). Unset and empty variables are undefined."""
        raw = self.environ.get(env_key(name, self.env_prefix))
        if raw:
            return parse_bool(raw), True
        return False, False

    def is_enabled(self, ctx: Optional[FlagContext], name: str) -> bool:
        key = normalize(name)
        if ctx is None:
            ctx = current_ctx()

        v = ctx.lookup(key)
        if v is not None:
            return self._decided(key, "context", v)

        v, ok = self.lookup_env(key)
        if ok:
            return self._decided(key, "env", v)

        v = self.store.get(key)
        if v is not None:
            return self._decided(key, "store", v)

        return self._decided(key, "default", False)

    def enable(self, name: str) -> None:
        self.store.set(normalize(name), True)

    def disable(self, name: str) -> None:
        self.store.set(normalize(name), False)

    @staticmethod
    def _decided(name: str, source: str, value: bool) -> bool:
        FEATURE_RESOLUTIONS.labels(source).inc()
        log.debug("feature %s=%s from %s", name, value, source)
        return value


default_resolver = Resolver()


def is_enabled(ctx: Optional[FlagContext], name: str) -> bool:
    return default_resolver.is_enabled(ctx, name)


# enable/disable change the process-wide default and are mostly for tests:
# a value defined in context or environment still wins over them.
def enable(name: str) -> None:
    default_resolver.enable(name)


def disable(name: str) -> None:
    default_resolver.disable(name)


def enable_in_ctx(ctx: Optional[FlagContext], name: str) -> FlagContext:
    return (ctx if ctx is not None else current_ctx()).with_value(name, True)


def disable_in_ctx(ctx: Optional[FlagContext], name: str) -> FlagContext:
    return (ctx if ctx is not None else current_ctx()).with_value(name, False)
