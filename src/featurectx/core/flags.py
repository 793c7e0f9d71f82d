# src/featurectx/core/flags.py
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from featurectx.core.ctx import FlagContext

log = logging.getLogger(__name__)

QUERY_PREFIX = "feature-"
HEADER_PREFIX = "x-feature-"
ENV_PREFIX = "X_FEATURE_"

_TRUE = frozenset(("1", "t", "T", "TRUE", "true", "True"))
_FALSE = frozenset(("0", "f", "F", "FALSE", "false", "False"))


def normalize(name: str) -> str:
    return str(name).lower()


def env_key(name: str, prefix: str = ENV_PREFIX) -> str:
    return prefix + str(name).upper()


def parse_bool(value: str) -> bool:
    """
    Lenient boolean parse. Unknown spellings resolve to False and are never
    raised; callers rely on that.
    """
    if value in _TRUE:
        return True
    if value not in _FALSE:
        log.debug("unparseable flag value %r treated as false", value)
    return False


class Feature(str):
    """
    A named feature toggle. Comparison and hashing use the lower-cased name,
    so Feature("Paginate") == Feature("PAGINATE").
    """

    def __new__(cls, name: str) -> "Feature":
        return super().__new__(cls, normalize(name))

    def is_enabled(self, ctx: Optional["FlagContext"] = None) -> bool:
        from featurectx.core.resolver import is_enabled
        return is_enabled(ctx, self)

    def enable(self) -> None:
        from featurectx.core.resolver import enable
        enable(self)

    def disable(self) -> None:
        from featurectx.core.resolver import disable
        disable(self)

    def __repr__(self) -> str:
        return f"Feature({str(self)!r})"
