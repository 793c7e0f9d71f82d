# src/featurectx/core/ctx.py
from __future__ import annotations

import contextvars
from contextlib import contextmanager
from typing import Dict, Iterator, Optional

from featurectx.core.flags import normalize


class FlagContext:
    """
    Immutable, chainable flag overlay.

    Each call to ``with_value`` returns a new link pointing at its parent, so a
    context handed to someone else never changes underneath them. Lookups walk
    the chain from the newest link, which means later values shadow earlier
    ones for the same flag.
    """

    __slots__ = ("_parent", "_name", "_value")

    def __init__(self, parent: Optional["FlagContext"] = None,
                 name: Optional[str] = None, value: bool = False) -> None:
        object.__setattr__(self, "_parent", parent)
        object.__setattr__(self, "_name", None if name is None else normalize(name))
        object.__setattr__(self, "_value", bool(value))

    def __setattr__(self, key, value):
        raise AttributeError("FlagContext is immutable")

    def __delattr__(self, key):
        raise AttributeError("FlagContext is immutable")

    def with_value(self, name: str, value: bool) -> "FlagContext":
        return FlagContext(self, name, value)

    def lookup(self, name: str) -> Optional[bool]:
        """Return the recorded value for ``name`` or None when undefined."""
        key = normalize(name)
        node: Optional[FlagContext] = self
        while node is not None:
            if node._name == key:
                return node._value
            node = node._parent
        return None

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.lookup(name) is not None

    def as_dict(self) -> Dict[str, bool]:
        out: Dict[str, bool] = {}
        node: Optional[FlagContext] = self
        while node is not None:
            if node._name is not None:
                out.setdefault(node._name, node._value)
            node = node._parent
        return out

    def __bool__(self) -> bool:
        return self._name is not None or self._parent is not None

    def __repr__(self) -> str:
        return f"FlagContext({self.as_dict()!r})"


EMPTY = FlagContext()

_flag_ctx: contextvars.ContextVar[FlagContext] = contextvars.ContextVar("flag_ctx", default=EMPTY)


def current_ctx() -> FlagContext:
    return _flag_ctx.get()


def set_ctx(ctx: FlagContext) -> contextvars.Token:
    return _flag_ctx.set(ctx)


def reset_ctx(token: contextvars.Token) -> None:
    _flag_ctx.reset(token)


@contextmanager
def use_ctx(ctx: FlagContext) -> Iterator[FlagContext]:
    """Bind ``ctx`` as the ambient overlay for the duration of the block."""
    token = _flag_ctx.set(ctx)
    try:
        yield ctx
    finally:
        _flag_ctx.reset(token)
