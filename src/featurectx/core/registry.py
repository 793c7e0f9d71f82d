# src/featurectx/core/registry.py
from __future__ import annotations

import threading
from typing import Dict, Optional, Protocol

from featurectx.core.flags import normalize


class FlagStore(Protocol):
    """Default-state store consulted after context and environment."""

    def get(self, name: str) -> Optional[bool]: ...

    def set(self, name: str, value: bool) -> None: ...


class InMemoryFlagStore:
    """
    Thread-safe dict-backed store. Meant for test setup and slow-changing
    opt-in defaults; concurrent toggling has no ordering guarantee.
    """

    def __init__(self, initial: Optional[Dict[str, bool]] = None):
        self._lock = threading.Lock()
        self._state: Dict[str, bool] = {}
        for name, value in (initial or {}).items():
            self._state[normalize(name)] = bool(value)

    def get(self, name: str) -> Optional[bool]:
        with self._lock:
            return self._state.get(normalize(name))

    def set(self, name: str, value: bool) -> None:
        with self._lock:
            self._state[normalize(name)] = bool(value)

    def snapshot(self) -> Dict[str, bool]:
        with self._lock:
            return dict(self._state)

    def clear(self) -> None:
        # tests only
        with self._lock:
            self._state.clear()


default_store = InMemoryFlagStore()
