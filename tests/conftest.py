# tests/conftest.py
import os, sys, pathlib

import pytest

# Add <repo>/src to sys.path so `import featurectx...` works under pytest
ROOT = pathlib.Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from featurectx.core.registry import InMemoryFlagStore, default_store  # noqa: E402
from featurectx.core.resolver import Resolver  # noqa: E402


@pytest.fixture(autouse=True)
def _clean_flags(monkeypatch):
    # No X_FEATURE_* leaking in from the developer's shell
    for key in list(os.environ):
        if key.startswith("X_FEATURE_"):
            monkeypatch.delenv(key, raising=False)
    default_store.clear()
    yield
    default_store.clear()


@pytest.fixture
def store():
    return InMemoryFlagStore()


@pytest.fixture
def resolver(store):
    return Resolver(store=store)
