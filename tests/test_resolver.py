import threading
import uuid

import pytest

import featurectx
from featurectx import EMPTY, Feature, FlagContext, Resolver, InMemoryFlagStore
from featurectx.core.flags import ENV_PREFIX, env_key, parse_bool

TRUE_VALUES = ["true", "TRUE", "True", "t", "T", "1"]
FALSE_VALUES = ["false", "FALSE", "False", "f", "F", "0"]


def _flag() -> Feature:
    return Feature(uuid.uuid4().hex)


@pytest.mark.parametrize("raw", TRUE_VALUES)
def test_parse_bool_true_literals(raw):
    assert parse_bool(raw) is True


@pytest.mark.parametrize("raw", FALSE_VALUES + ["yes", "on", "2", " true", "maybe"])
def test_parse_bool_everything_else_is_false(raw):
    assert parse_bool(raw) is False


def test_undefined_everywhere_is_false():
    assert featurectx.is_enabled(EMPTY, _flag()) is False
    assert featurectx.is_enabled(None, _flag()) is False


def test_global_toggle():
    f = _flag()
    featurectx.enable(f)
    assert featurectx.is_enabled(EMPTY, f) is True
    featurectx.disable(f)
    assert featurectx.is_enabled(EMPTY, f) is False


def test_global_toggle_is_case_insensitive():
    featurectx.enable("Paginate")
    assert featurectx.is_enabled(EMPTY, "PAGINATE") is True
    assert Feature("paginate").is_enabled(EMPTY) is True
    Feature("PAGINATE").disable()
    assert featurectx.is_enabled(EMPTY, "paginate") is False


@pytest.mark.parametrize("on,off", list(zip(TRUE_VALUES, FALSE_VALUES)))
def test_env_preferred_over_store(monkeypatch, on, off):
    f = _flag()
    key = ENV_PREFIX + f.upper()

    featurectx.enable(f)
    monkeypatch.setenv(key, off)
    assert featurectx.is_enabled(EMPTY, f) is False
    monkeypatch.setenv(key, on)
    assert featurectx.is_enabled(EMPTY, f) is True

    featurectx.disable(f)
    monkeypatch.setenv(key, off)
    assert featurectx.is_enabled(EMPTY, f) is False
    monkeypatch.setenv(key, on)
    assert featurectx.is_enabled(EMPTY, f) is True


def test_env_unparseable_is_false_and_still_defined(monkeypatch):
    f = _flag()
    featurectx.enable(f)
    monkeypatch.setenv(env_key(f), "yes")
    assert featurectx.is_enabled(EMPTY, f) is False


def test_empty_env_falls_through(monkeypatch):
    f = _flag()
    featurectx.enable(f)
    monkeypatch.setenv(env_key(f), "")
    assert featurectx.is_enabled(EMPTY, f) is True


def test_env_is_read_live(monkeypatch):
    monkeypatch.setenv("X_FEATURE_PAGINATE", "1")
    assert featurectx.is_enabled(EMPTY, "paginate") is True
    monkeypatch.delenv("X_FEATURE_PAGINATE")
    assert featurectx.is_enabled(EMPTY, "paginate") is False


def test_ctx_preferred_over_store_and_env(monkeypatch):
    f = _flag()
    enabled = featurectx.enable_in_ctx(EMPTY, f)
    disabled = featurectx.disable_in_ctx(EMPTY, f)

    featurectx.enable(f)
    monkeypatch.setenv(env_key(f), "true")
    assert featurectx.is_enabled(enabled, f) is True
    assert featurectx.is_enabled(disabled, f) is False

    featurectx.disable(f)
    monkeypatch.setenv(env_key(f), "false")
    assert featurectx.is_enabled(enabled, f) is True
    assert featurectx.is_enabled(disabled, f) is False


def test_ctx_derivation_does_not_mutate_input():
    base = EMPTY.with_value("other", True)
    derived = featurectx.enable_in_ctx(base, "paginate")

    assert derived is not base
    assert "paginate" not in base
    assert featurectx.is_enabled(base, "paginate") is False
    assert featurectx.is_enabled(derived, "paginate") is True
    assert featurectx.is_enabled(derived, "other") is True


def test_later_ctx_value_shadows_earlier():
    ctx = featurectx.enable_in_ctx(EMPTY, "paginate")
    ctx = featurectx.disable_in_ctx(ctx, "PAGINATE")
    assert featurectx.is_enabled(ctx, "Paginate") is False
    assert ctx.as_dict() == {"paginate": False}


def test_flag_context_is_immutable():
    ctx = FlagContext()
    with pytest.raises(AttributeError):
        ctx._value = True
    with pytest.raises(AttributeError):
        del ctx._value
    assert ctx.with_value("paginate", True).lookup("paginate") is True


def test_ambient_ctx_used_when_none_given():
    ctx = featurectx.enable_in_ctx(EMPTY, "paginate")
    assert Feature("paginate").is_enabled() is False
    with featurectx.use_ctx(ctx):
        assert Feature("paginate").is_enabled() is True
        assert featurectx.is_enabled(None, "paginate") is True
    assert featurectx.current_ctx() is EMPTY


def test_feature_name_normalised():
    f = Feature("Paginate")
    assert f == "paginate"
    assert f == Feature("PAGINATE")
    assert repr(f) == "Feature('paginate')"


def test_isolated_resolver_does_not_touch_default(resolver, store):
    resolver.enable("paginate")
    assert store.get("PAGINATE") is True
    assert resolver.is_enabled(EMPTY, "paginate") is True
    assert featurectx.is_enabled(EMPTY, "paginate") is False


def test_resolver_with_injected_environ():
    r = Resolver(store=InMemoryFlagStore({"paginate": True}), environ={"APP_PAGINATE": "0"}, env_prefix="APP_")
    assert r.is_enabled(EMPTY, "paginate") is False
    assert r.is_enabled(EMPTY.with_value("paginate", True), "paginate") is True


def test_store_initial_values_normalised():
    s = InMemoryFlagStore({"Paginate": 1})
    assert s.snapshot() == {"paginate": True}


def test_store_concurrent_writes(store):
    def worker(i):
        for j in range(200):
            store.set(f"f{j}", (i + j) % 2 == 0)

    threads = [threading.Thread(target=worker, args=(i,)) for i in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert len(store.snapshot()) == 200
