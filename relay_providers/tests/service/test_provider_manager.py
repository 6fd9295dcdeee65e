"""ProviderManager tests: config merging, model listing cache and model choice."""
from __future__ import annotations

import pytest

from relay_providers.base.errors import TransportError, UnknownProviderError
from relay_providers.base.models import SecretRef
from relay_providers.config.defaults import OPENAI_FALLBACK_MODELS
from relay_providers.service import ModelListCache, ProviderManager
from relay_providers.tests.fakes import RecordingTransport, make_credential, ok, secret_store_with

MODELS = ok({"data": [{"id": "gpt-4o"}, {"id": "gpt-4o-mini"}]})


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


def _manager(*script, clock=None):
    transport = RecordingTransport(*script)
    cache = ModelListCache(ttl_seconds=100, clock=clock or FakeClock())
    manager = ProviderManager(transport=transport, secret_store=secret_store_with("openai", "sk-1"), cache=cache)
    return manager, transport


def test_ensure_config_uses_registry_base_only_when_credential_has_none():
    manager, _ = _manager()
    config = manager.ensure_config(make_credential(headers={"X-Title": "app"}))
    assert config.base_url == "https://api.openai.com"  # nosec B101
    assert config.headers == {"X-Title": "app"}  # nosec B101
    assert config.secret_ref == SecretRef("openai", "apiKey", credential_id="cred-1")  # nosec B101

    own = manager.ensure_config(make_credential(base_url="https://proxy.example/openai"))
    assert own.base_url == "https://proxy.example/openai"  # nosec B101


def test_ensure_config_default_model_from_environment(monkeypatch):
    manager, _ = _manager()
    monkeypatch.setenv("OPENAI_MODEL", "gpt-4.1-mini")
    assert manager.ensure_config(make_credential()).default_model == "gpt-4.1-mini"  # nosec B101
    pinned = make_credential(default_model="gpt-4o")
    assert manager.ensure_config(pinned).default_model == "gpt-4o"  # nosec B101


def test_adapter_is_memoized_per_provider():
    manager, _ = _manager()
    first = manager.adapter_for(make_credential(cred_id="a"))
    assert manager.adapter_for(make_credential(cred_id="b")) is first  # nosec B101
    with pytest.raises(UnknownProviderError):
        manager.adapter_for(make_credential("mystery"))


@pytest.mark.asyncio
async def test_list_models_is_cached_until_ttl_expires():
    clock = FakeClock()
    manager, transport = _manager(MODELS, MODELS, clock=clock)
    cred = make_credential()

    assert await manager.list_models(cred) == ["gpt-4o", "gpt-4o-mini"]  # nosec B101
    assert await manager.list_models(cred) == ["gpt-4o", "gpt-4o-mini"]  # nosec B101
    assert transport.calls == 1  # nosec B101

    clock.now += 101
    await manager.list_models(cred)
    assert transport.calls == 2  # nosec B101


@pytest.mark.asyncio
async def test_force_refresh_bypasses_cache():
    manager, transport = _manager(MODELS, ok({"data": [{"id": "new"}]}))
    cred = make_credential()
    await manager.list_models(cred)
    assert await manager.list_models(cred, force_refresh=True) == ["new"]  # nosec B101
    assert await manager.list_models(cred) == ["new"]  # nosec B101
    assert transport.calls == 2  # nosec B101


@pytest.mark.asyncio
async def test_empty_listing_is_not_cached():
    manager, transport = _manager(ok({"data": []}), MODELS)
    cred = make_credential()
    assert await manager.list_models(cred) == []  # nosec B101
    assert await manager.list_models(cred) == ["gpt-4o", "gpt-4o-mini"]  # nosec B101
    assert transport.calls == 2  # nosec B101


@pytest.mark.asyncio
async def test_list_models_propagates_failures():
    manager, _ = _manager(TransportError.from_body(401, "nope"))
    with pytest.raises(TransportError):
        await manager.list_models(make_credential())


@pytest.mark.asyncio
async def test_available_models_falls_back_to_static_list():
    manager, _ = _manager(TransportError.from_body(503, "down"), ok({"data": []}))
    cred = make_credential()
    assert await manager.available_models(cred) == OPENAI_FALLBACK_MODELS  # nosec B101
    assert await manager.available_models(cred) == OPENAI_FALLBACK_MODELS  # nosec B101


@pytest.mark.asyncio
async def test_choose_model_prefers_credential_default():
    manager, transport = _manager()
    assert await manager.choose_model(make_credential(default_model="gpt-4o")) == "gpt-4o"  # nosec B101
    assert transport.calls == 0  # nosec B101


@pytest.mark.asyncio
async def test_choose_model_uses_configured_default_without_listing(monkeypatch):
    manager, transport = _manager(MODELS)
    monkeypatch.setenv("OPENAI_MODEL", "gpt-4.1-mini")
    assert await manager.choose_model(make_credential()) == "gpt-4.1-mini"  # nosec B101
    assert transport.calls == 0  # nosec B101


@pytest.mark.asyncio
async def test_choose_model_uses_first_listed_model():
    manager, _ = _manager(MODELS)
    assert await manager.choose_model(make_credential()) == "gpt-4o"  # nosec B101


@pytest.mark.asyncio
async def test_choose_model_never_raises():
    manager, _ = _manager(TransportError("connection refused"), ok({"data": []}))
    assert await manager.choose_model(make_credential(cred_id="x")) == ""  # nosec B101
    assert await manager.choose_model(make_credential(cred_id="y")) == ""  # nosec B101


@pytest.mark.asyncio
async def test_choose_model_for_unknown_provider_returns_empty():
    manager, transport = _manager()
    assert await manager.choose_model(make_credential("mystery")) == ""  # nosec B101
    assert transport.calls == 0  # nosec B101
