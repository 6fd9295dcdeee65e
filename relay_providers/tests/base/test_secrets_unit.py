"""Secret store and resolver tests."""
from __future__ import annotations

import pytest

from relay_providers.base.errors import ConfigurationError
from relay_providers.base.models import SecretRef
from relay_providers.base.secrets import (
    MISSING_CREDENTIAL,
    ChainedSecretStore,
    EnvSecretStore,
    InMemorySecretStore,
    require_secret,
    resolve_secret,
)

REF = SecretRef(provider_id="openai", key="apiKey", credential_id="cred-1")


@pytest.mark.asyncio
async def test_memory_store_prefers_credential_scope_then_provider_scope():
    store = InMemorySecretStore()
    store.set(SecretRef("openai", "apiKey"), "provider-wide")
    assert await store.get(REF) == "provider-wide"  # nosec B101

    store.set(REF, "scoped")
    assert await store.get(REF) == "scoped"  # nosec B101
    assert await store.get(SecretRef("openai", "apiKey", "cred-2")) == "provider-wide"  # nosec B101

    store.set(REF, None)
    assert await store.get(REF) == "provider-wide"  # nosec B101


@pytest.mark.asyncio
async def test_resolve_secret_handles_missing_ref_and_empty_values():
    store = InMemorySecretStore()
    store.set(REF, "")
    assert await resolve_secret(None, store) is None  # nosec B101
    assert await resolve_secret(REF, store) is None  # nosec B101


@pytest.mark.asyncio
async def test_require_secret_raises_missing_credential():
    with pytest.raises(ConfigurationError) as info:
        await require_secret(REF, InMemorySecretStore(), provider="openai")
    assert info.value.message == MISSING_CREDENTIAL  # nosec B101
    assert info.value.provider == "openai"  # nosec B101


@pytest.mark.asyncio
async def test_env_and_chained_stores(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-from-env")
    memory = InMemorySecretStore()
    chained = ChainedSecretStore([memory, EnvSecretStore()])
    assert await chained.get(REF) == "sk-from-env"  # nosec B101

    memory.set(REF, "sk-from-vault")
    assert await chained.get(REF) == "sk-from-vault"  # nosec B101
    assert await EnvSecretStore().get(SecretRef("custom-json", "apiKey")) is None  # nosec B101


def test_secret_ref_scoping_and_repr_hold_no_values():
    ref = SecretRef("anthropic", "apiKey")
    scoped = ref.scoped_to("cred-9")
    assert scoped.credential_id == "cred-9"  # nosec B101
    assert scoped.scoped_to("other") is scoped  # nosec B101
    assert "anthropic" in repr(scoped) and "apiKey" in repr(scoped)  # nosec B101
