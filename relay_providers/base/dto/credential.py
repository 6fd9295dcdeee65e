"""
Pydantic DTO for stored provider credentials.

Purpose
-------
A credential is the user-managed bundle (label, base URL, header overrides,
default model, secret reference) the settings repository hands to the chat
runner. Validating it at the boundary keeps malformed records from reaching
adapters.

External dependencies: Pydantic v2 only. No I/O.

Failure modes
-------------
``pydantic.ValidationError`` on empty ids/labels or non-string header values.
The persistence format of credentials is the settings repository's concern.
"""

from __future__ import annotations

from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..models import SecretRef


class SecretRefDTO(BaseModel):
    """Serializable form of :class:`~relay_providers.base.models.SecretRef`."""

    model_config = ConfigDict(frozen=True)

    provider_id: str = Field(..., min_length=1)
    key: str = Field(..., min_length=1)
    credential_id: Optional[str] = None

    def to_ref(self) -> SecretRef:
        return SecretRef(provider_id=self.provider_id, key=self.key, credential_id=self.credential_id)


class ProviderCredential(BaseModel):
    """A named, provider-scoped configuration bundle.

    Attributes:
        id: Stable credential identifier; also the model-list cache key.
        provider_id: Registry id (``openai``, ``anthropic``, ``openrouter``,
            ``openai-compatible``, ``custom-json``).
        label: Display label (non-empty).
        base_url: Optional base URL overriding the registry default.
        headers: Optional header overrides.
        default_model: Optional model used when a turn does not name one.
        secret_ref: Optional reference to the API key in the secret store.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    provider_id: str = Field(..., min_length=1)
    label: str = Field(..., min_length=1)
    base_url: Optional[str] = None
    headers: Optional[Dict[str, str]] = None
    default_model: Optional[str] = None
    secret_ref: Optional[SecretRefDTO] = None

    @field_validator("label")
    @classmethod
    def _label_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("label must be non-empty")
        return value

    @field_validator("base_url", "default_model")
    @classmethod
    def _blank_to_none(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not value.strip():
            return None
        return value


__all__ = ["ProviderCredential", "SecretRefDTO"]
