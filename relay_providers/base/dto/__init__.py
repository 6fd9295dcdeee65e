"""Validated boundary DTOs (Pydantic)."""

from .credential import ProviderCredential, SecretRefDTO

__all__ = ["ProviderCredential", "SecretRefDTO"]
