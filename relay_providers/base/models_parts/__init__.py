"""Model DTO implementations; import from ``relay_providers.base.models``."""
