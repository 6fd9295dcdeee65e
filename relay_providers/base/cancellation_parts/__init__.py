"""Cancellation implementation parts; import from ``relay_providers.base.cancellation``."""
