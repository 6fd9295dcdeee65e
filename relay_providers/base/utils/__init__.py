"""Small provider-agnostic helpers."""

from .model_ids import extract_model_ids

__all__ = ["extract_model_ids"]
