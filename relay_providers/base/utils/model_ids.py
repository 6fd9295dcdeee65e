"""Parse model listings shared by the ``/v1/models`` endpoints."""

from __future__ import annotations

from typing import Any, List, Mapping


def extract_model_ids(payload: Any) -> List[str]:
    """Return ``data[].id`` from a model listing response, skipping malformed items."""
    data = payload.get("data") if isinstance(payload, Mapping) else None
    if not isinstance(data, list):
        return []
    return [str(item["id"]) for item in data if isinstance(item, Mapping) and item.get("id")]


__all__ = ["extract_model_ids"]
