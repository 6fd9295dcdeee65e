"""Usage normalization tests for the two vendor shapes."""
from __future__ import annotations

import pytest

from relay_providers.base.models import Usage
from relay_providers.base.tokens import map_anthropic_usage, map_openai_usage


def test_openai_total_passes_through_and_is_never_summed():
    assert map_openai_usage({"prompt_tokens": 10, "completion_tokens": 5}) == Usage(10, 5, None)  # nosec B101
    assert map_openai_usage({"prompt_tokens": 1, "completion_tokens": 1, "total_tokens": 9}) == Usage(1, 1, 9)  # nosec B101


def test_openai_accepts_input_output_aliases():
    assert map_openai_usage({"input_tokens": 4, "output_tokens": 2}) == Usage(4, 2, None)  # nosec B101


def test_anthropic_total_is_derived():
    assert map_anthropic_usage({"input_tokens": 10, "output_tokens": 5}) == Usage(10, 5, 15)  # nosec B101
    assert map_anthropic_usage({"output_tokens": 5}) == Usage(None, 5, 5)  # nosec B101
    assert map_anthropic_usage({}) == Usage(None, None, 0)  # nosec B101


@pytest.mark.parametrize("raw", [None, "usage", 3, ["prompt_tokens"]])
def test_absent_usage_maps_to_none(raw):
    assert map_openai_usage(raw) is None  # nosec B101
    assert map_anthropic_usage(raw) is None  # nosec B101


@pytest.mark.parametrize(
    "value,expected",
    [(7, 7), (7.0, 7), ("12", 12), (-1, None), (1.5, None), (True, None), ("abc", None)],
)
def test_counts_are_coerced_to_non_negative_ints(value, expected):
    assert map_openai_usage({"prompt_tokens": value}).prompt_tokens == expected  # nosec B101
