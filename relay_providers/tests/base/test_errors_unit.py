"""Unit tests for the error taxonomy and classification helpers."""
from __future__ import annotations

import asyncio

import httpx
import pytest

from relay_providers.base.errors import (
    MAX_ERROR_MESSAGE_CHARS,
    CancelledError,
    ConfigurationError,
    ErrorCode,
    ProviderError,
    SecurityError,
    TransportError,
    UnknownProviderError,
    classify_exception,
    code_for_status,
)


@pytest.mark.parametrize(
    "status,code",
    [
        (401, ErrorCode.AUTH),
        (403, ErrorCode.AUTH),
        (404, ErrorCode.NOT_FOUND),
        (429, ErrorCode.RATE_LIMIT),
        (500, ErrorCode.SERVER_ERROR),
        (503, ErrorCode.UNAVAILABLE),
        (599, ErrorCode.SERVER_ERROR),
        (418, ErrorCode.VALIDATION),
        (0, ErrorCode.UNKNOWN),
    ],
)
def test_code_for_status(status, code):
    assert code_for_status(status) is code  # nosec B101


def test_transport_error_from_body_truncates_message():
    err = TransportError.from_body(500, "x" * 10_000)
    assert err.status == 500  # nosec B101
    assert err.code is ErrorCode.SERVER_ERROR  # nosec B101
    assert err.message.startswith("HTTP 500: xxx")  # nosec B101
    assert len(err.message) == MAX_ERROR_MESSAGE_CHARS  # nosec B101


def test_cancelled_error_is_status_zero_transport_error():
    err = CancelledError("user stop")
    assert isinstance(err, TransportError)  # nosec B101
    assert err.status == 0 and err.code is ErrorCode.CANCELLED  # nosec B101
    assert err.message == "user stop"  # nosec B101


def test_configuration_errors_share_config_code():
    assert isinstance(UnknownProviderError("nope"), ConfigurationError)  # nosec B101
    assert isinstance(SecurityError("ftp://x"), ConfigurationError)  # nosec B101
    unknown = UnknownProviderError("nope")
    assert unknown.message == "unknown provider" and unknown.provider_id == "nope"  # nosec B101
    assert SecurityError("ftp://x").code is ErrorCode.CONFIG  # nosec B101


def test_provider_error_str_is_compact():
    err = ConfigurationError("missing credential", provider="openai", model="gpt-4o")
    assert str(err) == "openai:gpt-4o config: missing credential"  # nosec B101


def test_classify_exception_precedence():
    assert classify_exception(TransportError("x", 429)) is ErrorCode.RATE_LIMIT  # nosec B101
    assert classify_exception(asyncio.TimeoutError()) is ErrorCode.TIMEOUT  # nosec B101
    assert classify_exception(httpx.ReadTimeout("slow")) is ErrorCode.TIMEOUT  # nosec B101
    assert classify_exception(RuntimeError("connection refused")) is ErrorCode.UNAVAILABLE  # nosec B101
    assert classify_exception(ValueError("weird")) is ErrorCode.UNKNOWN  # nosec B101


def test_classify_exception_reads_response_status():
    request = httpx.Request("GET", "https://api.example.com/")
    response = httpx.Response(401, request=request)
    exc = httpx.HTTPStatusError("denied", request=request, response=response)
    assert classify_exception(exc) is ErrorCode.AUTH  # nosec B101


def test_provider_error_is_raisable():
    with pytest.raises(ProviderError):
        raise ConfigurationError("base URL required")
