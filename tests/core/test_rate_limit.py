"""Tests for rate limit helpers."""

import json

import pytest
from starlette.requests import Request

from moneycookie.core.rate_limit import rate_limit_exceeded_handler, retry_after_seconds


@pytest.mark.parametrize(
    ("detail", "expected"),
    [
        ("10 per 1 minute", 60),
        ("5 per 30 second", 30),
        ("100 per 2 hour", 7200),
        ("1000 per 1 day", 86400),
        ("something unexpected", 60),
    ],
)
def test_retry_after_seconds(detail, expected) -> None:
    """Test Retry-After derivation from slowapi limit strings."""
    assert retry_after_seconds(detail) == expected


def test_handler_response() -> None:
    """Test the 429 body and Retry-After header."""

    class FakeLimitExceeded:
        detail = "10 per 1 minute"

    request = Request(
        {
            "type": "http",
            "method": "POST",
            "path": "/api/v1/instruments/sync",
            "headers": [],
            "query_string": b"",
            "client": ("10.0.0.1", 1234),
        }
    )

    response = rate_limit_exceeded_handler(request, FakeLimitExceeded())

    assert response.status_code == 429
    assert response.headers["Retry-After"] == "60"
    assert json.loads(response.body) == {
        "detail": "Rate limit exceeded: 10 per 1 minute",
        "retry_after": 60,
    }
