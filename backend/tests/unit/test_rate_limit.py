"""
Unit tests for rate limiting helpers.
"""

from starlette.requests import Request

from leitner.config import settings
from leitner.enums import RateLimitType
from leitner.middleware.rate_limit import get_client_identifier, get_rate_limit, limiter


def _request(headers=None, client=("10.0.0.1", 1234)) -> Request:
    scope = {
        "type": "http",
        "method": "GET",
        "path": "/cards",
        "headers": [(k.lower().encode(), v.encode()) for k, v in (headers or {}).items()],
        "client": client,
    }
    return Request(scope)


class TestClientIdentifier:
    """Tests for get_client_identifier."""

    def test_direct_client(self):
        assert get_client_identifier(_request()) == "10.0.0.1"

    def test_forwarded_for_first_hop(self):
        request = _request({"X-Forwarded-For": "203.0.113.7, 10.0.0.2"})

        assert get_client_identifier(request) == "203.0.113.7"


class TestRateLimits:
    """Tests for per-endpoint limits."""

    def test_limits_follow_settings(self):
        assert get_rate_limit(RateLimitType.DEFAULT) == settings.RATE_LIMIT_DEFAULT
        assert get_rate_limit(RateLimitType.ANSWER) == settings.RATE_LIMIT_ANSWER

    def test_limiter_disabled_in_tests(self):
        assert limiter.enabled is False
