"""
Unit tests for api/rate_limiter.py — inbound per-endpoint limits.
"""
from unittest.mock import MagicMock

from slowapi.errors import RateLimitExceeded

from api.rate_limiter import RateLimitConfig, create_limiter, rate_limit_exceeded_handler


class TestRateLimitConfig:
    def test_defaults(self):
        config = RateLimitConfig()
        assert config.get_limit("generate_book") == "3/minute"
        assert config.get_limit("health") == "120/minute"

    def test_unknown_category_uses_default(self):
        config = RateLimitConfig()
        assert config.get_limit("something_else") == config.defaults["default"]

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("RATE_LIMIT_GENERATE_BOOK", "1/hour")
        config = RateLimitConfig()
        assert config.get_limit("generate_book") == "1/hour"
        assert config.get_all_limits()["generate_book"] == "1/hour"


class TestCreateLimiter:
    def test_disabled(self):
        assert create_limiter(enabled=False).enabled is False


class TestExceededHandler:
    def test_json_429_with_retry_after(self):
        exc = RateLimitExceeded(MagicMock(error_message=None, limit="3 per 1 hour"))

        resp = rate_limit_exceeded_handler(MagicMock(), exc)

        assert resp.status_code == 429
        assert resp.headers["Retry-After"] == "3600"
        assert b"rate_limit_exceeded" in resp.body
