#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Inbound Rate Limiting for the Book Forge API

Provides configurable rate limiting with:
- Per-endpoint limits
- API-key/IP-based limiting
- Custom error responses
- Redis backend support (optional)

Outbound provider cooldowns live in core.generation.rate_limiter; this module
only protects the HTTP surface.

Usage:
    from api.rate_limiter import limiter, rate_limit_config

    @router.post("/api/generate-content")
    @limiter.limit(rate_limit_config.get_limit("generate_content"))
    async def endpoint(request: Request):
        ...
"""

import os
import time
from dataclasses import dataclass, field
from typing import Callable, Dict

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from config.settings import settings


@dataclass
class RateLimitConfig:
    """
    Centralized rate limit configuration.

    Limits are defined as "count/period", e.g. "10/minute".
    """

    # Default limits by endpoint category
    defaults: Dict[str, str] = field(default_factory=lambda: {
        # Health & status - high limit
        "health": "120/minute",
        "status": "60/minute",

        # Generation - lower limit (each call fans out to paid APIs)
        "generate_content": "20/minute",
        "generate_snippet": "20/minute",
        "test_ai": "10/minute",

        # Whole books - expensive, long running
        "generate_book": "3/minute",

        # Fallback
        "default": settings.rate_limit,
    })

    # Override limits from environment
    env_overrides: Dict[str, str] = field(default_factory=dict)

    def __post_init__(self):
        """Load overrides from environment variables."""
        # Format: RATE_LIMIT_GENERATE_BOOK=5/minute
        for key in self.defaults.keys():
            env_key = f"RATE_LIMIT_{key.upper()}"
            if env_value := os.getenv(env_key):
                self.env_overrides[key] = env_value

    def get_limit(self, endpoint: str) -> str:
        """
        Get rate limit for an endpoint category.

        Environment override first, then defaults, then the fallback.
        """
        if endpoint in self.env_overrides:
            return self.env_overrides[endpoint]
        if endpoint in self.defaults:
            return self.defaults[endpoint]
        return self.env_overrides.get("default", self.defaults["default"])

    def get_all_limits(self) -> Dict[str, str]:
        """Get all configured limits."""
        result = self.defaults.copy()
        result.update(self.env_overrides)
        return result


# Create global config instance
rate_limit_config = RateLimitConfig()


def get_client_identifier(request: Request) -> str:
    """
    Get unique identifier for rate limiting.

    Priority:
    1. API key header (first 8 chars)
    2. IP address (fallback)
    """
    if api_key := request.headers.get("X-API-Key"):
        return f"api:{api_key[:8]}"
    return get_remote_address(request)


def create_limiter(
    key_func: Callable = None,
    storage_uri: str = None,
    enabled: bool = True,
) -> Limiter:
    """
    Create a configured rate limiter instance.

    Args:
        key_func: Function to extract rate limit key from request
        storage_uri: Redis URI for distributed rate limiting (optional)
        enabled: Disable to turn every limit into a no-op
    """
    limiter_kwargs = {
        "key_func": key_func or get_client_identifier,
        "default_limits": [rate_limit_config.get_limit("default")],
        "enabled": enabled,
    }

    redis_url = storage_uri or os.getenv("REDIS_URL")
    if redis_url:
        limiter_kwargs["storage_uri"] = redis_url

    return Limiter(**limiter_kwargs)


# Create default limiter instance
limiter = create_limiter(enabled=settings.rate_limit_enabled)


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> Response:
    """
    Custom handler for rate limit exceeded errors.

    Returns a JSON response with a Retry-After header.
    """
    limit_value = str(exc.detail) if hasattr(exc, "detail") else "Rate limit exceeded"

    retry_after = 60
    if "second" in limit_value:
        retry_after = 1
    elif "hour" in limit_value:
        retry_after = 3600

    return JSONResponse(
        status_code=429,
        content={
            "error": "rate_limit_exceeded",
            "message": "Too many requests. Please slow down.",
            "detail": limit_value,
            "retry_after_seconds": retry_after,
            "timestamp": time.time(),
        },
        headers={
            "Retry-After": str(retry_after),
            "X-RateLimit-Limit": limit_value,
        },
    )
