#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Settings - Centralized configuration management
"""

from pathlib import Path
from typing import List
from pydantic_settings import BaseSettings


# Base directory
BASE_DIR = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    """Application settings"""

    # ========== Service ==========
    app_name: str = "Book Forge"
    app_version: str = "1.0.0"
    environment: str = "development"  # development | production
    log_level: str = "INFO"

    # ========== API Keys ==========
    openai_api_key: str = ""
    claude_api_key: str = ""
    gemini_api_key: str = ""

    # ========== Provider & Model ==========
    openai_model: str = "gpt-4"
    claude_model: str = "claude-3-sonnet-20240229"
    gemini_model: str = "gemini-pro"
    temperature: float = 0.7
    chapter_max_tokens: int = 4000
    default_max_tokens: int = 2000
    request_timeout_seconds: float = 120.0

    # ========== Failover ==========
    default_provider: str = "openai"
    failover_chain: List[str] = ["openai", "claude", "gemini"]
    success_cooldown_seconds: float = 2.0
    failure_cooldown_seconds: float = 10.0
    default_max_retries: int = 2
    chapter_max_retries: int = 3

    # ========== Quality ==========
    min_words: int = 500
    max_words: int = 4000
    quality_pass_score: float = 0.6
    consistency_threshold: float = 0.7

    # ========== Book Generation ==========
    context_window_chars: int = 1500
    chapter_tail_chars: int = 800
    chapter_pause_seconds: float = 1.0

    # ========== Inbound Rate Limiting ==========
    rate_limit_enabled: bool = True
    rate_limit: str = "60/minute"

    # CORS origins (comma-separated in env, parsed to list)
    cors_origins: str = ""  # Empty = use default dev origins

    class Config:
        env_file = str(BASE_DIR / ".env")
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"  # Allow extra fields from .env that aren't defined in model

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    def get_api_key(self, provider: str) -> str:
        """Get the credential for a provider ('' when unset)."""
        keys = {
            "openai": self.openai_api_key,
            "claude": self.claude_api_key,
            "gemini": self.gemini_api_key,
        }
        if provider not in keys:
            raise ValueError(f"Unsupported provider: {provider}")
        return keys[provider]

    def get_model(self, provider: str) -> str:
        models = {
            "openai": self.openai_model,
            "claude": self.claude_model,
            "gemini": self.gemini_model,
        }
        if provider not in models:
            raise ValueError(f"Unsupported provider: {provider}")
        return models[provider]

    def is_provider_configured(self, provider: str) -> bool:
        try:
            return bool(self.get_api_key(provider))
        except ValueError:
            return False

    def get_cors_origins(self) -> list:
        """Get CORS origins as a list. Falls back to dev defaults if empty."""
        if self.cors_origins:
            return [o.strip() for o in self.cors_origins.split(",") if o.strip()]
        # Dev defaults
        return [
            "http://localhost:3000",
            "http://127.0.0.1:3000",
            "http://localhost:8000",
            "http://127.0.0.1:8000",
            "http://localhost:5173",
            "http://127.0.0.1:5173",
        ]


# Global settings instance
settings = Settings()
