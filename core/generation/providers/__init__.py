"""
Vendor adapters behind one ``generate(prompt, content_type)`` capability.

Selection is a table lookup in ``PROVIDER_REGISTRY``.
"""

from typing import Dict, Optional, Type

import httpx

from .base import ProviderAdapter
from .claude import ClaudeProvider
from .gemini import GeminiProvider
from .openai import OpenAIProvider

PROVIDER_REGISTRY: Dict[str, Type[ProviderAdapter]] = {
    "openai": OpenAIProvider,
    "claude": ClaudeProvider,
    "gemini": GeminiProvider,
}


def build_providers(
    settings,
    client: Optional[httpx.AsyncClient] = None,
) -> Dict[str, ProviderAdapter]:
    """Instantiate every registered adapter from settings."""
    return {
        name: adapter_cls(
            api_key=settings.get_api_key(name),
            model=settings.get_model(name),
            chapter_max_tokens=settings.chapter_max_tokens,
            default_max_tokens=settings.default_max_tokens,
            temperature=settings.temperature,
            timeout=settings.request_timeout_seconds,
            client=client,
        )
        for name, adapter_cls in PROVIDER_REGISTRY.items()
    }


__all__ = [
    "ProviderAdapter",
    "OpenAIProvider",
    "ClaudeProvider",
    "GeminiProvider",
    "PROVIDER_REGISTRY",
    "build_providers",
]
