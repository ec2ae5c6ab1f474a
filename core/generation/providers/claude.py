"""
Anthropic Messages adapter
"""

from typing import Any, Dict

from .base import ProviderAdapter

CLAUDE_URL = "https://api.anthropic.com/v1/messages"
ANTHROPIC_VERSION = "2023-06-01"


class ClaudeProvider(ProviderAdapter):
    name = "claude"
    display_name = "Claude"

    def build_request(self, prompt: str, max_tokens: int) -> Dict[str, Any]:
        return {
            "url": CLAUDE_URL,
            "headers": {
                "x-api-key": self.api_key,
                "Content-Type": "application/json",
                "anthropic-version": ANTHROPIC_VERSION,
            },
            "json": {
                "model": self.model,
                "max_tokens": max_tokens,
                "messages": [{"role": "user", "content": prompt}],
            },
        }

    def extract_text(self, data: Dict[str, Any]) -> str:
        return data["content"][0]["text"]
