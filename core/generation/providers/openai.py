"""
OpenAI Chat Completions adapter
"""

from typing import Any, Dict

from .base import ProviderAdapter

OPENAI_URL = "https://api.openai.com/v1/chat/completions"


class OpenAIProvider(ProviderAdapter):
    name = "openai"
    display_name = "OpenAI"

    def build_request(self, prompt: str, max_tokens: int) -> Dict[str, Any]:
        return {
            "url": OPENAI_URL,
            "headers": {
                "Authorization": f"Bearer {self.api_key}",
                "Content-Type": "application/json",
            },
            "json": {
                "model": self.model,
                "messages": [{"role": "user", "content": prompt}],
                "max_tokens": max_tokens,
                "temperature": self.temperature,
            },
        }

    def extract_text(self, data: Dict[str, Any]) -> str:
        return data["choices"][0]["message"]["content"]
