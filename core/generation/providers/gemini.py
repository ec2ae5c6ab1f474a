"""
Google Gemini generateContent adapter
"""

from typing import Any, Dict

from .base import ProviderAdapter

GEMINI_URL_TEMPLATE = (
    "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent?key={key}"
)


class GeminiProvider(ProviderAdapter):
    name = "gemini"
    display_name = "Gemini"

    def build_request(self, prompt: str, max_tokens: int) -> Dict[str, Any]:
        return {
            "url": GEMINI_URL_TEMPLATE.format(model=self.model, key=self.api_key),
            "headers": {"Content-Type": "application/json"},
            "json": {
                "contents": [{"parts": [{"text": prompt}]}],
                "generationConfig": {
                    "maxOutputTokens": max_tokens,
                    "temperature": self.temperature,
                },
            },
        }

    def extract_text(self, data: Dict[str, Any]) -> str:
        return data["candidates"][0]["content"]["parts"][0]["text"]
