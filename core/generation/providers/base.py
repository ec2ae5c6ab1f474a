"""
Base Provider Adapter
All vendor adapters must inherit from this class
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

import httpx

from config.logging_config import get_logger
from core.generation.exceptions import ProviderError
from core.generation.models import ContentType

logger = get_logger(__name__)

DEFAULT_TIMEOUT_SECONDS = 120.0


class ProviderAdapter(ABC):
    """
    Translates a prompt into one vendor-specific HTTP request and unwraps the
    generated text from the vendor-specific response.

    Subclasses implement:
    - name / display_name
    - build_request()
    - extract_text()

    No retries here; failover belongs to the ProviderManager.
    """

    name: str = ""
    display_name: str = ""

    def __init__(
        self,
        api_key: str,
        model: str,
        *,
        chapter_max_tokens: int = 4000,
        default_max_tokens: int = 2000,
        temperature: float = 0.7,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.api_key = api_key
        self.model = model
        self.chapter_max_tokens = chapter_max_tokens
        self.default_max_tokens = default_max_tokens
        self.temperature = temperature
        self.timeout = httpx.Timeout(timeout)
        self._client = client

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    def max_tokens_for(self, content_type: str) -> int:
        if content_type == ContentType.CHAPTER:
            return self.chapter_max_tokens
        return self.default_max_tokens

    @abstractmethod
    def build_request(self, prompt: str, max_tokens: int) -> Dict[str, Any]:
        """Return ``{"url", "headers", "json"}`` for the vendor call."""
        pass

    @abstractmethod
    def extract_text(self, data: Dict[str, Any]) -> str:
        """Pull the generated text out of a successful response body."""
        pass

    async def generate(self, prompt: str, content_type: str = ContentType.GENERAL) -> str:
        if not self.is_configured:
            raise ProviderError(self.name, f"{self.display_name} API key not configured")

        request = self.build_request(prompt, self.max_tokens_for(content_type))

        try:
            if self._client is not None:
                response = await self._client.post(
                    request["url"], headers=request["headers"], json=request["json"],
                    timeout=self.timeout,
                )
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await client.post(
                        request["url"], headers=request["headers"], json=request["json"],
                    )
        except httpx.TimeoutException as e:
            raise ProviderError(self.name, f"{self.display_name} request timed out") from e
        except httpx.HTTPError as e:
            raise ProviderError(self.name, f"{self.display_name} request failed: {e}") from e

        try:
            data = response.json()
        except ValueError:
            data = None

        if not response.is_success:
            raise ProviderError(
                self.name, self._error_message(data), status_code=response.status_code,
            )
        if not isinstance(data, dict):
            raise ProviderError(self.name, f"{self.display_name} API returned a non-JSON body")

        try:
            text = self.extract_text(data)
        except (KeyError, IndexError, TypeError) as e:
            raise ProviderError(
                self.name, f"{self.display_name} response missing generated text"
            ) from e
        if not isinstance(text, str):
            raise ProviderError(self.name, f"{self.display_name} response missing generated text")
        return text

    def _error_message(self, data: Any) -> str:
        if isinstance(data, dict):
            error = data.get("error")
            if isinstance(error, dict) and error.get("message"):
                return str(error["message"])
        return f"{self.display_name} API error"

    def get_info(self) -> dict:
        return {
            "name": self.name,
            "display_name": self.display_name,
            "model": self.model,
            "configured": self.is_configured,
        }
