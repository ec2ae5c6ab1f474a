"""
Generation Custom Exceptions
"""

from typing import List, Optional


class GenerationError(Exception):
    """Base exception for content generation"""
    pass


class ProviderError(GenerationError):
    """A vendor call failed. Non-fatal: the manager fails over."""
    def __init__(self, provider: str, message: str, status_code: Optional[int] = None):
        self.provider = provider
        self.message = message
        self.status_code = status_code
        super().__init__(f"[{provider}] {message}")


class QualityGateError(GenerationError):
    """Generated text failed heuristic validation"""
    def __init__(self, provider: str, score: float, reason: str):
        self.provider = provider
        self.score = score
        self.reason = reason
        super().__init__(f"[{provider}] Quality check failed: {reason} ({score:.2f})")


class ConsistencyGateError(GenerationError):
    """Generated text diverged from prior context"""
    def __init__(self, provider: str, score: float, threshold: float):
        self.provider = provider
        self.score = score
        self.threshold = threshold
        super().__init__(
            f"[{provider}] Consistency check failed: {score:.2f} < {threshold}"
        )


class AllProvidersExhaustedError(GenerationError):
    """Every candidate provider was skipped or failed"""
    def __init__(
        self,
        last_error: Optional[Exception] = None,
        attempted: Optional[List[str]] = None,
    ):
        self.last_error = last_error
        self.attempted = list(attempted or [])
        detail = str(last_error) if last_error else "all providers rate limited"
        super().__init__(f"All AI providers failed. Last error: {detail}")


AllProvidersFailedError = AllProvidersExhaustedError
