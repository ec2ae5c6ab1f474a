"""
Provider Manager: multi-provider failover for content generation.

Tries the preferred provider, then the fixed failover chain, and runs every
generated text through three gates:

  1. Cooldown      - rate limited providers are skipped without a call
  2. Quality       - heuristic length/coherence score (optional)
  3. Consistency   - Jaccard overlap with prior content (optional)

A failed quality or consistency gate spends one unit of the retry budget and
moves on to the NEXT provider; the same provider is never called twice within
one generation. Once the budget is spent, the content that failed the gate is
accepted. Calls are strictly sequential.
"""

from __future__ import annotations

from typing import Dict, List, Optional

from config.logging_config import get_logger
from core.generation.consistency import ConsistencyChecker
from core.generation.exceptions import (
    AllProvidersExhaustedError,
    ConsistencyGateError,
    GenerationError,
    ProviderError,
    QualityGateError,
)
from core.generation.models import ContentType, GenerationRequest, GenerationResult
from core.generation.providers import ProviderAdapter, build_providers
from core.generation.quality import HeuristicQualityValidator, QualityScorer
from core.generation.rate_limiter import CooldownTracker

logger = get_logger(__name__)

SNIPPET_PROMPT = "Write a compelling 200-word introduction about: {topic}"


class ProviderManager:
    """Failover orchestrator over the registered provider adapters.

    Usage::

        manager = ProviderManager()
        result = await manager.generate_content(
            "Write about lighthouses",
            content_type=ContentType.GENERAL,
            provider="claude",
        )
        print(result.provider, result.quality_score)
    """

    def __init__(
        self,
        settings=None,
        providers: Optional[Dict[str, ProviderAdapter]] = None,
        cooldowns: Optional[CooldownTracker] = None,
        quality: Optional[QualityScorer] = None,
        consistency: Optional[ConsistencyChecker] = None,
        http_client=None,
    ):
        if settings is None:
            from config.settings import settings as default_settings
            settings = default_settings
        self.settings = settings
        self._http_client = http_client

        self.providers: Dict[str, ProviderAdapter] = (
            providers if providers is not None else build_providers(settings, client=http_client)
        )
        self.default_provider = settings.default_provider
        self.failover_chain: List[str] = list(settings.failover_chain)
        self.cooldowns = cooldowns or CooldownTracker(
            success_cooldown=settings.success_cooldown_seconds,
            failure_cooldown=settings.failure_cooldown_seconds,
        )
        self.quality = quality or HeuristicQualityValidator(
            min_words=settings.min_words,
            max_words=settings.max_words,
            pass_score=settings.quality_pass_score,
        )
        self.consistency = consistency or ConsistencyChecker(settings.consistency_threshold)

    # ------------------------------------------------------------------
    # Candidate ordering
    # ------------------------------------------------------------------

    def candidate_order(self, preferred: Optional[str] = None) -> List[str]:
        """Preferred provider first, then the failover chain, de-duplicated."""
        preferred = preferred or self.default_provider
        if preferred not in self.providers:
            raise ValueError(f"Unknown provider: {preferred}")

        order: List[str] = []
        for name in [preferred, *self.failover_chain]:
            if name in self.providers and name not in order:
                order.append(name)
        return order

    # ------------------------------------------------------------------
    # Generation
    # ------------------------------------------------------------------

    async def generate_content(
        self,
        prompt: str,
        *,
        content_type: ContentType = ContentType.CHAPTER,
        provider: Optional[str] = None,
        require_consistency: bool = True,
        previous_content: Optional[str] = None,
        max_retries: Optional[int] = None,
        validate_quality: bool = True,
    ) -> GenerationResult:
        request = GenerationRequest(
            prompt=prompt,
            content_type=ContentType(content_type),
            provider=provider,
            max_retries=self.settings.default_max_retries if max_retries is None else max_retries,
            previous_content=previous_content,
            require_consistency=require_consistency,
            validate_quality=validate_quality,
        )
        return await self.generate(request)

    async def generate(self, request: GenerationRequest) -> GenerationResult:
        attempts = 0
        last_error: Optional[Exception] = None
        attempted: List[str] = []
        check_consistency = bool(request.require_consistency and request.previous_content)

        for name in self.candidate_order(request.provider):
            if self.cooldowns.is_rate_limited(name):
                logger.info("Provider %s rate limited, trying next...", name)
                continue

            attempted.append(name)
            try:
                content = await self.providers[name].generate(request.prompt, request.content_type)
            except ProviderError as e:
                logger.warning("Provider %s failed: %s", name, e.message)
                last_error = e
                self.cooldowns.record_failure(name)
                continue

            quality = self.quality.validate(content)
            if request.validate_quality and not quality.passes:
                logger.info("Quality check failed for %s: %s", name, quality.reason)
                attempts += 1
                if attempts < request.max_retries:
                    last_error = QualityGateError(name, quality.score, quality.reason)
                    continue

            consistency_score: Optional[float] = None
            if request.previous_content:
                consistency_score = self.consistency.score(content, request.previous_content)
            if check_consistency and not self.consistency.passes(consistency_score):
                logger.info("Consistency check failed for %s: %.3f", name, consistency_score)
                attempts += 1
                if attempts < request.max_retries:
                    last_error = ConsistencyGateError(
                        name, consistency_score, self.consistency.threshold,
                    )
                    continue

            self.cooldowns.record_success(name)
            logger.info(
                "Generated %d words with %s (quality %.2f)",
                quality.word_count, name, quality.score,
            )
            return GenerationResult(
                content=content,
                provider=name,
                quality_score=quality.score,
                consistency_score=consistency_score,
            )

        raise AllProvidersExhaustedError(last_error, attempted)

    async def generate_snippet(self, topic: str, provider: Optional[str] = None) -> GenerationResult:
        """Short introduction about a topic.

        Scored for quality but never gated on it; only provider errors fail over.
        """
        if not topic or not topic.strip():
            raise GenerationError("topic must be a non-empty string")
        return await self.generate_content(
            SNIPPET_PROMPT.format(topic=topic.strip()),
            content_type=ContentType.GENERAL,
            provider=provider,
            require_consistency=False,
            validate_quality=False,
        )

    # ------------------------------------------------------------------
    # Status
    # ------------------------------------------------------------------

    def get_provider_status(self) -> List[dict]:
        return [
            {
                "name": name,
                "available": not self.cooldowns.is_rate_limited(name),
                "configured": adapter.is_configured,
                "lastUsed": self.cooldowns.last_used(name),
            }
            for name, adapter in self.providers.items()
        ]

    async def aclose(self) -> None:
        if self._http_client is not None:
            await self._http_client.aclose()
