"""
Multi-provider content generation with failover.

Key Features:
- OpenAI, Claude and Gemini adapters behind one interface
- Per-provider cooldowns after every call
- Heuristic quality gate and Jaccard consistency gate
- Sequential chapter loop that tolerates per-chapter failure

Usage:
    from core.generation import ProviderManager, BookOrchestrator, BookSpec, outline_from_titles

    manager = ProviderManager()
    book = await BookOrchestrator(manager).generate_book(
        BookSpec.from_request("The AI Revolution", genre="Non-fiction"),
        outline_from_titles(["Introduction", "The Rise of AI", "Future Implications"]),
    )
"""

from .book_orchestrator import (
    BookOrchestrator,
    build_chapter_prompt,
    build_context_from_chapters,
    outline_from_titles,
)
from .consistency import ConsistencyChecker, jaccard_similarity
from .exceptions import (
    AllProvidersExhaustedError,
    AllProvidersFailedError,
    ConsistencyGateError,
    GenerationError,
    ProviderError,
    QualityGateError,
)
from .models import (
    Book,
    BookMetadata,
    BookSpec,
    Chapter,
    ChapterOutline,
    ContentType,
    GenerationRequest,
    GenerationResult,
    RateLimitEntry,
)
from .provider_manager import ProviderManager
from .quality import HeuristicQualityValidator, QualityCheck, QualityScorer
from .rate_limiter import CooldownTracker

__all__ = [
    "BookOrchestrator",
    "build_chapter_prompt",
    "build_context_from_chapters",
    "outline_from_titles",
    "ConsistencyChecker",
    "jaccard_similarity",
    "AllProvidersExhaustedError",
    "AllProvidersFailedError",
    "ConsistencyGateError",
    "GenerationError",
    "ProviderError",
    "QualityGateError",
    "Book",
    "BookMetadata",
    "BookSpec",
    "Chapter",
    "ChapterOutline",
    "ContentType",
    "GenerationRequest",
    "GenerationResult",
    "RateLimitEntry",
    "ProviderManager",
    "HeuristicQualityValidator",
    "QualityCheck",
    "QualityScorer",
    "CooldownTracker",
]
