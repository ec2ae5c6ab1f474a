"""
Generation Data Models

Request-scoped records for single generations and whole books.
``to_dict`` renders the camelCase shape used by the HTTP API.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional


def utc_now() -> str:
    """ISO 8601 timestamp in UTC with millisecond precision."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def count_words(text: str) -> int:
    return len(text.split())


class ContentType(str, Enum):
    """Content type tag; selects the token budget."""
    CHAPTER = "chapter"
    TEST = "test"
    GENERAL = "general"


@dataclass
class GenerationRequest:
    prompt: str
    content_type: ContentType = ContentType.CHAPTER
    provider: Optional[str] = None
    max_retries: int = 2
    previous_content: Optional[str] = None
    require_consistency: bool = True
    validate_quality: bool = True


@dataclass
class GenerationResult:
    content: str
    provider: str
    quality_score: float
    consistency_score: Optional[float] = None
    timestamp: str = field(default_factory=utc_now)

    def to_dict(self) -> dict:
        return {
            "content": self.content,
            "provider": self.provider,
            "qualityScore": round(self.quality_score, 4),
            "consistencyScore": (
                round(self.consistency_score, 4)
                if self.consistency_score is not None else None
            ),
            "timestamp": self.timestamp,
        }


@dataclass
class ChapterOutline:
    """One entry of a book outline."""
    title: str
    outline: str = ""
    key_points: List[str] = field(default_factory=list)
    length: Optional[str] = None


@dataclass
class BookSpec:
    """What the book is about; seeds the rolling context."""
    title: str
    genre: str = "General"
    style: str = "engaging"
    audience: str = "general"
    context: str = ""

    @classmethod
    def from_request(
        cls,
        title: str,
        genre: Optional[str] = None,
        style: Optional[str] = None,
        audience: Optional[str] = None,
    ) -> "BookSpec":
        genre = genre or "General"
        style = style or "engaging"
        audience = audience or "general"
        context = (
            f'This book titled "{title}" is a {genre} work written in an '
            f"{style} style for a {audience} audience."
        )
        return cls(title=title, genre=genre, style=style, audience=audience, context=context)


@dataclass
class Chapter:
    number: int
    title: str
    content: str
    provider: Optional[str]
    word_count: int
    quality_score: float = 0.0
    consistency_score: Optional[float] = None
    timestamp: str = field(default_factory=utc_now)
    error: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.error is None

    @classmethod
    def from_result(cls, number: int, title: str, result: GenerationResult) -> "Chapter":
        return cls(
            number=number,
            title=title,
            content=result.content,
            provider=result.provider,
            word_count=count_words(result.content),
            quality_score=result.quality_score,
            consistency_score=result.consistency_score,
            timestamp=result.timestamp,
        )

    @classmethod
    def placeholder(cls, number: int, title: str, error: str) -> "Chapter":
        return cls(
            number=number,
            title=title,
            content=f"[GENERATION FAILED: {error}]",
            provider=None,
            word_count=0,
            quality_score=0.0,
            consistency_score=0.0,
            error=error,
        )

    def to_dict(self) -> dict:
        data = {
            "number": self.number,
            "title": self.title,
            "content": self.content,
            "provider": self.provider,
            "wordCount": self.word_count,
            "qualityScore": round(self.quality_score, 4),
            "consistencyScore": (
                round(self.consistency_score, 4)
                if self.consistency_score is not None else None
            ),
            "timestamp": self.timestamp,
        }
        if self.error is not None:
            data["error"] = self.error
        return data


@dataclass
class BookMetadata:
    start_time: str = field(default_factory=utc_now)
    end_time: Optional[str] = None
    providers: List[str] = field(default_factory=list)
    quality_scores: List[float] = field(default_factory=list)
    total_words: int = 0
    average_quality: float = 0.0
    successful_chapters: int = 0
    generation_time_seconds: float = 0.0

    def to_dict(self) -> dict:
        return {
            "startTime": self.start_time,
            "endTime": self.end_time,
            "providers": list(self.providers),
            "qualityScores": [round(s, 4) for s in self.quality_scores],
            "totalWords": self.total_words,
            "averageQuality": round(self.average_quality, 4),
            "successfulChapters": self.successful_chapters,
            "generationTime": round(self.generation_time_seconds, 2),
        }


@dataclass
class Book:
    title: str
    genre: str = "General"
    chapters: List[Chapter] = field(default_factory=list)
    metadata: BookMetadata = field(default_factory=BookMetadata)

    def finalize(self, elapsed_seconds: float = 0.0) -> None:
        """Compute aggregate metadata from the chapter list."""
        meta = self.metadata
        meta.end_time = utc_now()
        meta.total_words = sum(ch.word_count for ch in self.chapters)
        meta.successful_chapters = sum(1 for ch in self.chapters if ch.succeeded)
        if meta.quality_scores:
            meta.average_quality = sum(meta.quality_scores) / len(meta.quality_scores)
        else:
            meta.average_quality = 0.0
        meta.generation_time_seconds = elapsed_seconds

    def to_dict(self) -> dict:
        return {
            "title": self.title,
            "genre": self.genre,
            "chapters": [ch.to_dict() for ch in self.chapters],
            "metadata": self.metadata.to_dict(),
        }


@dataclass
class RateLimitEntry:
    """Cooldown state for one provider, in clock seconds."""
    last_call: float
    cooldown: float

    def is_active(self, now: float) -> bool:
        return now - self.last_call < self.cooldown
