"""
Book Orchestrator

Drives the chapter loop: one ProviderManager call per outline entry, strictly
in order, with a rolling context built from the tail of the last two chapters.
A chapter whose providers are all exhausted becomes a placeholder and the
loop carries on.
"""

import asyncio
import time
from typing import Awaitable, Callable, List, Optional, Sequence

from config.logging_config import get_logger
from core.generation.exceptions import AllProvidersExhaustedError
from core.generation.models import (
    Book,
    BookSpec,
    Chapter,
    ChapterOutline,
    ContentType,
)
from core.generation.provider_manager import ProviderManager

logger = get_logger(__name__)

DEFAULT_CHAPTER_LENGTH = "2000-3000"
OUTLINE_CHAPTER_LENGTH = "1500-2500 words"
CONTEXT_CHAPTERS = 2
DEFAULT_OUTLINE = "Chapter {index} should cover the main aspects of {title}"


def outline_from_titles(titles: Sequence[str]) -> List[ChapterOutline]:
    """Turn a plain list of chapter titles into outline entries."""
    return [
        ChapterOutline(
            title=title,
            outline=DEFAULT_OUTLINE.format(index=index, title=title),
            key_points=[],
            length=OUTLINE_CHAPTER_LENGTH,
        )
        for index, title in enumerate(titles, start=1)
    ]


def build_chapter_prompt(
    book_spec: BookSpec,
    chapter: ChapterOutline,
    previous_content: str,
    context_window: int = 1500,
) -> str:
    key_points = ", ".join(chapter.key_points) if chapter.key_points else "None specified"
    recent_context = previous_content[-context_window:] if context_window > 0 else ""
    return f"""
BOOK CONTEXT:
Title: {book_spec.title}
Genre: {book_spec.genre}
Style: {book_spec.style}
Target Audience: {book_spec.audience}

PREVIOUS CONTEXT:
{recent_context}

CHAPTER TO WRITE:
Title: {chapter.title}
Outline: {chapter.outline}
Key Points: {key_points}

INSTRUCTIONS:
Write a compelling {chapter.length or DEFAULT_CHAPTER_LENGTH} word chapter that:
1. Maintains consistency with the previous content
2. Follows the chapter outline closely
3. Matches the book's established tone and style
4. Includes engaging storytelling elements
5. Ends with a natural transition to the next chapter

Write the chapter content now:
"""


def build_context_from_chapters(chapters: Sequence[Chapter], tail_chars: int = 800) -> str:
    """Tail of the last two chapters, each headed by its number and title."""
    return "\n\n".join(
        f"Chapter {ch.number}: {ch.title}\n{ch.content[-tail_chars:] if tail_chars > 0 else ''}"
        for ch in list(chapters)[-CONTEXT_CHAPTERS:]
    )


class BookOrchestrator:
    """
    Sequential chapter generation on top of a ProviderManager.

    Usage:
        orchestrator = BookOrchestrator(manager)
        book = await orchestrator.generate_book(
            BookSpec.from_request("The Lighthouse", genre="Fiction"),
            outline_from_titles(["Intro", "Body", "End"]),
        )
    """

    def __init__(
        self,
        manager: ProviderManager,
        settings=None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        progress_callback: Optional[Callable[[int, int, Chapter], None]] = None,
    ):
        self.manager = manager
        self.settings = settings or manager.settings
        self._sleep = sleep
        self.progress_callback = progress_callback

    async def generate_book(
        self,
        book_spec: BookSpec,
        chapter_outline: Sequence[ChapterOutline],
    ) -> Book:
        started = time.monotonic()
        book = Book(title=book_spec.title, genre=book_spec.genre)
        previous_content = book_spec.context or ""
        total = len(chapter_outline)

        logger.info('Starting book generation: "%s" with %d chapters', book_spec.title, total)

        for index, outline in enumerate(chapter_outline, start=1):
            if index > 1 and self.settings.chapter_pause_seconds > 0:
                await self._sleep(self.settings.chapter_pause_seconds)

            logger.info("Generating Chapter %d: %s", index, outline.title)
            prompt = build_chapter_prompt(
                book_spec, outline, previous_content, self.settings.context_window_chars,
            )

            try:
                result = await self.manager.generate_content(
                    prompt,
                    content_type=ContentType.CHAPTER,
                    require_consistency=True,
                    previous_content=previous_content,
                    max_retries=self.settings.chapter_max_retries,
                )
            except AllProvidersExhaustedError as e:
                logger.error("Failed to generate chapter %d: %s", index, e)
                chapter = Chapter.placeholder(index, outline.title, str(e))
                book.chapters.append(chapter)
                self._report(index, total, chapter)
                continue

            chapter = Chapter.from_result(index, outline.title, result)
            book.chapters.append(chapter)
            book.metadata.providers.append(result.provider)
            book.metadata.quality_scores.append(result.quality_score)

            previous_content = build_context_from_chapters(
                book.chapters, self.settings.chapter_tail_chars,
            )
            self._report(index, total, chapter)

        book.finalize(elapsed_seconds=time.monotonic() - started)
        logger.info(
            'Book "%s" completed in %.1fs: %d words, %d/%d chapters successful',
            book.title,
            book.metadata.generation_time_seconds,
            book.metadata.total_words,
            book.metadata.successful_chapters,
            total,
        )
        return book

    def _report(self, index: int, total: int, chapter: Chapter) -> None:
        if self.progress_callback:
            self.progress_callback(index, total, chapter)
