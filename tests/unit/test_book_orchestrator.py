"""
Unit tests for core/generation/book_orchestrator.py
"""

import pytest

from core.generation.book_orchestrator import (
    OUTLINE_CHAPTER_LENGTH,
    BookOrchestrator,
    build_chapter_prompt,
    build_context_from_chapters,
    outline_from_titles,
)
from core.generation.models import BookSpec, Chapter, ChapterOutline
from tests.fakes import GOOD_TEXT, FakeProvider, make_manager, make_settings


def no_cooldown_settings(**overrides):
    values = dict(success_cooldown_seconds=0.0, failure_cooldown_seconds=0.0)
    values.update(overrides)
    return make_settings(**values)


@pytest.fixture
def book_spec():
    return BookSpec.from_request("The Lighthouse", genre="Fiction")


def make_orchestrator(providers, settings=None, **kwargs):
    settings = settings or no_cooldown_settings()
    manager = make_manager(providers, settings=settings, consistency_threshold=0.0)
    return BookOrchestrator(manager, settings, **kwargs)


class TestOutlineFromTitles:
    def test_defaults(self):
        outline = outline_from_titles(["Intro", "Body"])
        assert outline[1] == ChapterOutline(
            title="Body",
            outline="Chapter 2 should cover the main aspects of Body",
            key_points=[],
            length=OUTLINE_CHAPTER_LENGTH,
        )


class TestBuildChapterPrompt:
    def test_contains_book_and_chapter_fields(self, book_spec):
        chapter = ChapterOutline("Intro", "Meet the keeper", ["storm", "lamp"], "1000 words")
        prompt = build_chapter_prompt(book_spec, chapter, "earlier text")

        assert "Title: The Lighthouse" in prompt
        assert "Genre: Fiction" in prompt
        assert "Title: Intro" in prompt
        assert "Outline: Meet the keeper" in prompt
        assert "Key Points: storm, lamp" in prompt
        assert "Write a compelling 1000 words word chapter" in prompt
        assert "earlier text" in prompt

    def test_no_key_points(self, book_spec):
        prompt = build_chapter_prompt(book_spec, ChapterOutline("Intro"), "")
        assert "Key Points: None specified" in prompt
        assert "Write a compelling 2000-3000 word chapter" in prompt

    def test_previous_content_truncated_to_window(self, book_spec):
        previous = "A" * 100 + "B" * 50
        prompt = build_chapter_prompt(book_spec, ChapterOutline("Intro"), previous, context_window=50)
        assert "B" * 50 in prompt
        assert "A" not in prompt.split("PREVIOUS CONTEXT:")[1].split("CHAPTER TO WRITE:")[0]


class TestBuildContext:
    def test_last_two_chapters_only(self):
        chapters = [
            Chapter(number=n, title=f"T{n}", content=f"content {n}", provider="openai", word_count=2)
            for n in (1, 2, 3)
        ]
        context = build_context_from_chapters(chapters)
        assert context == "Chapter 2: T2\ncontent 2\n\nChapter 3: T3\ncontent 3"

    def test_tail_chars(self):
        chapter = Chapter(number=1, title="T", content="x" * 10 + "y" * 5, provider="claude", word_count=1)
        assert build_context_from_chapters([chapter], tail_chars=5) == "Chapter 1: T\nyyyyy"

    def test_empty(self):
        assert build_context_from_chapters([]) == ""


class TestGenerateBook:
    @pytest.mark.asyncio
    async def test_all_chapters_succeed(self, book_spec, fake_providers):
        orchestrator = make_orchestrator(fake_providers)

        book = await orchestrator.generate_book(
            book_spec, outline_from_titles(["Intro", "Body", "End"]),
        )

        assert book.title == "The Lighthouse"
        assert book.genre == "Fiction"
        assert [ch.number for ch in book.chapters] == [1, 2, 3]
        assert [ch.title for ch in book.chapters] == ["Intro", "Body", "End"]
        assert all(ch.provider is not None for ch in book.chapters)
        assert all(ch.error is None for ch in book.chapters)

        meta = book.metadata
        assert meta.successful_chapters == 3
        assert meta.providers == ["openai", "openai", "openai"]
        assert len(meta.quality_scores) == 3
        assert meta.total_words == 3 * len(GOOD_TEXT.split())
        assert meta.average_quality == pytest.approx(sum(meta.quality_scores) / 3)
        assert meta.end_time is not None

    @pytest.mark.asyncio
    async def test_failed_chapter_becomes_placeholder(self, book_spec):
        fail_body = lambda prompt: "Title: Body" in prompt  # noqa: E731
        providers = {
            name: FakeProvider(name, fail_when=fail_body)
            for name in ("openai", "claude", "gemini")
        }
        orchestrator = make_orchestrator(providers)

        book = await orchestrator.generate_book(
            book_spec, outline_from_titles(["Intro", "Body", "End"]),
        )

        assert len(book.chapters) == 3
        body = book.chapters[1]
        assert body.error is not None
        assert "All AI providers failed" in body.error
        assert body.content.startswith("[GENERATION FAILED:")
        assert body.word_count == 0
        assert body.provider is None

        meta = book.metadata
        assert meta.successful_chapters == 2
        assert len(meta.providers) == 2
        assert meta.total_words == 2 * len(GOOD_TEXT.split())
        # placeholders do not drag the average down
        assert meta.average_quality == pytest.approx(sum(meta.quality_scores) / 2)

    @pytest.mark.asyncio
    async def test_every_chapter_fails(self, book_spec):
        providers = {
            name: FakeProvider(name, error="down") for name in ("openai", "claude", "gemini")
        }
        orchestrator = make_orchestrator(providers)

        book = await orchestrator.generate_book(book_spec, outline_from_titles(["Intro", "Body"]))

        assert [ch.succeeded for ch in book.chapters] == [False, False]
        assert book.metadata.successful_chapters == 0
        assert book.metadata.average_quality == 0.0
        assert book.metadata.total_words == 0

    @pytest.mark.asyncio
    async def test_rolling_context_uses_previous_chapter(self, book_spec):
        provider = FakeProvider("openai", response=GOOD_TEXT + "\nThe lamp went dark.")
        orchestrator = make_orchestrator(
            {"openai": provider},
            settings=no_cooldown_settings(default_provider="openai", failover_chain=["openai"]),
        )

        await orchestrator.generate_book(book_spec, outline_from_titles(["Intro", "Body"]))

        first, second = provider.calls
        assert 'This book titled "The Lighthouse" is a Fiction work' in first
        assert "Chapter 1: Intro\n" in second
        assert "The lamp went dark." in second
        assert "This book titled" not in second

    @pytest.mark.asyncio
    async def test_pause_between_chapters_only(self, book_spec, fake_providers):
        pauses = []

        async def fake_sleep(seconds):
            pauses.append(seconds)

        orchestrator = make_orchestrator(
            fake_providers,
            settings=no_cooldown_settings(chapter_pause_seconds=1.5),
            sleep=fake_sleep,
        )

        await orchestrator.generate_book(book_spec, outline_from_titles(["A", "B", "C"]))

        assert pauses == [1.5, 1.5]

    @pytest.mark.asyncio
    async def test_progress_callback(self, book_spec, fake_providers):
        seen = []
        orchestrator = make_orchestrator(
            fake_providers,
            progress_callback=lambda index, total, chapter: seen.append((index, total, chapter.title)),
        )

        await orchestrator.generate_book(book_spec, outline_from_titles(["A", "B"]))

        assert seen == [(1, 2, "A"), (2, 2, "B")]

    @pytest.mark.asyncio
    async def test_to_dict_shape(self, book_spec, fake_providers):
        orchestrator = make_orchestrator(fake_providers)
        book = await orchestrator.generate_book(book_spec, outline_from_titles(["A"]))

        data = book.to_dict()
        assert set(data) == {"title", "genre", "chapters", "metadata"}
        assert set(data["metadata"]) == {
            "startTime", "endTime", "providers", "qualityScores", "totalWords",
            "averageQuality", "successfulChapters", "generationTime",
        }
        assert data["chapters"][0]["wordCount"] == len(GOOD_TEXT.split())
        assert "error" not in data["chapters"][0]
