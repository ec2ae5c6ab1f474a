"""
Test doubles shared by the unit tests.
"""

from typing import Callable, Dict, List, Optional

from config.settings import Settings
from core.generation.consistency import ConsistencyChecker
from core.generation.exceptions import ProviderError
from core.generation.provider_manager import ProviderManager
from core.generation.rate_limiter import CooldownTracker


PARAGRAPH = (
    "The lighthouse keeper climbed the stairs before dawn. However, the storm had not "
    "finished with the coast, and the lamp flickered against the rain. She checked the "
    "oil, trimmed the wick, and watched the grey water heave below the rocks! Meanwhile "
    "the village slept. Therefore nobody saw the small boat drifting toward the reef?"
)

# ~650 words, several paragraphs: passes the default quality gate
GOOD_TEXT = "\n\n".join([PARAGRAPH] * 12)

# ~220 words: a realistic 200-word snippet, under the chapter minimum
SNIPPET_TEXT = "\n\n".join([PARAGRAPH] * 4)

SHORT_TEXT = "Too short. Nothing here. The end."


class FakeClock:
    """Manually advanced clock for cooldown tests."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeProvider:
    """Stands in for a vendor adapter; records every prompt it receives."""

    def __init__(
        self,
        name: str,
        response: str = GOOD_TEXT,
        error: Optional[str] = None,
        fail_when: Optional[Callable[[str], bool]] = None,
        configured: bool = True,
    ):
        self.name = name
        self.response = response
        self.error = error
        self.fail_when = fail_when
        self.is_configured = configured
        self.calls: List[str] = []

    async def generate(self, prompt: str, content_type: str = "general") -> str:
        self.calls.append(prompt)
        if self.error is not None or (self.fail_when and self.fail_when(prompt)):
            raise ProviderError(self.name, self.error or f"{self.name} exploded")
        return self.response


def make_settings(**overrides) -> Settings:
    values = dict(
        openai_api_key="sk-test",
        claude_api_key="claude-test",
        gemini_api_key="gemini-test",
        chapter_pause_seconds=0.0,
        environment="development",
    )
    values.update(overrides)
    return Settings(_env_file=None, **values)


def make_manager(
    providers: Dict[str, FakeProvider],
    clock: Optional[FakeClock] = None,
    settings: Optional[Settings] = None,
    consistency_threshold: Optional[float] = None,
) -> ProviderManager:
    settings = settings or make_settings()
    cooldowns = CooldownTracker(
        success_cooldown=settings.success_cooldown_seconds,
        failure_cooldown=settings.failure_cooldown_seconds,
        clock=clock or FakeClock(),
    )
    consistency = None
    if consistency_threshold is not None:
        consistency = ConsistencyChecker(consistency_threshold)
    return ProviderManager(
        settings,
        providers=providers,
        cooldowns=cooldowns,
        consistency=consistency,
    )
