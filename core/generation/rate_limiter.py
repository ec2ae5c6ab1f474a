"""
Per-provider cooldown tracking.

Every call attempt stamps the provider with a cooldown: a short one after a
success, a longer one after a failure. A provider is rate limited while the
elapsed time since its last call is below its cooldown. Stale entries are
never swept; they simply stop mattering.

Thread-safe, standalone module.
"""

from __future__ import annotations

import threading
import time
from typing import Callable, Dict, Optional

from config.logging_config import get_logger
from core.generation.models import RateLimitEntry

logger = get_logger(__name__)

DEFAULT_SUCCESS_COOLDOWN = 2.0
DEFAULT_FAILURE_COOLDOWN = 10.0


class CooldownTracker:
    """Cooldown map owned by one ProviderManager.

    Usage::

        tracker = CooldownTracker(success_cooldown=2.0, failure_cooldown=10.0)
        if not tracker.is_rate_limited("openai"):
            ...
            tracker.record_success("openai")
    """

    def __init__(
        self,
        success_cooldown: float = DEFAULT_SUCCESS_COOLDOWN,
        failure_cooldown: float = DEFAULT_FAILURE_COOLDOWN,
        clock: Callable[[], float] = time.time,
    ):
        self.success_cooldown = success_cooldown
        self.failure_cooldown = failure_cooldown
        self._clock = clock
        self._entries: Dict[str, RateLimitEntry] = {}
        self._lock = threading.Lock()

    def is_rate_limited(self, provider: str) -> bool:
        with self._lock:
            entry = self._entries.get(provider)
            if entry is None:
                return False
            return entry.is_active(self._clock())

    def record_success(self, provider: str) -> None:
        self._stamp(provider, self.success_cooldown)

    def record_failure(self, provider: str) -> None:
        self._stamp(provider, self.failure_cooldown)
        logger.debug("Provider %s cooling down for %.1fs", provider, self.failure_cooldown)

    def entry(self, provider: str) -> Optional[RateLimitEntry]:
        with self._lock:
            return self._entries.get(provider)

    def last_used(self, provider: str) -> Optional[float]:
        entry = self.entry(provider)
        return entry.last_call if entry else None

    def remaining(self, provider: str) -> float:
        """Seconds until the provider is free again (0.0 if free)."""
        with self._lock:
            entry = self._entries.get(provider)
            if entry is None:
                return 0.0
            return max(0.0, entry.cooldown - (self._clock() - entry.last_call))

    def reset(self) -> None:
        with self._lock:
            self._entries.clear()

    def _stamp(self, provider: str, cooldown: float) -> None:
        with self._lock:
            self._entries[provider] = RateLimitEntry(last_call=self._clock(), cooldown=cooldown)

    def to_dict(self) -> dict:
        with self._lock:
            return {
                name: {"last_call": e.last_call, "cooldown": e.cooldown}
                for name, e in self._entries.items()
            }
