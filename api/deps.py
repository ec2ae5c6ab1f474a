"""
Shared state and dependency getters for API route modules.

The ProviderManager (and the cooldown map it owns) lives for the whole
process; routes receive it through ``Depends(get_provider_manager)`` so tests
can override it.
"""

import threading
import time
from typing import Optional

import httpx
from fastapi import Depends

from config.logging_config import get_logger
from config.settings import settings
from core.generation.book_orchestrator import BookOrchestrator
from core.generation.provider_manager import ProviderManager

logger = get_logger(__name__)

# --- Singletons ---

start_time = time.time()

_manager: Optional[ProviderManager] = None
_manager_lock = threading.Lock()


def get_provider_manager() -> ProviderManager:
    """Get or create the process-wide provider manager."""
    global _manager
    if _manager is None:
        with _manager_lock:
            if _manager is None:
                client = httpx.AsyncClient(timeout=httpx.Timeout(settings.request_timeout_seconds))
                _manager = ProviderManager(settings, http_client=client)
                logger.info("AI providers initialized: %s", ", ".join(_manager.providers))
    return _manager


def set_provider_manager(manager: Optional[ProviderManager]) -> None:
    """Replace the manager instance (app wiring and tests)."""
    global _manager
    with _manager_lock:
        _manager = manager


async def close_provider_manager() -> None:
    global _manager
    if _manager is not None:
        await _manager.aclose()
        _manager = None


def get_book_orchestrator(
    manager: ProviderManager = Depends(get_provider_manager),
) -> BookOrchestrator:
    return BookOrchestrator(manager, manager.settings)


def uptime_seconds() -> float:
    return time.time() - start_time
