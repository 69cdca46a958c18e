"""Shared collaborators handed to route handlers via FastAPI ``Depends``.

Each provider is cached, so the whole process shares one registry, fetcher,
scorer and stats instance. Tests swap them with ``app.dependency_overrides``.
"""

from __future__ import annotations

from functools import lru_cache

from sentiment_service.config import get_service_config, settings
from sentiment_service.hooks.fetcher import HookFetcher
from sentiment_service.hooks.registry import HookRegistry
from sentiment_service.scoring.factory import get_scorer
from sentiment_service.scoring.models import Scorer
from sentiment_service.stats import ServiceStats


@lru_cache(maxsize=1)
def get_hook_registry() -> HookRegistry:
    return HookRegistry.from_config(get_service_config())


@lru_cache(maxsize=1)
def get_hook_fetcher() -> HookFetcher:
    return HookFetcher(timeout=settings.hook_timeout_seconds)


@lru_cache(maxsize=1)
def get_configured_scorer() -> Scorer:
    return get_scorer(settings)


@lru_cache(maxsize=1)
def get_stats() -> ServiceStats:
    return ServiceStats()
