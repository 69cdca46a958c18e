"""Scorer selection from settings."""

from __future__ import annotations

import logging

from sentiment_service.config import Settings
from sentiment_service.scoring.claude import ClaudeScorer
from sentiment_service.scoring.lexicon import LexiconScorer
from sentiment_service.scoring.models import Scorer

logger = logging.getLogger(__name__)


def get_scorer(settings: Settings) -> Scorer:
    """Build the scorer named by ``settings.scoring_backend``.

    ``"claude"`` needs ANTHROPIC_API_KEY; without it the lexicon scorer is
    used instead so the service can still start.

    Raises:
        ValueError: If the backend name is not recognized.
    """
    backend = settings.scoring_backend.lower()
    if backend == "lexicon":
        return LexiconScorer()
    if backend == "claude":
        if not settings.anthropic_api_key:
            logger.warning("SCORING_BACKEND=claude but ANTHROPIC_API_KEY is not set; using lexicon")
            return LexiconScorer()
        return ClaudeScorer(api_key=settings.anthropic_api_key, model=settings.llm_model)

    msg = f"Unknown scoring backend: {settings.scoring_backend!r}. Supported: ['lexicon', 'claude']"
    raise ValueError(msg)
