"""End-to-end task pipeline: resolve -> fetch -> interpret -> score -> assemble."""

from __future__ import annotations

import logging

from sentiment_service.hooks.errors import HookError
from sentiment_service.hooks.fetcher import HookFetcher
from sentiment_service.hooks.interpreter import interpret
from sentiment_service.hooks.models import TaskRequest, TaskResult
from sentiment_service.hooks.registry import HookRegistry
from sentiment_service.hooks.series import assemble_result
from sentiment_service.scoring.models import Scorer
from sentiment_service.stats import ServiceStats

logger = logging.getLogger(__name__)


def run_task(
    request: TaskRequest,
    *,
    registry: HookRegistry,
    fetcher: HookFetcher,
    scorer: Scorer,
    stats: ServiceStats,
) -> TaskResult:
    """Score the text a hook returns for one record.

    Every step runs sequentially on the calling thread. Any failure aborts the
    whole task; no partial result is returned.

    Args:
        request: Record id and optional hook id.
        registry: Configured hooks.
        fetcher: Performs the single outbound GET.
        scorer: Scores the whole text and, for timed hooks, each segment.
        stats: Counters updated for hook calls, successes and failures.

    Returns:
        An Analysis for untimed hooks, a SeriesResult for timed hooks.

    Raises:
        HookError: Any resolution, fetch or interpretation failure.
        Exception: Whatever the scorer raises, counted as a failure first.
    """
    try:
        # 1. Resolve (no network call for unknown hooks)
        descriptor = registry.resolve(request.hook_id)

        # 2. Fetch
        stats.record_hook_call()
        raw = fetcher.fetch(descriptor, request.record_id)

        # 3. Interpret
        segments, text = interpret(descriptor, raw)
    except HookError as exc:
        stats.record_failure()
        logger.warning("Task for record %s failed: %s", request.record_id, exc)
        raise

    # 4. Score + assemble
    try:
        whole = scorer.score(text)
        result = assemble_result(
            whole, segments, lambda segment_text: scorer.score(segment_text).score
        )
    except Exception as exc:
        stats.record_failure()
        logger.warning("Scoring failed for record %s: %s", request.record_id, exc)
        raise

    stats.record_success()
    logger.info(
        "Scored record %s via hook %s (%d bytes, %s segments)",
        request.record_id,
        descriptor.hook_id,
        raw.content_length,
        len(segments) if segments is not None else "no",
    )
    return result
