"""Time-series helpers: reduce segments to text and attach per-segment scores."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import replace

from sentiment_service.hooks.models import Segment, SeriesResult, TaskResult
from sentiment_service.scoring.models import Analysis


def reduce_series(segments: Sequence[Segment]) -> str:
    """Concatenate segment texts, each followed by a single space.

    The trailing space after the last segment is kept; existing consumers
    compare against it.
    """
    return "".join(f"{segment.text} " for segment in segments)


def assemble_result(
    whole: Analysis,
    segments: Sequence[Segment] | None,
    score_segment: Callable[[str], int | float],
) -> TaskResult:
    """Combine the whole-document analysis with independently scored segments.

    Args:
        whole: Analysis of the full (reduced) text.
        segments: Segments in hook order, or None for untimed hooks.
        score_segment: Scores one segment's text on its own, without
            neighbouring context.

    Returns:
        ``whole`` itself when there are no segments, otherwise a SeriesResult
        whose series keeps input order and timestamps.
    """
    if segments is None:
        return whole

    scored = [replace(segment, score=score_segment(segment.text)) for segment in segments]
    return SeriesResult(metadata=whole, series=scored)
