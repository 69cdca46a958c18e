"""Pydantic request/response schemas for the sentiment API."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from sentiment_service.hooks.models import SeriesResult, TaskResult
from sentiment_service.scoring.models import Analysis


class AnalyzeRequest(BaseModel):
    """Request body for the /analyze endpoint."""

    text: str = Field(min_length=1)


class TaskRequestBody(BaseModel):
    """Request body for the /task endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    recording_id: str = Field(alias="recordingId")
    hook_id: str | None = Field(default=None, alias="hookId")


class WordScoreResponse(BaseModel):
    """Polarity of a single word."""

    word: str
    score: int


class AnalysisResponse(BaseModel):
    """Sentiment of a whole text."""

    score: int
    words: list[WordScoreResponse]
    language: str = "en"


class SegmentResponse(BaseModel):
    """A time-stamped segment with its independent score."""

    start: float
    end: float
    text: str
    score: int | float | None = None


class SeriesResponse(BaseModel):
    """Response body for timed hooks: whole-text analysis plus scored segments."""

    metadata: AnalysisResponse
    series: list[SegmentResponse]


class StatusResponse(BaseModel):
    """Response body for the status endpoints."""

    model_config = ConfigDict(populate_by_name=True)

    status: str
    scorer: str
    hooks: list[str]
    default_hook: str = Field(alias="defaultHook")
    stats: dict[str, int]


def analysis_response(analysis: Analysis) -> AnalysisResponse:
    return AnalysisResponse(
        score=analysis.score,
        words=[WordScoreResponse(word=w.word, score=w.score) for w in analysis.words],
        language=analysis.language,
    )


def task_response(result: TaskResult) -> AnalysisResponse | SeriesResponse:
    """Convert a pipeline result into its API schema."""
    if isinstance(result, SeriesResult):
        return SeriesResponse(
            metadata=analysis_response(result.metadata),
            series=[
                SegmentResponse(start=s.start, end=s.end, text=s.text, score=s.score)
                for s in result.series
            ],
        )
    return analysis_response(result)
