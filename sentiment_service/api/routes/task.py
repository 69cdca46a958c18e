"""Task endpoint: fetch text from a configured hook and score it."""

from __future__ import annotations

import asyncio
from typing import Annotated

from anthropic import APIStatusError
from fastapi import APIRouter, Depends, HTTPException

from sentiment_service.api.dependencies import (
    get_configured_scorer,
    get_hook_fetcher,
    get_hook_registry,
    get_stats,
)
from sentiment_service.api.models import (
    AnalysisResponse,
    SeriesResponse,
    TaskRequestBody,
    task_response,
)
from sentiment_service.hooks.errors import HookError, HookNotFound, URLFormatError
from sentiment_service.hooks.fetcher import HookFetcher
from sentiment_service.hooks.models import TaskRequest
from sentiment_service.hooks.pipeline import run_task
from sentiment_service.hooks.registry import HookRegistry
from sentiment_service.scoring.models import Scorer
from sentiment_service.stats import ServiceStats

router = APIRouter()


@router.post("/task", response_model=AnalysisResponse | SeriesResponse)
async def task(
    body: TaskRequestBody,
    registry: Annotated[HookRegistry, Depends(get_hook_registry)],
    fetcher: Annotated[HookFetcher, Depends(get_hook_fetcher)],
    scorer: Annotated[Scorer, Depends(get_configured_scorer)],
    stats: Annotated[ServiceStats, Depends(get_stats)],
) -> AnalysisResponse | SeriesResponse:
    """Fetch the record's text from a hook and run sentiment analysis on it.

    Untimed hooks return a single analysis. Timed hooks return
    ``{"metadata": <analysis of all text>, "series": [...]}`` where each
    segment carries its own score.

    Error mapping:
    - Unknown hook (or no default hook) -> 404
    - Hook URL invalid after substitution -> 500 (misconfigured hook)
    - Hook unreachable, unreadable or returning the wrong shape -> 502
    - Claude scorer unavailable -> 503
    """
    request = TaskRequest(record_id=body.recording_id, hook_id=body.hook_id)

    # The pipeline blocks on the outbound fetch; run it in a worker thread so
    # the event loop keeps serving other requests.
    try:
        result = await asyncio.to_thread(
            run_task,
            request,
            registry=registry,
            fetcher=fetcher,
            scorer=scorer,
            stats=stats,
        )
    except HookNotFound as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except URLFormatError as exc:
        raise HTTPException(status_code=500, detail=str(exc)) from exc
    except HookError as exc:
        raise HTTPException(status_code=502, detail=str(exc)) from exc
    except APIStatusError as exc:
        raise HTTPException(status_code=503, detail=f"Scorer unavailable: {exc.message}") from exc

    return task_response(result)
