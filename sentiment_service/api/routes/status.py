"""Status endpoints: liveness plus request counters."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends

from sentiment_service.api.dependencies import get_configured_scorer, get_hook_registry, get_stats
from sentiment_service.api.models import StatusResponse
from sentiment_service.hooks.registry import HookRegistry
from sentiment_service.scoring.models import Scorer
from sentiment_service.stats import ServiceStats

router = APIRouter()


@router.get("/", response_model=StatusResponse)
@router.get("/health", response_model=StatusResponse)
async def status(
    registry: Annotated[HookRegistry, Depends(get_hook_registry)],
    scorer: Annotated[Scorer, Depends(get_configured_scorer)],
    stats: Annotated[ServiceStats, Depends(get_stats)],
) -> StatusResponse:
    return StatusResponse(
        status="ok",
        scorer=type(scorer).__name__,
        hooks=registry.hook_ids,
        default_hook=registry.default_hook_id,
        stats=stats.snapshot(),
    )
