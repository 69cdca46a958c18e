"""Analyze endpoint: score text supplied directly by the caller."""

from __future__ import annotations

import asyncio
from typing import Annotated

from anthropic import APIStatusError
from fastapi import APIRouter, Depends, HTTPException

from sentiment_service.api.dependencies import get_configured_scorer, get_stats
from sentiment_service.api.models import AnalysisResponse, AnalyzeRequest, analysis_response
from sentiment_service.scoring.models import Scorer
from sentiment_service.stats import ServiceStats

router = APIRouter()


@router.post("/analyze", response_model=AnalysisResponse)
async def analyze(
    request: AnalyzeRequest,
    scorer: Annotated[Scorer, Depends(get_configured_scorer)],
    stats: Annotated[ServiceStats, Depends(get_stats)],
) -> AnalysisResponse:
    """Run sentiment analysis on ``text`` and return the analysis."""
    try:
        analysis = await asyncio.to_thread(scorer.score, request.text)
    except APIStatusError as exc:
        # Claude API overloaded (529) or other upstream error when the Claude
        # scorer is configured.
        stats.record_failure()
        raise HTTPException(status_code=503, detail=f"Scorer unavailable: {exc.message}") from exc

    stats.record_success()
    return analysis_response(analysis)
