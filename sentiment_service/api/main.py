from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from sentiment_service.api.dependencies import get_hook_fetcher, get_hook_registry
from sentiment_service.api.routes.analyze import router as analyze_router
from sentiment_service.api.routes.status import router as status_router
from sentiment_service.api.routes.task import router as task_router


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    # Load the hook configuration up front so a broken config fails at startup.
    get_hook_registry()
    yield
    if get_hook_fetcher.cache_info().currsize:
        get_hook_fetcher().close()


app = FastAPI(
    title="Hooked Sentiment API",
    description="Sentiment analysis of direct text or text fetched from configured hooks",
    version="0.1.0",
    lifespan=lifespan,
)

app.include_router(analyze_router)
app.include_router(task_router)
app.include_router(status_router)
