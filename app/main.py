import logging
from contextlib import asynccontextmanager

import redis.asyncio as redis
import sentry_sdk
from fastapi import FastAPI

from app.config import settings
from app.services.stats_service import FocusStatsTracker
from app.services.stats_store import StatsStore

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

# Initialize Sentry
if settings.SENTRY_DSN:
    sentry_sdk.init(
        dsn=settings.SENTRY_DSN,
        environment=settings.ENVIRONMENT,
        traces_sample_rate=0.2 if settings.ENVIRONMENT == "production" else 1.0,
        profiles_sample_rate=0.1,
        send_default_pii=False,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: connect Redis, then load and reconcile the stats once
    app.state.redis = redis.from_url(
        settings.REDIS_URL,
        decode_responses=True,
    )
    await app.state.redis.ping()

    app.state.stats_tracker = FocusStatsTracker(
        StatsStore(app.state.redis, settings.STATS_STORAGE_KEY)
    )
    await app.state.stats_tracker.load()

    yield

    # Shutdown
    await app.state.redis.close()


app = FastAPI(
    title="Focus Stats API",
    version="0.1.0",
    lifespan=lifespan,
)

from app.middleware.error_handler import register_error_handlers  # noqa: E402

register_error_handlers(app)

# Routers
from app.routers.stats import router as stats_router  # noqa: E402

app.include_router(stats_router)


@app.get("/health")
async def health():
    return {"status": "ok"}
