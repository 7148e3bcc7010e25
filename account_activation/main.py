import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from account_activation.infrastructure.db.pool import close_pool, get_pool
from account_activation.infrastructure.redis_cache.pool import (
    close_redis,
    get_redis,
    ping_redis,
)
from account_activation.logging import setup_logging
from account_activation.presentation.api import api
from account_activation.settings import get_settings

logger = logging.getLogger(__name__)

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    pool = get_pool()
    if pool.closed:
        await pool.open()

    get_redis()
    if not await ping_redis():
        # sessions are unusable until redis answers; /readyz reports it
        logger.warning("redis not reachable at startup")
    logger.info("api started", extra={"app_env": settings.app_env})

    try:
        yield
    finally:
        await close_redis()
        await close_pool()
        logger.info("api stopped")


def create_app() -> FastAPI:
    setup_logging(settings.log_level, env=settings.app_env)
    app = FastAPI(title="Account Activation API", version="0.1.0", lifespan=lifespan)
    app.state.settings = settings
    app.include_router(api)
    return app


app = create_app()
