from contextlib import asynccontextmanager
from fastapi import FastAPI

from email_proof.infrastructure.redis_cache.pool import close_redis, get_redis
from email_proof.logging import setup_logging
from email_proof.presentation.api import api
from email_proof.settings import get_settings

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    # startup
    get_redis()
    try:
        yield
    finally:
        # shutdown
        await close_redis()


def create_app() -> FastAPI:
    setup_logging(settings.log_level)
    app = FastAPI(title="Email Proof API", version="0.1.0", lifespan=lifespan)
    app.state.settings = settings
    app.include_router(api)
    return app


app = create_app()
