import logging
from contextlib import asynccontextmanager
from typing import Optional

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from starlette.middleware.cors import CORSMiddleware

from stockyapi import containers
from stockyapi.core.exception_handlers import register_exception_handlers
from stockyapi.logging_config import setup_logging
from stockyapi.routers import adjustment_router, health_router, reward_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    container: containers.Container = app.container  # type: ignore[attr-defined]
    settings = container.config()

    if settings.DB_CREATE_TABLES:
        container.database().create_tables()

    refresher = container.price_refresher() if settings.PRICE_REFRESHER_ENABLED else None
    if refresher is not None:
        await refresher.start()
    try:
        yield
    finally:
        if refresher is not None:
            await refresher.stop()
        container.database().dispose()


def create_app(container: Optional[containers.Container] = None) -> FastAPI:
    load_dotenv()
    container = container or containers.Container()
    settings = container.config()
    setup_logging(settings.LOG_LEVEL, sql_echo=settings.DEBUG)

    app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)
    app.container = container  # type: ignore[attr-defined]

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        logger.info(f"Request: {request.method} {request.url}")
        response = await call_next(request)
        logger.info(f"Response: {response.status_code}")
        return response

    register_exception_handlers(app)

    app.include_router(health_router.router)
    app.include_router(reward_router.router)
    app.include_router(adjustment_router.router)
    return app
