import logging
import time
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from sqlmodel import SQLModel

from src.api.error import register_error_handlers
from src.api.log_config import configure_logging
from src.api.routes import orders, admin_orders, admin_subscriptions
from src.depends import engine

logger = logging.getLogger(__name__)


def _create_lifespan(config):
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if config.AUTO_CREATE_TABLES:
            async with engine.begin() as conn:
                await conn.run_sync(SQLModel.metadata.create_all)
            logger.info("Database tables ensured")
        yield
        await engine.dispose()
        logger.info("Database engine disposed")

    return lifespan


def create_app(config) -> FastAPI:
    configure_logging(config.LOG_LEVEL)

    app = FastAPI(
        title="Order & Subscription Service",
        lifespan=_create_lifespan(config),
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=config.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    if config.ENABLE_LOGGING_MIDDLEWARE:
        @app.middleware("http")
        async def log_requests(request: Request, call_next):
            started = time.perf_counter()
            response = await call_next(request)
            elapsed_ms = (time.perf_counter() - started) * 1000
            logger.info(
                f"{request.method} {request.url.path} -> {response.status_code} ({elapsed_ms:.1f} ms)"
            )
            return response

    register_error_handlers(app)

    app.include_router(orders.router, prefix=config.API_PREFIX)
    app.include_router(admin_orders.router, prefix=config.API_PREFIX)
    app.include_router(admin_subscriptions.router, prefix=config.API_PREFIX)

    @app.get("/health")
    async def health():
        return {"ok": True}

    return app
