"""
ERP backend — application entry point.
"""

from __future__ import annotations

import logging
import sys
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.errors import register_exception_handlers
from api.middleware import register_middleware
from api.routes import router as api_router
from auth.jwt import InsecureSecretError, SessionIssuer
from auth.routes import router as auth_router
from config.settings import Settings
from database.session import build_engine, build_session_factory, create_tables

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.INFO,
        format="%(asctime)s  %(levelname)-8s  %(name)s — %(message)s",
        stream=sys.stdout,
    )
    for _noisy in ("sqlalchemy.engine", "aiosqlite", "asyncio"):
        logging.getLogger(_noisy).setLevel(logging.WARNING)


def create_app(settings: Settings) -> FastAPI:
    """Build the app from an explicit ``Settings``; nothing is read globally."""
    if settings.is_production and settings.uses_default_secret:
        raise InsecureSecretError(
            "JWT_SECRET must be set to a non-default value in production"
        )

    engine = build_engine(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Creating database tables…")
        await create_tables(engine)
        logger.info("Application ready to accept requests.")
        yield
        await engine.dispose()

    app = FastAPI(
        title="ERP Backend",
        version="1.0.0",
        description="Authentication and read-only listings.",
        debug=settings.debug,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.session_factory = build_session_factory(engine)
    app.state.session_issuer = SessionIssuer(settings.jwt_secret)

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_middleware(app)
    register_exception_handlers(app)

    # Routes
    app.include_router(auth_router, prefix="/api/v1/auth")
    app.include_router(api_router, prefix="/api/v1")

    return app


def build_app() -> FastAPI:
    """Factory for ``uvicorn main:build_app --factory``; settings come from the environment."""
    settings = Settings()
    configure_logging(settings)
    return create_app(settings)


if __name__ == "__main__":
    settings = Settings()
    uvicorn.run(
        "main:build_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        log_level="debug" if settings.debug else "info",
    )
