"""LakePath FastAPI application factory."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from lakepath import __version__
from lakepath.config import settings
from lakepath.services import init_services, shutdown_services

logger = logging.getLogger(__name__)


@asynccontextmanager
async def _lifespan(app: FastAPI):
    """Startup / shutdown lifecycle."""
    _setup_logging()

    await init_services()
    logger.info(
        "LakePath v%s started (%s mode), listening on %s:%s",
        __version__, settings.mode, settings.host, settings.port,
    )

    try:
        yield
    finally:
        await shutdown_services()
        logger.info("LakePath shutting down")


def _setup_logging() -> None:
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    # The Azure SDK logs every HTTP request at INFO
    for noisy in ("azure", "azure.core.pipeline.policies.http_logging_policy", "azure.identity"):
        logging.getLogger(noisy).setLevel(logging.WARNING)


def create_app() -> FastAPI:
    """Application factory."""
    from lakepath.api.routes import api_router

    app = FastAPI(
        title=settings.app_name,
        version=__version__,
        debug=settings.debug,
        lifespan=_lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    app.include_router(api_router, prefix=settings.api_prefix)

    return app


app = create_app()


def run(**kwargs: Any) -> None:
    import uvicorn

    uvicorn.run(
        "lakepath.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        workers=settings.uvicorn_workers,
        log_level=settings.log_level.lower(),
        **kwargs,
    )


if __name__ == "__main__":
    run()
